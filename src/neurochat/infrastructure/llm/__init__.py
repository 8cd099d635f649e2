"""LLM integration."""

from neurochat.infrastructure.llm.client import LLMClient
from neurochat.infrastructure.llm.exceptions import (
    LLMAuthenticationError,
    LLMError,
    LLMRateLimitError,
    LLMTimeoutError,
)
from neurochat.infrastructure.llm.gateway import LiteLLMModelGateway

__all__ = [
    "LLMAuthenticationError",
    "LLMClient",
    "LLMError",
    "LLMRateLimitError",
    "LLMTimeoutError",
    "LiteLLMModelGateway",
]
