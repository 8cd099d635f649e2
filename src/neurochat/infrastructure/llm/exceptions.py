"""LLM-related exceptions."""

from neurochat.domain.exceptions import ModelError


class LLMError(ModelError):
    """Base exception for LLM-related errors."""


class LLMTimeoutError(LLMError):
    """The model did not answer before the deadline."""


class LLMRateLimitError(LLMError):
    """Rate limit exceeded error."""


class LLMAuthenticationError(LLMError):
    """Authentication error (invalid API key, etc.)."""
