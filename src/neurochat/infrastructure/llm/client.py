"""LLM client wrapper."""

import logging
from typing import Any

import litellm
from litellm.exceptions import AuthenticationError, RateLimitError, Timeout

from neurochat.config import LLMConfig
from neurochat.infrastructure.llm.exceptions import (
    LLMAuthenticationError,
    LLMError,
    LLMRateLimitError,
    LLMTimeoutError,
)

logger = logging.getLogger(__name__)


class LLMClient:
    """LiteLLM wrapper client for an OpenAI-compatible llama-server.

    Requests go to POST {base_url}/v1/chat/completions through LiteLLM's
    "openai" provider. Parameters the provider does not know about are
    passed with extra_body.
    """

    def __init__(self, config: LLMConfig) -> None:
        """Initialize the client.

        Args:
            config: LLM configuration (endpoint, model name, timeout).
        """
        self._config = config

    async def complete(
        self,
        messages: list[dict[str, str]],
        extra_body: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> str:
        """Execute chat completion.

        Args:
            messages: OpenAI-format message list.
                [{"role": "system", "content": "..."}, ...]
            extra_body: Extra JSON fields added to the request body.
            **kwargs: Additional parameters (temperature, top_p, max_tokens...).

        Returns:
            Generated text.

        Raises:
            LLMTimeoutError: The request timed out.
            LLMAuthenticationError: Invalid API key.
            LLMRateLimitError: Rate limit exceeded.
            LLMError: Other API errors or an empty choices list.
        """
        params: dict[str, Any] = {
            "model": f"openai/{self._config.model}",
            "api_base": f"{self._config.base_url}/v1",
            "api_key": self._config.api_key,
            "timeout": self._config.timeout_seconds,
            "messages": messages,
            **kwargs,
        }
        if extra_body:
            params["extra_body"] = extra_body

        logger.debug("LLM request: model=%s", params["model"])

        try:
            response = await litellm.acompletion(**params)
        except Timeout as e:
            logger.error("LLM request timed out: %s", e)
            raise LLMTimeoutError(str(e)) from e
        except AuthenticationError as e:
            logger.error("LLM authentication error: %s", e)
            raise LLMAuthenticationError(str(e)) from e
        except RateLimitError as e:
            logger.warning("LLM rate limit exceeded: %s", e)
            raise LLMRateLimitError(str(e)) from e
        except Exception as e:
            logger.error("LLM error: %s", e)
            raise LLMError(str(e)) from e

        if not response.choices:
            logger.error("LLM returned no choices")
            raise LLMError("No response choices from the model")

        logger.debug("LLM response received")
        return response.choices[0].message.content or ""
