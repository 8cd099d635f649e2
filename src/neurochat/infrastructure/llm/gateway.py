"""LiteLLM implementation of ModelGateway."""

import logging

from neurochat.domain.entities import ChatMessage, GenerationConfig
from neurochat.infrastructure.llm.client import LLMClient

logger = logging.getLogger(__name__)


class LiteLLMModelGateway:
    """ModelGateway backed by LLMClient.

    Converts chat messages to the OpenAI wire format and maps the
    generation config onto the llama-server request fields.
    """

    def __init__(
        self,
        client: LLMClient,
        *,
        debug_llm_messages: bool = False,
    ) -> None:
        """Initialize the gateway.

        Args:
            client: LLMClient instance.
            debug_llm_messages: If True, log LLM messages at INFO level.
        """
        self._client = client
        self._debug_llm_messages = debug_llm_messages

    async def complete_chat(
        self,
        messages: list[ChatMessage],
        config: GenerationConfig,
    ) -> str:
        """Get a completion for the conversation.

        Raises:
            LLMError: If the request fails.
        """
        payload = [message.to_dict() for message in messages]

        if self._should_log():
            self._log_messages(payload)

        response = await self._client.complete(
            payload,
            temperature=config.temperature,
            top_p=config.top_p,
            max_tokens=config.max_tokens,
            extra_body={
                "top_k": config.top_k,
                "repeat_penalty": config.repeat_penalty,
            },
        )

        if self._should_log():
            self._log_response(response)

        return response

    def _should_log(self) -> bool:
        """Check if logging should occur."""
        return self._debug_llm_messages or logger.isEnabledFor(logging.DEBUG)

    def _log_messages(self, messages: list[dict[str, str]]) -> None:
        """Log LLM request messages."""
        log_func = logger.info if self._debug_llm_messages else logger.debug
        log_func("=== LLM Request Messages ===")
        for i, msg in enumerate(messages):
            log_func("[%d] role=%s", i, msg.get("role", "unknown"))
            log_func("    content: %s", msg.get("content", ""))
        log_func("=== End of Messages ===")

    def _log_response(self, response: str) -> None:
        """Log LLM response."""
        log_func = logger.info if self._debug_llm_messages else logger.debug
        log_func("=== LLM Response ===")
        log_func("response: %s", response)
        log_func("=== End of Response ===")
