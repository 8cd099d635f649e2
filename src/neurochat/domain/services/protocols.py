"""Domain service protocols."""

from typing import Protocol

from neurochat.domain.entities import ChatMessage, GenerationConfig


class ModelGateway(Protocol):
    """Language model abstraction.

    Implementations send an ordered message sequence to an inference
    endpoint and return the reply text.
    """

    async def complete_chat(
        self,
        messages: list[ChatMessage],
        config: GenerationConfig,
    ) -> str:
        """Get a completion for the conversation.

        Args:
            messages: Messages in order, system prompt first.
            config: Generation parameters.

        Returns:
            Reply text.

        Raises:
            ModelError: If the model call fails or times out.
        """
        ...


class MessagingService(Protocol):
    """Messaging abstraction (platform-independent).

    This protocol defines what the bot controller needs from
    the chat platform.
    """

    async def send_message(
        self,
        chat_id: int,
        text: str,
        with_menu: bool = False,
    ) -> int | None:
        """Send a message to a chat.

        Args:
            chat_id: Target chat ID.
            text: Message content.
            with_menu: Attach the main menu keyboard.

        Returns:
            ID of the sent message, or None if sending failed.
        """
        ...

    async def delete_message(self, chat_id: int, message_id: int) -> None:
        """Delete a message from a chat.

        Args:
            chat_id: Chat ID.
            message_id: Message to delete.
        """
        ...

    async def answer_callback(self, callback_id: str) -> None:
        """Acknowledge a callback query.

        Args:
            callback_id: Callback query ID.
        """
        ...
