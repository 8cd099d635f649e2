"""Telegram messaging service."""

import logging

from telegram import Bot
from telegram.constants import ParseMode
from telegram.error import TelegramError

from neurochat.infrastructure.telegram.keyboards import create_main_menu

logger = logging.getLogger(__name__)


class TelegramMessagingService:
    """Telegram implementation of MessagingService.

    Messages are sent in HTML parse mode. Transport failures are logged
    and never raised: a failed send returns None.
    """

    def __init__(self, bot: Bot) -> None:
        """Initialize the service.

        Args:
            bot: Telegram Bot instance.
        """
        self._bot = bot

    async def send_message(
        self,
        chat_id: int,
        text: str,
        with_menu: bool = False,
    ) -> int | None:
        """Send a message to a chat.

        Args:
            chat_id: Target chat ID.
            text: Message content (HTML).
            with_menu: Attach the main menu keyboard.

        Returns:
            ID of the sent message, or None if sending failed.
        """
        try:
            message = await self._bot.send_message(
                chat_id=chat_id,
                text=text,
                parse_mode=ParseMode.HTML,
                reply_markup=create_main_menu() if with_menu else None,
            )
        except TelegramError as e:
            logger.error("Error sending message to chat %d: %s", chat_id, e)
            return None
        return message.message_id

    async def delete_message(self, chat_id: int, message_id: int) -> None:
        """Delete a message, logging failures."""
        try:
            await self._bot.delete_message(chat_id=chat_id, message_id=message_id)
        except TelegramError as e:
            logger.error(
                "Failed to delete message %d in chat %d: %s", message_id, chat_id, e
            )

    async def answer_callback(self, callback_id: str) -> None:
        """Answer a callback query to stop the button's loading indicator."""
        try:
            await self._bot.answer_callback_query(callback_query_id=callback_id)
        except TelegramError as e:
            logger.error("Failed to answer callback query: %s", e)
