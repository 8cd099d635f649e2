"""Telegram update handlers."""

import logging

from telegram import Update
from telegram.ext import (
    Application,
    CallbackQueryHandler,
    ContextTypes,
    MessageHandler,
    filters,
)

from neurochat.presentation.bot_controller import BotController

logger = logging.getLogger(__name__)


def register_handlers(app: Application, controller: BotController) -> None:
    """Register Telegram update handlers.

    Args:
        app: Application instance.
        controller: Controller that processes messages and button presses.
    """

    async def handle_message(
        update: Update, context: ContextTypes.DEFAULT_TYPE
    ) -> None:
        """Handle text messages, commands included."""
        message = update.effective_message
        user = update.effective_user
        chat = update.effective_chat
        if not message or not message.text or not user or user.is_bot or not chat:
            return

        logger.info("Processing message: user=%d, chat=%d", user.id, chat.id)

        try:
            await controller.handle_message(
                user_id=user.id,
                username=user.username or "",
                chat_id=chat.id,
                message_id=message.message_id,
                text=message.text,
            )
        except Exception:
            logger.exception("Error handling message from user %d", user.id)

    async def handle_callback(
        update: Update, context: ContextTypes.DEFAULT_TYPE
    ) -> None:
        """Handle inline menu button presses."""
        query = update.callback_query
        if query is None or query.message is None:
            return

        logger.info(
            "Processing callback: user=%d, data=%s", query.from_user.id, query.data
        )

        try:
            await controller.handle_callback(
                callback_id=query.id,
                user_id=query.from_user.id,
                username=query.from_user.username or "",
                chat_id=query.message.chat.id,
                message_id=query.message.message_id,
                data=query.data or "",
            )
        except Exception:
            logger.exception(
                "Error handling callback from user %d", query.from_user.id
            )

    app.add_handler(MessageHandler(filters.TEXT, handle_message))
    app.add_handler(CallbackQueryHandler(handle_callback))
