"""Telegram integration."""

from neurochat.infrastructure.telegram.client import (
    TelegramAppRunner,
    create_telegram_app,
)
from neurochat.infrastructure.telegram.keyboards import create_main_menu
from neurochat.infrastructure.telegram.messaging import TelegramMessagingService

__all__ = [
    "TelegramAppRunner",
    "TelegramMessagingService",
    "create_main_menu",
    "create_telegram_app",
]
