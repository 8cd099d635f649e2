"""Presentation layer."""

from neurochat.presentation.bot_controller import BotController
from neurochat.presentation.telegram_handlers import register_handlers

__all__ = ["BotController", "register_handlers"]
