"""python-telegram-bot application and runner."""

import asyncio

from telegram.ext import Application

from neurochat.config import TelegramConfig


def create_telegram_app(config: TelegramConfig) -> Application:
    """Create a Telegram bot application.

    Updates are processed concurrently, one task per update.

    Args:
        config: Telegram connection settings.

    Returns:
        Configured Application instance.
    """
    return (
        Application.builder()
        .token(config.bot_token)
        .concurrent_updates(True)
        .build()
    )


class TelegramAppRunner:
    """Manage Telegram application execution.

    This class handles starting and stopping the application
    using long polling.
    """

    def __init__(self, app: Application) -> None:
        """Initialize the runner.

        Args:
            app: Application instance.
        """
        self._app = app
        self._started = False

    async def start(self) -> None:
        """Initialize the application and start polling."""
        await self._app.initialize()
        await self._app.start()
        await self._app.updater.start_polling()
        self._started = True

    async def stop(self) -> None:
        """Stop polling and shut the application down."""
        if not self._started:
            return
        self._started = False
        if self._app.updater.running:
            await self._app.updater.stop()
        await self._app.stop()
        await self._app.shutdown()

    async def close(self, timeout: float = 5.0) -> bool:
        """Stop the application with timeout.

        Args:
            timeout: Maximum seconds to wait for shutdown.

        Returns:
            True if stopped successfully, False if timed out.
        """
        try:
            await asyncio.wait_for(self.stop(), timeout=timeout)
            return True
        except asyncio.TimeoutError:
            return False
