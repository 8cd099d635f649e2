"""アプリケーションのエントリポイント"""

import asyncio
import logging
import signal
import sys
from pathlib import Path

from dotenv import load_dotenv

from neurochat.application.use_cases import ConversationUseCase
from neurochat.config import Config, ConfigError, LoggingConfig, load_config
from neurochat.infrastructure.llm import LiteLLMModelGateway, LLMClient
from neurochat.infrastructure.persistence import DatabaseManager, SQLiteUserRepository
from neurochat.infrastructure.telegram import (
    TelegramAppRunner,
    TelegramMessagingService,
    create_telegram_app,
)
from neurochat.presentation import BotController, register_handlers

# Default logging for early startup
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def configure_logging(
    config: LoggingConfig | None, telegram_debug: bool = False
) -> None:
    """Configure logging based on config.

    Args:
        config: Logging configuration. If None, uses defaults.
        telegram_debug: Log python-telegram-bot internals at DEBUG level.
    """
    if telegram_debug:
        logging.getLogger("telegram").setLevel(logging.DEBUG)

    if config is None:
        return

    root_logger = logging.getLogger()

    level = getattr(logging, config.level.upper(), logging.INFO)
    root_logger.setLevel(level)

    # Update handler format if specified
    if root_logger.handlers:
        formatter = logging.Formatter(config.format)
        for handler in root_logger.handlers:
            handler.setFormatter(formatter)

    # Configure individual loggers
    if config.loggers:
        for logger_name, logger_level in config.loggers.items():
            individual_logger = logging.getLogger(logger_name)
            individual_level = getattr(logging, logger_level.upper(), logging.INFO)
            individual_logger.setLevel(individual_level)
            logger.debug(
                "Set logger '%s' to level %s", logger_name, logger_level.upper()
            )


def load_app_config(config_path: Path) -> Config:
    """設定を読み込む。失敗した場合はプロセスを終了する"""
    load_dotenv()

    if not config_path.exists():
        logger.error("%s not found", config_path)
        sys.exit(1)

    try:
        return load_config(config_path)
    except ConfigError as e:
        logger.error("Failed to load config: %s", e)
        sys.exit(1)


async def main() -> None:
    """アプリケーションを起動する"""
    config = load_app_config(Path("config.yaml"))
    configure_logging(config.logging, telegram_debug=config.telegram.debug)

    # Initialize database
    db_manager = DatabaseManager(
        config.database.path,
        connect_timeout=config.database.connect_timeout_seconds,
    )
    await db_manager.create_tables()
    user_repository = SQLiteUserRepository(db_manager.get_session)
    logger.info("Database initialized: %s", config.database.path)

    llm_client = LLMClient(config.llm)
    debug_llm_messages = bool(config.logging and config.logging.debug_llm_messages)
    model_gateway = LiteLLMModelGateway(
        llm_client,
        debug_llm_messages=debug_llm_messages,
    )
    logger.info("Model gateway initialized with base URL: %s", config.llm.base_url)

    conversation = ConversationUseCase(
        user_repository=user_repository,
        model_gateway=model_gateway,
        chat_history_limit=config.chat.history_limit,
    )

    app = create_telegram_app(config.telegram)
    controller = BotController(
        conversation=conversation,
        messaging=TelegramMessagingService(app.bot),
    )
    register_handlers(app, controller)

    runner = TelegramAppRunner(app)

    logger.info("Starting Telegram polling...")
    await runner.start()

    # Setup signal handlers for graceful shutdown
    stop_event = asyncio.Event()
    loop = asyncio.get_running_loop()

    def shutdown_handler() -> None:
        logger.info("Received shutdown signal...")
        stop_event.set()

    loop.add_signal_handler(signal.SIGINT, shutdown_handler)
    loop.add_signal_handler(signal.SIGTERM, shutdown_handler)

    await stop_event.wait()

    logger.info("Shutting down...")

    closed = await runner.close(timeout=5.0)
    if not closed:
        logger.warning("Runner close timed out")

    await db_manager.close()

    logger.info("Shutdown complete")


def run() -> None:
    """Run the async main function."""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Shutting down...")


if __name__ == "__main__":
    run()
