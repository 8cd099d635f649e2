"""Tests for Telegram update handlers."""

from unittest.mock import AsyncMock, MagicMock, Mock

import pytest
from telegram.ext import CallbackQueryHandler, MessageHandler

from neurochat.presentation import register_handlers


@pytest.fixture
def mock_controller() -> Mock:
    """Create mock controller."""
    controller = Mock()
    controller.handle_message = AsyncMock()
    controller.handle_callback = AsyncMock()
    return controller


@pytest.fixture
def handlers(mock_controller: Mock) -> dict[type, object]:
    """Register handlers on a mock app and return their callbacks."""
    app = MagicMock()
    register_handlers(app, mock_controller)
    registered = [c.args[0] for c in app.add_handler.call_args_list]
    return {type(handler): handler.callback for handler in registered}


def create_message_update(
    text: str | None = "Hello", is_bot: bool = False, username: str | None = "alice"
) -> MagicMock:
    """Create a mock update carrying a text message."""
    update = MagicMock()
    update.effective_message.text = text
    update.effective_message.message_id = 10
    update.effective_user.id = 42
    update.effective_user.is_bot = is_bot
    update.effective_user.username = username
    update.effective_chat.id = 4242
    return update


def create_callback_update(data: str = "/newchar") -> MagicMock:
    """Create a mock update carrying a callback query."""
    update = MagicMock()
    update.callback_query.id = "cb-1"
    update.callback_query.data = data
    update.callback_query.from_user.id = 42
    update.callback_query.from_user.username = "alice"
    update.callback_query.message.chat.id = 4242
    update.callback_query.message.message_id = 11
    return update


class TestRegisterHandlers:
    """register_handlers tests."""

    def test_registers_both_handlers(self, handlers: dict[type, object]) -> None:
        """Test that message and callback handlers are added."""
        assert set(handlers) == {MessageHandler, CallbackQueryHandler}


class TestMessageHandler:
    """Text message handler tests."""

    async def test_forwards_message(
        self, handlers: dict[type, object], mock_controller: Mock
    ) -> None:
        """Test that text messages reach the controller."""
        await handlers[MessageHandler](create_message_update(), MagicMock())

        mock_controller.handle_message.assert_awaited_once_with(
            user_id=42,
            username="alice",
            chat_id=4242,
            message_id=10,
            text="Hello",
        )

    async def test_missing_username(
        self, handlers: dict[type, object], mock_controller: Mock
    ) -> None:
        """Test that a missing username is passed as empty."""
        await handlers[MessageHandler](
            create_message_update(username=None), MagicMock()
        )

        assert mock_controller.handle_message.call_args.kwargs["username"] == ""

    async def test_ignores_bots(
        self, handlers: dict[type, object], mock_controller: Mock
    ) -> None:
        """Test that messages from bots are ignored."""
        await handlers[MessageHandler](create_message_update(is_bot=True), MagicMock())

        mock_controller.handle_message.assert_not_awaited()

    async def test_ignores_empty_text(
        self, handlers: dict[type, object], mock_controller: Mock
    ) -> None:
        """Test that messages without text are ignored."""
        await handlers[MessageHandler](create_message_update(text=None), MagicMock())

        mock_controller.handle_message.assert_not_awaited()

    async def test_controller_error_is_logged(
        self, handlers: dict[type, object], mock_controller: Mock
    ) -> None:
        """Test that unexpected errors do not escape the handler."""
        mock_controller.handle_message.side_effect = RuntimeError("boom")

        await handlers[MessageHandler](create_message_update(), MagicMock())


class TestCallbackHandler:
    """Callback query handler tests."""

    async def test_forwards_callback(
        self, handlers: dict[type, object], mock_controller: Mock
    ) -> None:
        """Test that button presses reach the controller."""
        await handlers[CallbackQueryHandler](create_callback_update(), MagicMock())

        mock_controller.handle_callback.assert_awaited_once_with(
            callback_id="cb-1",
            user_id=42,
            username="alice",
            chat_id=4242,
            message_id=11,
            data="/newchar",
        )

    async def test_ignores_query_without_message(
        self, handlers: dict[type, object], mock_controller: Mock
    ) -> None:
        """Test that queries without a message are ignored."""
        update = create_callback_update()
        update.callback_query.message = None

        await handlers[CallbackQueryHandler](update, MagicMock())

        mock_controller.handle_callback.assert_not_awaited()
