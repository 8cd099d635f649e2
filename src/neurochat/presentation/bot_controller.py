"""Bot command routing and the pending-command protocol."""

import logging
from html import escape

from neurochat.application.use_cases import ConversationUseCase
from neurochat.domain.entities import CharacterPreset, PendingCommand, User
from neurochat.domain.exceptions import ConversationError
from neurochat.domain.services import MessagingService
from neurochat.presentation.rendering import (
    render_character_info,
    render_character_list,
)

logger = logging.getLogger(__name__)

FETCH_USER_ERROR = (
    "An error occurred while fetching your data. Please try again later."
)
CALLBACK_FETCH_USER_ERROR = "An error occurred. Please try again."
MODEL_ERROR = "I'm sorry, I couldn't process your request. Please try again."
UNKNOWN_COMMAND = "Unknown command. Use /menu to see available options."
INVALID_CHARACTER_NUMBER = (
    "Invalid character number. Please enter a valid number from the list."
)

# Commands that wait for the next free-text message
PENDING_COMMANDS: dict[str, tuple[PendingCommand, str]] = {
    "/switchchar": (
        PendingCommand.SWITCH_CHARACTER,
        "Please enter the number of the character you want to switch to.",
    ),
    "/setprompt": (
        PendingCommand.SET_PROMPT,
        "Please enter the new prompt for the current character:",
    ),
    "/setgreeting": (
        PendingCommand.SET_GREETING,
        "Please enter the new greeting for the current character:",
    ),
    "/setcharname": (
        PendingCommand.SET_CHARACTER_NAME,
        "Please enter the new name for the current character:",
    ),
    "/setusername": (
        PendingCommand.SET_USER_NAME,
        "Please enter your new username:",
    ),
    "/setuserdesc": (
        PendingCommand.SET_USER_DESCRIPTION,
        "Please enter your new description:",
    ),
}

# (success, failure) replies for property updates
PROPERTY_REPLIES: dict[PendingCommand, tuple[str, str]] = {
    PendingCommand.SET_PROMPT: (
        "Prompt updated successfully!",
        "Failed to set prompt.",
    ),
    PendingCommand.SET_GREETING: (
        "Greeting updated successfully!",
        "Failed to set greeting.",
    ),
    PendingCommand.SET_CHARACTER_NAME: (
        "Character name updated successfully!",
        "Failed to set character name.",
    ),
    PendingCommand.SET_USER_NAME: (
        "Your username updated successfully!",
        "Failed to set your username.",
    ),
    PendingCommand.SET_USER_DESCRIPTION: (
        "Your description updated successfully!",
        "Failed to set your description.",
    ),
}


def parse_command(text: str) -> str:
    """Extract the command from a message, dropping arguments and @botname."""
    return text.split(maxsplit=1)[0].split("@", 1)[0]


class BotController:
    """Routes inbound messages and button presses to the conversation use case.

    Text starting with "/" is a command. Other text either answers the
    user's pending command or is sent to the model. All failures are
    turned into short apologies; details only go to the log.
    """

    def __init__(
        self,
        conversation: ConversationUseCase,
        messaging: MessagingService,
    ) -> None:
        """Initialize the controller.

        Args:
            conversation: Conversation use case.
            messaging: Service for sending and deleting messages.
        """
        self._conversation = conversation
        self._messaging = messaging

    async def handle_message(
        self,
        user_id: int,
        username: str,
        chat_id: int,
        message_id: int,
        text: str,
    ) -> None:
        """Handle an inbound text message.

        Args:
            user_id: Sender's user ID.
            username: Sender's username (may be empty).
            chat_id: Chat the message was sent in.
            message_id: ID of the inbound message.
            text: Message text.
        """
        user = await self._load_user(user_id, username, chat_id)
        if user is None:
            return

        if user.last_message_id != 0:
            await self._messaging.delete_message(chat_id, user.last_message_id)
            user.last_message_id = 0
            await self._save_quietly(user, "resetting last message ID")

        if text.startswith("/"):
            await self._handle_command(user, chat_id, parse_command(text), message_id)
        else:
            await self._handle_text(user, chat_id, text)

    async def handle_callback(
        self,
        callback_id: str,
        user_id: int,
        username: str,
        chat_id: int,
        message_id: int,
        data: str,
    ) -> None:
        """Handle a menu button press.

        The button's callback data is handled as a command and the menu
        message is replaced by the command's reply.

        Args:
            callback_id: Callback query ID.
            user_id: User who pressed the button.
            username: User's username (may be empty).
            chat_id: Chat of the menu message.
            message_id: ID of the menu message.
            data: Callback data (a command such as "/newchar").
        """
        user = await self._load_user(
            user_id, username, chat_id, CALLBACK_FETCH_USER_ERROR
        )
        if user is not None:
            if user.last_message_id not in (0, message_id):
                await self._messaging.delete_message(chat_id, user.last_message_id)
            await self._handle_command(user, chat_id, parse_command(data), message_id)

        await self._messaging.answer_callback(callback_id)

    async def _load_user(
        self,
        user_id: int,
        username: str,
        chat_id: int,
        error_text: str = FETCH_USER_ERROR,
    ) -> User | None:
        """Load the user, replying with error_text on failure."""
        display_name = username or f"User{user_id}"
        try:
            return await self._conversation.get_or_create_user(user_id, display_name)
        except ConversationError:
            logger.exception("Failed to get or create user %d", user_id)
            await self._messaging.send_message(chat_id, error_text)
            return None

    async def _handle_command(
        self,
        user: User,
        chat_id: int,
        command: str,
        source_message_id: int | None,
    ) -> None:
        """Run a command and send its reply.

        Any pending command is abandoned first. For known commands the
        message that triggered it is deleted and the reply's ID is kept
        so it can be cleaned up on the next message.
        """
        if user.pending_command:
            user.pending_command = ""
            await self._save_quietly(user, "resetting pending command")

        result = await self._run_command(user, command)
        if result is None:
            await self._messaging.send_message(chat_id, UNKNOWN_COMMAND)
            return

        response, with_menu = result
        if source_message_id is not None:
            await self._messaging.delete_message(chat_id, source_message_id)
        await self._send_tracked(user, chat_id, response, with_menu=with_menu)

    async def _run_command(self, user: User, command: str) -> tuple[str, bool] | None:
        """Execute a command.

        Returns:
            (reply, whether to attach the menu), or None for unknown commands.
        """
        if command in PENDING_COMMANDS:
            pending, prompt = PENDING_COMMANDS[command]
            user.pending_command = pending.value
            await self._save_quietly(user, "setting pending command")
            return prompt, False

        if command == "/start":
            return (
                f"Hello, {escape(user.user_name)}! I am your AI assistant. "
                "How can I help you today? "
                "You can use /menu to see available options.",
                False,
            )
        if command == "/menu":
            return "What would you like to do?", True
        if command == "/newchar":
            return await self._add_character(user), False
        if command == "/listchar":
            return render_character_list(user), False
        if command == "/clearchat":
            return await self._clear_chat(user), False
        if command == "/charinfo":
            info = render_character_info(user, self._conversation.chat_history_limit)
            return info, False
        return None

    async def _add_character(self, user: User) -> str:
        preset = CharacterPreset()
        try:
            await self._conversation.add_character(user, preset)
        except ConversationError:
            logger.exception("Failed to add new character for user %d", user.id)
            return "Failed to add new character."
        return f"New character '{escape(preset.name)}' added and set as current."

    async def _clear_chat(self, user: User) -> str:
        try:
            await self._conversation.clear_chat_history(user)
        except ConversationError:
            logger.exception("Failed to clear chat history for user %d", user.id)
            return "Failed to clear chat history."
        return "Chat history cleared."

    async def _handle_text(self, user: User, chat_id: int, text: str) -> None:
        """Answer a pending command or ask the model."""
        if user.pending_command:
            response = await self._handle_pending_command(user, text)
            user.pending_command = ""
            await self._save_quietly(user, "handling pending command")
        else:
            try:
                reply = await self._conversation.respond_to_user(user, text)
                response = escape(reply)
            except ConversationError:
                logger.exception("Error getting model response for user %d", user.id)
                response = MODEL_ERROR

        await self._send_tracked(user, chat_id, response)

    async def _handle_pending_command(self, user: User, text: str) -> str:
        """Apply the user's input to the pending command.

        Returns:
            Reply text.
        """
        try:
            pending = PendingCommand(user.pending_command)
        except ValueError:
            logger.warning(
                "Unknown pending command for user %d: %s", user.id, user.pending_command
            )
            return "Unknown pending command state."

        if pending is PendingCommand.SWITCH_CHARACTER:
            return await self._switch_character(user, text)

        prop = pending.user_property
        assert prop is not None
        success, failure = PROPERTY_REPLIES[pending]
        try:
            await self._conversation.update_user_property(user, prop, text)
        except ConversationError:
            logger.exception("Failed to update %s for user %d", prop.name, user.id)
            return failure
        return success

    async def _switch_character(self, user: User, text: str) -> str:
        """Switch to the character with the given 1-based number."""
        try:
            number = int(text.strip())
        except ValueError:
            return INVALID_CHARACTER_NUMBER
        if not user.has_character(number - 1):
            return INVALID_CHARACTER_NUMBER

        try:
            await self._conversation.change_current_character(user, number - 1)
        except ConversationError:
            logger.exception("Failed to switch character for user %d", user.id)
            return "Failed to switch character."
        return f"Switched to character: {escape(user.current_character.name)}"

    async def _send_tracked(
        self, user: User, chat_id: int, text: str, *, with_menu: bool = False
    ) -> None:
        """Send a reply and remember its ID for later cleanup."""
        sent_message_id = await self._messaging.send_message(
            chat_id, text, with_menu=with_menu
        )
        if sent_message_id is not None:
            user.last_message_id = sent_message_id
            await self._save_quietly(user, "saving last message ID")

    async def _save_quietly(self, user: User, action: str) -> None:
        """Save bookkeeping changes, logging failures instead of raising."""
        try:
            await self._conversation.save_user(user)
        except ConversationError:
            logger.exception("Failed to save user %d after %s", user.id, action)
