"""Conversation use case."""

import logging
from datetime import datetime, timezone

from neurochat.domain.entities import (
    CharacterPreset,
    ChatMessage,
    GenerationConfig,
    Role,
    User,
    UserProperty,
)
from neurochat.domain.exceptions import (
    InvalidIndexError,
    InvalidPropertyError,
    PersistError,
)
from neurochat.domain.repositories import UserRepository
from neurochat.domain.services import ModelGateway

logger = logging.getLogger(__name__)

DEFAULT_GENERATION_CONFIG = GenerationConfig()


class ConversationUseCase:
    """Business rules for users, characters and chat histories.

    This is the whole surface the chat platform adapter may call. The use
    case keeps no mutable state of its own: every operation works on the
    User passed in and saves it through the repository.
    """

    def __init__(
        self,
        user_repository: UserRepository,
        model_gateway: ModelGateway,
        chat_history_limit: int = 10,
        generation_config: GenerationConfig = DEFAULT_GENERATION_CONFIG,
    ) -> None:
        """Initialize the use case.

        Args:
            user_repository: Repository for loading and saving users.
            model_gateway: Gateway to the language model.
            chat_history_limit: Maximum number of messages kept per character.
            generation_config: Sampling parameters for model calls.
        """
        self._user_repository = user_repository
        self._model_gateway = model_gateway
        self._chat_history_limit = chat_history_limit
        self._generation_config = generation_config

    @property
    def chat_history_limit(self) -> int:
        """Maximum number of messages kept per character."""
        return self._chat_history_limit

    async def get_or_create_user(self, user_id: int, display_name: str) -> User:
        """Load a user, creating it on first contact.

        A changed display name is saved on a best-effort basis. The returned
        user always has request_time set to now; that refresh is saved by
        whatever the caller does next.

        Args:
            user_id: Telegram user ID.
            display_name: Current display name on the platform.

        Returns:
            The loaded or newly created user.

        Raises:
            LoadError: If loading fails.
            PersistError: If a new user cannot be saved.
        """
        user = await self._user_repository.find_by_id(user_id)

        if user is None:
            user = User(id=user_id, user_name=display_name)
            await self._user_repository.save(user)
            logger.info("Created new user: %d", user_id)
        elif user.user_name != display_name:
            user.user_name = display_name
            try:
                await self._user_repository.save(user)
            except PersistError:
                logger.exception("Failed to update user name for user %d", user_id)

        user.request_time = datetime.now(timezone.utc)
        return user

    async def save_user(self, user: User) -> None:
        """Save the user as is.

        Raises:
            PersistError: If saving fails.
        """
        await self._user_repository.save(user)

    async def respond_to_user(self, user: User, user_text: str) -> str:
        """Send the user's message to the current character and record the reply.

        Processing flow:
        1. Append the user message to the current character's chat
        2. Trim the chat to the history limit
        3. Save the user
        4. Build the model messages and expand placeholders
        5. Call the model
        6. Append the reply, trim and save again

        A failure in step 3 leaves the appended message in memory, so the
        caller must not retry blindly. A failure in step 6 is only logged:
        the reply is returned but not recorded.

        Args:
            user: The user sending the message.
            user_text: Message text.

        Returns:
            The model reply.

        Raises:
            PersistError: If the user message cannot be saved.
            ModelError: If the model call fails.
        """
        self._append_message(user, ChatMessage(role=Role.USER, content=user_text))
        try:
            await self._user_repository.save(user)
        except PersistError:
            logger.error("Failed to save user %d after adding message", user.id)
            raise

        messages = self._apply_placeholders(
            user, user.current_character.messages_for_model()
        )

        reply = await self._model_gateway.complete_chat(
            messages, self._generation_config
        )

        self._append_message(user, ChatMessage(role=Role.ASSISTANT, content=reply))
        try:
            await self._user_repository.save(user)
        except PersistError:
            logger.exception("Failed to save model reply for user %d", user.id)

        return reply

    async def add_character(self, user: User, preset: CharacterPreset) -> None:
        """Add a character and make it the current one.

        Raises:
            PersistError: If saving fails.
        """
        preset.id = len(user.characters)
        user.characters.append(preset)
        user.current_character_index = len(user.characters) - 1
        await self._user_repository.save(user)

    async def clear_chat_history(self, user: User) -> None:
        """Clear the current character's chat.

        Raises:
            PersistError: If saving fails.
        """
        user.current_character.chat = []
        await self._user_repository.save(user)

    async def update_user_property(
        self, user: User, prop: UserProperty, value: str
    ) -> None:
        """Set a single user or character property.

        Args:
            user: The user to update.
            prop: Property to set.
            value: New value. Expanded against the user for properties
                that allow placeholders.

        Raises:
            InvalidPropertyError: If prop is not a UserProperty.
            PersistError: If saving fails.
        """
        if not isinstance(prop, UserProperty):
            raise InvalidPropertyError(prop)

        if prop.expand_placeholders:
            value = user.replace_placeholders(value)

        target: object = user if prop.target == "user" else user.current_character
        setattr(target, prop.attribute, value)
        await self._user_repository.save(user)

    async def change_current_character(self, user: User, index: int) -> None:
        """Switch the active character.

        Raises:
            InvalidIndexError: If index is out of range. Nothing is changed.
            PersistError: If saving fails.
        """
        if not user.has_character(index):
            raise InvalidIndexError(index, len(user.characters))
        user.current_character_index = index
        await self._user_repository.save(user)

    def _append_message(self, user: User, message: ChatMessage) -> None:
        """Append a message to the current character and enforce the limit."""
        user.current_character.chat.append(message)
        user.trim_chat_history(self._chat_history_limit)

    def _apply_placeholders(
        self, user: User, messages: list[ChatMessage]
    ) -> list[ChatMessage]:
        """Expand placeholders in model messages.

        Every message is expanded against the user. Non-system messages are
        expanded against the current character as well.
        """
        character = user.current_character
        processed: list[ChatMessage] = []
        for message in messages:
            content = user.replace_placeholders(message.content)
            if message.role is not Role.SYSTEM:
                content = character.replace_placeholders(content)
            processed.append(ChatMessage(role=message.role, content=content))
        return processed
