"""User entity."""

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone

from neurochat.domain.entities.character_preset import CharacterPreset

_PLACEHOLDER_PATTERN = re.compile(r"\{\{(user|char)\}\}")


@dataclass
class User:
    """Bot user and the aggregate root of all conversation state.

    Character presets and their chat histories only exist inside a User,
    and the whole aggregate is loaded and saved as one document.

    Attributes:
        id: Telegram user ID.
        user_name: Name substituted for {{user}}.
        user_description: Free-form description of the user.
        characters: Character presets. Never empty.
        current_character_index: Index of the active character.
        request_time: Time of the last inbound request.
        pending_command: Tag of the command awaiting free-text input ("" = none).
        last_message_id: ID of the last message the bot sent to the user.
    """

    id: int
    user_name: str
    user_description: str = ""
    characters: list[CharacterPreset] = field(
        default_factory=lambda: [CharacterPreset()]
    )
    current_character_index: int = 0
    request_time: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    pending_command: str = ""
    last_message_id: int = 0

    def __post_init__(self) -> None:
        self.restore_invariants()

    def restore_invariants(self) -> None:
        """Make sure there is at least one character and the index is valid.

        Called right after a user is built or deserialized so that
        current_character never has to check the index itself.
        """
        if not self.characters:
            self.characters = [CharacterPreset()]
            self.current_character_index = 0
        if not 0 <= self.current_character_index < len(self.characters):
            self.current_character_index = 0

    @property
    def current_character(self) -> CharacterPreset:
        """The active character preset."""
        return self.characters[self.current_character_index]

    def has_character(self, index: int) -> bool:
        """Check if index points at an existing character."""
        return 0 <= index < len(self.characters)

    def replace_placeholders(self, text: str) -> str:
        """Replace {{user}} and {{char}} in a single pass.

        Substituted values are not scanned again.
        """
        char_name = self.current_character.name

        def replace(match: re.Match[str]) -> str:
            return self.user_name if match.group(1) == "user" else char_name

        return _PLACEHOLDER_PATTERN.sub(replace, text)

    def trim_chat_history(self, limit: int) -> None:
        """Keep only the last `limit` messages of the current character."""
        character = self.current_character
        if len(character.chat) > limit:
            character.chat = character.chat[len(character.chat) - limit :]
