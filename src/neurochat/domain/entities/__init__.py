"""Domain entities."""

from neurochat.domain.entities.character_preset import CharacterPreset
from neurochat.domain.entities.chat_message import ChatMessage, Role
from neurochat.domain.entities.generation_config import GenerationConfig
from neurochat.domain.entities.user import User
from neurochat.domain.entities.user_property import PendingCommand, UserProperty

__all__ = [
    "CharacterPreset",
    "ChatMessage",
    "GenerationConfig",
    "PendingCommand",
    "Role",
    "User",
    "UserProperty",
]
