"""Chat message entity."""

from dataclasses import dataclass
from enum import Enum


class Role(Enum):
    """Roles of the participants in a chat."""

    SYSTEM = "system"
    ASSISTANT = "assistant"
    USER = "user"


@dataclass(frozen=True)
class ChatMessage:
    """A single message in a character's chat history.

    Attributes:
        role: Who wrote the message.
        content: Message text.
    """

    role: Role
    content: str

    def to_dict(self) -> dict[str, str]:
        """Convert to the OpenAI-format message dict."""
        return {"role": self.role.value, "content": self.content}
