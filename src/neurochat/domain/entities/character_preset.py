"""Character preset entity."""

from dataclasses import dataclass, field

from neurochat.domain.entities.chat_message import ChatMessage, Role

DEFAULT_CHARACTER_NAME = "Default"
DEFAULT_GREETING = "Hello! How can I help you today?"
DEFAULT_PROMPT = "You are a helpful AI assistant."

CHAR_PLACEHOLDER = "{{char}}"


@dataclass
class CharacterPreset:
    """A persona the user can talk to.

    Each preset owns its own system prompt, greeting and chat history.

    Attributes:
        id: Position among the owner's characters at the time it was added.
        name: Character name.
        greeting: Greeting shown for the character.
        prompt: System prompt. Empty means no system message is sent.
        chat: Chat history, oldest first.
    """

    id: int = 0
    name: str = DEFAULT_CHARACTER_NAME
    greeting: str = DEFAULT_GREETING
    prompt: str = DEFAULT_PROMPT
    chat: list[ChatMessage] = field(default_factory=list)

    def messages_for_model(self) -> list[ChatMessage]:
        """Build the message sequence sent to the model.

        Returns:
            The system prompt (if any) followed by the chat history.
        """
        messages: list[ChatMessage] = []
        if self.prompt:
            messages.append(ChatMessage(role=Role.SYSTEM, content=self.prompt))
        messages.extend(self.chat)
        return messages

    def replace_placeholders(self, text: str) -> str:
        """Replace {{char}} with the character name."""
        return text.replace(CHAR_PLACEHOLDER, self.name)
