"""Tests for CharacterPreset entity."""

from neurochat.domain.entities import CharacterPreset, ChatMessage, Role


class TestDefaults:
    """Default preset tests."""

    def test_default_fields(self) -> None:
        """Test default preset values."""
        preset = CharacterPreset()

        assert preset.id == 0
        assert preset.name == "Default"
        assert preset.greeting == "Hello! How can I help you today?"
        assert preset.prompt == "You are a helpful AI assistant."
        assert preset.chat == []

    def test_chat_not_shared_between_presets(self) -> None:
        """Test that each preset gets its own chat list."""
        first = CharacterPreset()
        second = CharacterPreset()

        first.chat.append(ChatMessage(Role.USER, "Hello"))

        assert second.chat == []


class TestMessagesForModel:
    """messages_for_model tests."""

    def test_prompt_then_history(self) -> None:
        """Test that the system prompt comes first, then the chat."""
        preset = CharacterPreset(
            prompt="Be nice.",
            chat=[
                ChatMessage(Role.USER, "Hi"),
                ChatMessage(Role.ASSISTANT, "Hello!"),
            ],
        )

        messages = preset.messages_for_model()

        assert messages == [
            ChatMessage(Role.SYSTEM, "Be nice."),
            ChatMessage(Role.USER, "Hi"),
            ChatMessage(Role.ASSISTANT, "Hello!"),
        ]

    def test_empty_prompt_has_no_system_message(self) -> None:
        """Test that an empty prompt emits no system message."""
        preset = CharacterPreset(prompt="", chat=[ChatMessage(Role.USER, "Hi")])

        assert preset.messages_for_model() == [ChatMessage(Role.USER, "Hi")]

    def test_rebuilt_on_every_call(self) -> None:
        """Test that the sequence reflects later changes to the chat."""
        preset = CharacterPreset()
        before = preset.messages_for_model()

        preset.chat.append(ChatMessage(Role.USER, "Hi"))
        after = preset.messages_for_model()

        assert len(before) == 1
        assert len(after) == 2

    def test_does_not_mutate_chat(self) -> None:
        """Test that building the sequence leaves the chat untouched."""
        preset = CharacterPreset(chat=[ChatMessage(Role.USER, "Hi")])

        preset.messages_for_model().append(ChatMessage(Role.USER, "Extra"))

        assert preset.chat == [ChatMessage(Role.USER, "Hi")]


class TestReplacePlaceholders:
    """replace_placeholders tests."""

    def test_replaces_char(self) -> None:
        """Test that {{char}} becomes the character name."""
        preset = CharacterPreset(name="Bob")

        assert preset.replace_placeholders("I am {{char}}.") == "I am Bob."

    def test_leaves_user_placeholder(self) -> None:
        """Test that {{user}} is not touched at character level."""
        preset = CharacterPreset(name="Bob")

        assert preset.replace_placeholders("Hi {{user}}") == "Hi {{user}}"
