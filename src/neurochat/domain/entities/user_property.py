"""Editable user properties and the pending commands that set them."""

from enum import Enum


class UserProperty(Enum):
    """Single-field updates a user can make.

    Each member carries the object it targets ("user" or "character"),
    the attribute it writes and whether the value is placeholder-expanded
    against the user before it is assigned.
    """

    PROMPT = ("character", "prompt", True)
    USER_NAME = ("user", "user_name", False)
    USER_DESCRIPTION = ("user", "user_description", True)
    CHARACTER_NAME = ("character", "name", False)
    GREETING = ("character", "greeting", True)

    def __init__(self, target: str, attribute: str, expand_placeholders: bool) -> None:
        self.target = target
        self.attribute = attribute
        self.expand_placeholders = expand_placeholders


class PendingCommand(Enum):
    """Commands that wait for the user's next free-text message.

    The value is the tag stored in User.pending_command.
    """

    SWITCH_CHARACTER = "switch_character"
    SET_PROMPT = "set_prompt"
    SET_GREETING = "set_greeting"
    SET_CHARACTER_NAME = "set_character_name"
    SET_USER_NAME = "set_user_name"
    SET_USER_DESCRIPTION = "set_user_description"

    @property
    def user_property(self) -> UserProperty | None:
        """The property this command updates, None for SWITCH_CHARACTER."""
        return _COMMAND_PROPERTIES.get(self)


_COMMAND_PROPERTIES = {
    PendingCommand.SET_PROMPT: UserProperty.PROMPT,
    PendingCommand.SET_GREETING: UserProperty.GREETING,
    PendingCommand.SET_CHARACTER_NAME: UserProperty.CHARACTER_NAME,
    PendingCommand.SET_USER_NAME: UserProperty.USER_NAME,
    PendingCommand.SET_USER_DESCRIPTION: UserProperty.USER_DESCRIPTION,
}
