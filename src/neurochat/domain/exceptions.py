"""Domain exceptions."""


class ConversationError(Exception):
    """Base exception for conversation operations."""


class LoadError(ConversationError):
    """A user could not be loaded from the store."""


class PersistError(ConversationError):
    """A user could not be saved to the store."""


class ModelError(ConversationError):
    """The language model did not return a reply."""


class InvalidPropertyError(ConversationError):
    """The property name is not one of the editable user properties."""

    def __init__(self, prop: object) -> None:
        """初期化

        Args:
            prop: 不正なプロパティ
        """
        self.prop = prop
        super().__init__(f"Unknown user property: {prop}")


class InvalidIndexError(ConversationError):
    """The character index is out of range."""

    def __init__(self, index: int, count: int) -> None:
        """初期化

        Args:
            index: 指定されたインデックス
            count: ユーザーのキャラクター数
        """
        self.index = index
        self.count = count
        super().__init__(f"Invalid character index: {index} (characters: {count})")
