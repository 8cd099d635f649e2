"""User repository protocol."""

from typing import Protocol

from neurochat.domain.entities import ChatMessage, User


class UserRepository(Protocol):
    """ユーザー情報リポジトリの抽象インターフェース

    User 集約を一つのドキュメントとして保存・取得する。
    永続化層の実装詳細を隠蔽する。
    """

    async def save(self, user: User) -> None:
        """ユーザーを保存する

        同一 ID のユーザーが存在する場合はドキュメント全体を置き換える。

        Args:
            user: 保存するユーザー

        Raises:
            PersistError: 保存に失敗した場合
        """
        ...

    async def find_by_id(self, user_id: int) -> User | None:
        """ID でユーザーを検索する

        Args:
            user_id: ユーザー ID

        Returns:
            ユーザー（存在しない場合は None）

        Raises:
            LoadError: 読み込みに失敗した場合
        """
        ...

    async def append_chat_message(
        self, user_id: int, character_index: int, message: ChatMessage
    ) -> None:
        """指定キャラクターのチャット履歴にメッセージを追加する

        Args:
            user_id: ユーザー ID
            character_index: キャラクターのインデックス
            message: 追加するメッセージ

        Raises:
            PersistError: ユーザーやキャラクターが存在しない、または保存に失敗した場合
        """
        ...
