"""SQLite implementation of UserRepository."""

import logging
from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from datetime import datetime, timezone
from typing import Any

from sqlalchemy.dialects.sqlite import insert
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel.ext.asyncio.session import AsyncSession

from neurochat.domain.entities import CharacterPreset, ChatMessage, Role, User
from neurochat.domain.exceptions import LoadError, PersistError
from neurochat.infrastructure.persistence.datetime_utils import normalize_to_utc
from neurochat.infrastructure.persistence.models import UserModel

logger = logging.getLogger(__name__)


class SQLiteUserRepository:
    """SQLite 版 UserRepository 実装

    User 集約を 1 行のドキュメントとして保存・取得する。
    同一ユーザーへの並行した保存は後勝ちとなる（楽観ロックなし）。
    """

    def __init__(
        self,
        session_factory: Callable[[], AbstractAsyncContextManager[AsyncSession]],
    ) -> None:
        """初期化

        Args:
            session_factory: 非同期セッション生成関数
        """
        self._session_factory = session_factory

    async def save(self, user: User) -> None:
        """ユーザーを保存する（upsert、ドキュメント全体を置き換え）

        INSERT ... ON CONFLICT DO UPDATE の 1 文で書き込むため、
        同じ ID への並行した保存も失敗せず、最後の保存が残る。

        Args:
            user: 保存するユーザー

        Raises:
            PersistError: 保存に失敗した場合
        """
        row = self._to_row(user)
        stmt = insert(UserModel).values(**row)
        stmt = stmt.on_conflict_do_update(
            index_elements=["user_id"],
            set_={key: value for key, value in row.items() if key != "user_id"},
        )

        try:
            async with self._session_factory() as session:
                await session.execute(stmt)
                await session.commit()
        except SQLAlchemyError as e:
            logger.error("Error saving user %d: %s", user.id, e)
            raise PersistError(f"Error saving user {user.id}") from e

    async def find_by_id(self, user_id: int) -> User | None:
        """ID でユーザーを検索する

        読み込んだユーザーは不変条件を復元してから返す。

        Args:
            user_id: ユーザー ID

        Returns:
            ユーザー（存在しない場合は None）

        Raises:
            LoadError: 読み込みまたは変換に失敗した場合
        """
        try:
            async with self._session_factory() as session:
                model = await session.get(UserModel, user_id)
        except SQLAlchemyError as e:
            logger.error("Error loading user %d: %s", user_id, e)
            raise LoadError(f"Error loading user {user_id}") from e

        if model is None:
            return None

        try:
            return self._to_entity(model)
        except (KeyError, TypeError, ValueError) as e:
            logger.error("Malformed document for user %d: %s", user_id, e)
            raise LoadError(f"Malformed document for user {user_id}") from e

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
        try:
            async with self._session_factory() as session:
                model = await session.get(UserModel, user_id)
                if model is None:
                    raise PersistError(
                        f"User {user_id} not found when adding chat message"
                    )
                if not 0 <= character_index < len(model.characters):
                    raise PersistError(
                        f"Character {character_index} not found for user {user_id}"
                    )

                # JSON 列は再代入しないと変更が検知されない
                characters = [dict(character) for character in model.characters]
                target = characters[character_index]
                target["chat"] = [
                    *target.get("chat", []),
                    self._message_to_dict(message),
                ]
                model.characters = characters
                model.updated_at = datetime.now(timezone.utc)
                session.add(model)
                await session.commit()
        except SQLAlchemyError as e:
            logger.error(
                "Error adding chat message for user %d, character %d: %s",
                user_id,
                character_index,
                e,
            )
            raise PersistError(
                f"Error adding chat message for user {user_id}, "
                f"character {character_index}"
            ) from e

    def _to_entity(self, model: UserModel) -> User:
        """モデルをエンティティに変換する

        Args:
            model: UserModel インスタンス

        Returns:
            User エンティティ
        """
        user = User(
            id=model.user_id,
            user_name=model.user_name,
            user_description=model.user_description,
            characters=[self._character_from_dict(c) for c in model.characters],
            current_character_index=model.current_character_index,
            request_time=normalize_to_utc(model.request_time),
            pending_command=model.pending_command,
            last_message_id=model.last_message_id or 0,
        )
        user.restore_invariants()
        return user

    def _to_row(self, entity: User) -> dict[str, Any]:
        """エンティティを users テーブルの 1 行分の値に変換する

        Args:
            entity: User エンティティ

        Returns:
            カラム名をキーとする dict
        """
        return {
            "user_id": entity.id,
            "user_name": entity.user_name,
            "user_description": entity.user_description,
            "characters": [self._character_to_dict(c) for c in entity.characters],
            "current_character_index": entity.current_character_index,
            "request_time": entity.request_time,
            "pending_command": entity.pending_command,
            "last_message_id": entity.last_message_id,
            "updated_at": datetime.now(timezone.utc),
        }

    def _character_to_dict(self, character: CharacterPreset) -> dict[str, Any]:
        return {
            "id": character.id,
            "name": character.name,
            "greeting": character.greeting,
            "prompt": character.prompt,
            "chat": [self._message_to_dict(m) for m in character.chat],
        }

    def _character_from_dict(self, data: dict[str, Any]) -> CharacterPreset:
        return CharacterPreset(
            id=data["id"],
            name=data["name"],
            greeting=data.get("greeting", ""),
            prompt=data.get("prompt", ""),
            chat=[
                ChatMessage(role=Role(m["role"]), content=m["content"])
                for m in data.get("chat") or []
            ],
        )

    def _message_to_dict(self, message: ChatMessage) -> dict[str, str]:
        return message.to_dict()
