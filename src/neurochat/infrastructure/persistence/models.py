"""SQLModel table definitions."""

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import JSON, BigInteger, Column
from sqlmodel import Field, SQLModel


class UserModel(SQLModel, table=True):
    """ユーザーテーブル

    User 集約を 1 行として保存する。キャラクターとチャット履歴は
    JSON 列にまとめて格納し、保存のたびに行全体を置き換える。
    """

    __tablename__ = "users"

    user_id: int = Field(
        sa_column=Column(BigInteger, primary_key=True, autoincrement=False)
    )
    user_name: str
    user_description: str = ""
    # JSON format: [{"id": 0, "name": "...", "chat": [{"role": "user", ...}]}]
    characters: list[dict[str, Any]] = Field(
        default_factory=list, sa_column=Column(JSON, nullable=False)
    )
    current_character_index: int = 0
    request_time: datetime
    pending_command: str = ""
    last_message_id: int = Field(default=0, sa_column=Column(BigInteger, default=0))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
