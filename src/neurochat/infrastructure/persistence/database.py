"""SQLite engine and session handling."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

# Import models to register them with SQLModel metadata
from neurochat.infrastructure.persistence import models as _models  # noqa: F401

MEMORY_DATABASE = ":memory:"


def sqlite_url(database_path: str) -> str:
    """aiosqlite 用の接続 URL を組み立てる

    ファイルの場合は親ディレクトリも作成する。
    """
    if database_path != MEMORY_DATABASE:
        Path(database_path).parent.mkdir(parents=True, exist_ok=True)
    return f"sqlite+aiosqlite:///{database_path}"


class DatabaseManager:
    """プロセス全体で共有する SQLite エンジンの持ち主

    エンジンは最初に使われた時に作られ、同時に動く会話タスクの間で
    共有される。セッションは操作ごとに get_session で開く。
    """

    def __init__(self, database_path: str, connect_timeout: float = 10.0) -> None:
        """初期化

        Args:
            database_path: データベースファイルのパス（":memory:" でインメモリ）
            connect_timeout: ロック待ちを含む接続タイムアウト秒数
        """
        self._database_path = database_path
        self._connect_timeout = connect_timeout
        self._engine: AsyncEngine | None = None
        self._sessions: async_sessionmaker[AsyncSession] | None = None

    def get_engine(self) -> AsyncEngine:
        """エンジンを返す。未作成なら作成する"""
        if self._engine is None:
            self._engine = create_async_engine(
                sqlite_url(self._database_path),
                connect_args={"timeout": self._connect_timeout},
            )
            self._sessions = async_sessionmaker(
                self._engine, class_=AsyncSession, expire_on_commit=False
            )
        return self._engine

    async def create_tables(self) -> None:
        """存在しないテーブルを作成する"""
        async with self.get_engine().begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        """1 操作分のセッションを開く"""
        self.get_engine()
        assert self._sessions is not None
        async with self._sessions() as session:
            yield session

    async def close(self) -> None:
        """接続をすべて閉じる。次に使われた時はエンジンを作り直す"""
        if self._engine is not None:
            await self._engine.dispose()
        self._engine = None
        self._sessions = None
