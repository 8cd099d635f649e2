"""Persistence infrastructure."""

from neurochat.infrastructure.persistence.database import DatabaseManager
from neurochat.infrastructure.persistence.models import UserModel
from neurochat.infrastructure.persistence.user_repository import SQLiteUserRepository

__all__ = [
    "DatabaseManager",
    "SQLiteUserRepository",
    "UserModel",
]
