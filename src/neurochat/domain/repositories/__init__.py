"""Domain repositories."""

from neurochat.domain.repositories.user_repository import UserRepository

__all__ = ["UserRepository"]
