"""Use cases."""

from neurochat.application.use_cases.conversation import ConversationUseCase

__all__ = ["ConversationUseCase"]
