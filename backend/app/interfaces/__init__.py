"""Abstract interfaces for infrastructure abstraction."""

from app.interfaces.chat_history_repository import IChatHistoryRepository
from app.interfaces.completion_provider import ICompletionProvider

__all__ = [
    "IChatHistoryRepository",
    "ICompletionProvider",
]
