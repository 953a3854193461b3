"""
Chat history repository interface.

Defines the contract for per-user conversation row persistence.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from app.models.chat_history import ChatRow, ChatRowCreate


class IChatHistoryRepository(ABC):
    """Abstract interface for chat history persistence."""

    @abstractmethod
    async def add_messages(self, rows: list[ChatRowCreate]) -> list[ChatRow]:
        """
        Insert rows, one per message, in the given order.

        Args:
            rows: Rows to insert

        Returns:
            Inserted rows

        Raises:
            PersistenceError: If the store rejects the write
        """
        pass

    @abstractmethod
    async def list_messages(self, user_id: str) -> list[ChatRow]:
        """
        List all rows for a user, oldest first.

        Args:
            user_id: Owner user ID

        Returns:
            Rows ordered by creation time ascending (empty if none)

        Raises:
            HistoryReadError: If the store cannot be queried
        """
        pass
