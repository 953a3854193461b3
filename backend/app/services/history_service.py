"""
History service: per-user conversation replay.
"""

from app.interfaces.chat_history_repository import IChatHistoryRepository
from app.models.chat import HistoryEntry


class HistoryService:
    """Reads stored conversation rows for a user."""

    def __init__(self, chat_repo: IChatHistoryRepository):
        self._chat_repo = chat_repo

    async def get_history(self, user_id: str) -> list[HistoryEntry]:
        """Return the user's turns, oldest first."""
        rows = await self._chat_repo.list_messages(user_id)
        return [row.to_history_entry() for row in rows]
