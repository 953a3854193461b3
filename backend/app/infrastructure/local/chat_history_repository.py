"""
SQLite implementation of Chat history repository.
"""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from app.core.exceptions import HistoryReadError, PersistenceError
from app.infrastructure.local.database import ChatORM, get_session_factory
from app.interfaces.chat_history_repository import IChatHistoryRepository
from app.models.chat_history import ChatRow, ChatRowCreate
from app.utils.datetime_utils import ensure_utc, naive_utc_now


class SqliteChatHistoryRepository(IChatHistoryRepository):
    """SQLite implementation of chat history repository."""

    def __init__(self, session_factory=None):
        self._session_factory = session_factory or get_session_factory()

    def _orm_to_model(self, orm: ChatORM) -> ChatRow:
        """Convert ORM object to Pydantic model."""
        return ChatRow(
            id=orm.id,
            user_id=orm.user_id,
            role=orm.role,
            content=orm.content,
            created_at=ensure_utc(orm.created_at),
        )

    async def add_messages(self, rows: list[ChatRowCreate]) -> list[ChatRow]:
        """Insert rows in a single transaction."""
        if not rows:
            return []

        created_at = naive_utc_now()
        orms = [
            ChatORM(
                user_id=row.user_id,
                role=row.role,
                content=row.content or "",
                created_at=created_at,
            )
            for row in rows
        ]
        try:
            async with self._session_factory() as session:
                session.add_all(orms)
                await session.commit()
                for orm in orms:
                    await session.refresh(orm)
                return [self._orm_to_model(orm) for orm in orms]
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to insert chat rows: {e}") from e

    async def list_messages(self, user_id: str) -> list[ChatRow]:
        """List rows for a user, oldest first."""
        # Rows of one exchange share created_at; id keeps insertion order.
        query = (
            select(ChatORM)
            .where(ChatORM.user_id == user_id)
            .order_by(ChatORM.created_at.asc(), ChatORM.id.asc())
        )
        try:
            async with self._session_factory() as session:
                result = await session.execute(query)
                return [self._orm_to_model(orm) for orm in result.scalars().all()]
        except SQLAlchemyError as e:
            raise HistoryReadError(f"Failed to list chat rows: {e}") from e
