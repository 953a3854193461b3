"""
Relay service.

Forwards a conversation snapshot to the completion API and schedules the
exchanged pair for history persistence.
"""

from __future__ import annotations

from typing import Optional

from app.core.exceptions import InvalidRequestError
from app.core.logger import logger
from app.interfaces.completion_provider import ICompletionProvider
from app.models.chat import ChatTurn
from app.models.chat_history import ChatRowCreate
from app.models.enums import MessageRole
from app.services.history_writer import HistoryWriteQueue


def last_user_turn(messages: list[ChatTurn]) -> Optional[ChatTurn]:
    """Return the most recent user turn, if any."""
    for turn in reversed(messages):
        if turn.role == MessageRole.USER:
            return turn
    return None


def build_history_rows(user_id: str, messages: list[ChatTurn], reply: str) -> list[ChatRowCreate]:
    """Rows persisted after a successful exchange: last user turn, then the reply."""
    rows: list[ChatRowCreate] = []
    user_turn = last_user_turn(messages)
    if user_turn is not None:
        rows.append(
            ChatRowCreate(user_id=user_id, role=MessageRole.USER.value, content=user_turn.content)
        )
    rows.append(ChatRowCreate(user_id=user_id, role=MessageRole.ASSISTANT.value, content=reply))
    return rows


class RelayService:
    """Stateless relay between the client and the completion API."""

    def __init__(
        self,
        completion_provider: ICompletionProvider,
        history_writer: HistoryWriteQueue,
    ):
        self._completion_provider = completion_provider
        self._history_writer = history_writer

    async def relay(self, user_id: str, messages: list[ChatTurn]) -> str:
        """
        Get the next assistant reply for a conversation.

        The full message list is forwarded upstream. History rows are only
        queued once a reply exists, and queuing never blocks the caller.

        Raises:
            InvalidRequestError: If user_id or messages are missing
            UpstreamError: If the completion API call fails
        """
        if not user_id or not messages:
            raise InvalidRequestError("Invalid request. userId and messages array required.")

        logger.info(
            f"Relaying chat: user_id={user_id} turns={len(messages)} "
            f"model={self._completion_provider.get_model_name()}"
        )
        reply = await self._completion_provider.complete(
            [turn.to_completion_message() for turn in messages]
        )

        try:
            self._history_writer.submit(user_id, build_history_rows(user_id, messages, reply))
        except Exception as e:
            logger.error(f"Failed to queue chat history for user {user_id}: {e}")

        return reply
