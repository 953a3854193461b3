"""
Background history write queue.

Relay responses never wait on the history store: exchanged turns are put on
an in-process queue and a single worker task inserts them. Write failures
are logged and dropped.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Optional

from app.core.logger import setup_logger
from app.interfaces.chat_history_repository import IChatHistoryRepository
from app.models.chat_history import ChatRowCreate

logger = setup_logger(__name__)


@dataclass(frozen=True)
class HistoryWriteJob:
    """Rows from one exchange, inserted together."""

    user_id: str
    rows: tuple[ChatRowCreate, ...]


class HistoryWriteQueue:
    """Single-worker queue that persists exchanged turns."""

    def __init__(self, chat_repo: IChatHistoryRepository):
        self._chat_repo = chat_repo
        self._queue: asyncio.Queue[HistoryWriteJob] = asyncio.Queue()
        self._worker: Optional[asyncio.Task] = None
        self._failures = 0

    @property
    def is_running(self) -> bool:
        return self._worker is not None and not self._worker.done()

    @property
    def failure_count(self) -> int:
        return self._failures

    @property
    def pending(self) -> int:
        return self._queue.qsize()

    async def start(self) -> None:
        """Start the worker task (idempotent)."""
        if self.is_running:
            return
        self._worker = asyncio.create_task(self._run(), name="history-writer")
        logger.info("History write queue started")

    async def stop(self, drain: bool = True) -> None:
        """Stop the worker, optionally flushing queued jobs first."""
        if drain and self.is_running:
            await self._queue.join()
        if self._worker is not None:
            self._worker.cancel()
            try:
                await self._worker
            except asyncio.CancelledError:
                pass
            self._worker = None
            logger.info("History write queue stopped")

    def submit(self, user_id: str, rows: list[ChatRowCreate]) -> None:
        """Queue rows for insertion without waiting for the write."""
        if not rows:
            return
        self._queue.put_nowait(HistoryWriteJob(user_id=user_id, rows=tuple(rows)))
        if not self.is_running:
            self._worker = asyncio.get_running_loop().create_task(
                self._run(), name="history-writer"
            )

    async def join(self) -> None:
        """Wait until every queued job has been processed."""
        await self._queue.join()

    async def _run(self) -> None:
        while True:
            job = await self._queue.get()
            try:
                await self._chat_repo.add_messages(list(job.rows))
                logger.debug(f"Stored {len(job.rows)} chat rows for user {job.user_id}")
            except Exception as e:
                self._failures += 1
                logger.error(f"Error storing messages in database for user {job.user_id}: {e}")
            finally:
                self._queue.task_done()
