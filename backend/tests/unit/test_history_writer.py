"""
Unit tests for the background history write queue.
"""

import asyncio

import pytest

from app.interfaces.chat_history_repository import IChatHistoryRepository
from app.models.chat_history import ChatRowCreate
from app.services.history_writer import HistoryWriteQueue


class InMemoryRepo(IChatHistoryRepository):
    def __init__(self, fail_times: int = 0):
        self.batches: list[list[ChatRowCreate]] = []
        self.fail_times = fail_times

    async def add_messages(self, rows):
        if self.fail_times > 0:
            self.fail_times -= 1
            raise RuntimeError("store unavailable")
        self.batches.append(rows)
        return []

    async def list_messages(self, user_id):
        return []


def _rows(user_id="u1"):
    return [
        ChatRowCreate(user_id=user_id, role="user", content="hi"),
        ChatRowCreate(user_id=user_id, role="assistant", content="hello!"),
    ]


@pytest.mark.asyncio
async def test_submit_persists_in_background():
    repo = InMemoryRepo()
    writer = HistoryWriteQueue(repo)
    await writer.start()

    writer.submit("u1", _rows())
    await writer.join()

    assert len(repo.batches) == 1
    assert [r.role for r in repo.batches[0]] == ["user", "assistant"]
    await writer.stop()


@pytest.mark.asyncio
async def test_submit_starts_worker_lazily():
    repo = InMemoryRepo()
    writer = HistoryWriteQueue(repo)
    assert not writer.is_running

    writer.submit("u1", _rows())
    assert writer.is_running
    await writer.join()

    assert len(repo.batches) == 1
    await writer.stop()


@pytest.mark.asyncio
async def test_failure_is_logged_and_worker_keeps_running(caplog):
    repo = InMemoryRepo(fail_times=1)
    writer = HistoryWriteQueue(repo)
    await writer.start()

    writer.submit("u1", _rows())
    writer.submit("u2", _rows("u2"))
    await writer.join()

    assert writer.failure_count == 1
    assert len(repo.batches) == 1
    assert repo.batches[0][0].user_id == "u2"
    assert writer.is_running
    assert "Error storing messages in database for user u1" in caplog.text
    await writer.stop()


@pytest.mark.asyncio
async def test_submit_does_not_wait_for_write():
    release = asyncio.Event()

    class SlowRepo(InMemoryRepo):
        async def add_messages(self, rows):
            await release.wait()
            return await super().add_messages(rows)

    repo = SlowRepo()
    writer = HistoryWriteQueue(repo)
    await writer.start()

    writer.submit("u1", _rows())
    assert repo.batches == []

    release.set()
    await writer.join()
    assert len(repo.batches) == 1
    await writer.stop()


@pytest.mark.asyncio
async def test_stop_drains_pending_jobs():
    repo = InMemoryRepo()
    writer = HistoryWriteQueue(repo)
    await writer.start()

    writer.submit("u1", _rows())
    writer.submit("u1", _rows())
    await writer.stop()

    assert len(repo.batches) == 2
    assert not writer.is_running


@pytest.mark.asyncio
async def test_empty_submit_is_ignored():
    repo = InMemoryRepo()
    writer = HistoryWriteQueue(repo)

    writer.submit("u1", [])

    assert not writer.is_running
    assert writer.pending == 0
