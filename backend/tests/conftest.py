"""
Shared fixtures for backend tests.
"""

from typing import Optional

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from app.api.deps import (
    get_chat_history_repository,
    get_completion_provider,
    get_history_writer,
)
from app.core.exceptions import UpstreamError
from app.infrastructure.local.chat_history_repository import SqliteChatHistoryRepository
from app.infrastructure.local.database import get_session_factory, init_db
from app.interfaces.completion_provider import ICompletionProvider
from app.services.history_writer import HistoryWriteQueue


class FakeCompletionProvider(ICompletionProvider):
    """Completion provider returning a canned reply or raising."""

    def __init__(self, reply: str = "hello!", error: Optional[Exception] = None):
        self.reply = reply
        self.error = error
        self.calls: list[list[dict[str, str]]] = []

    async def complete(self, messages: list[dict[str, str]]) -> str:
        self.calls.append(messages)
        if self.error is not None:
            raise self.error
        return self.reply

    def get_model_name(self) -> str:
        return "fake-model"


@pytest.fixture
def test_user_id() -> str:
    return "u1"


@pytest.fixture
async def session_factory():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await init_db(engine)
    yield get_session_factory(engine)
    await engine.dispose()


@pytest.fixture
def chat_repo(session_factory) -> SqliteChatHistoryRepository:
    return SqliteChatHistoryRepository(session_factory=session_factory)


@pytest.fixture
def completion_provider() -> FakeCompletionProvider:
    return FakeCompletionProvider()


@pytest.fixture
def failing_completion_provider() -> FakeCompletionProvider:
    return FakeCompletionProvider(error=UpstreamError("upstream timed out"))


@pytest.fixture
async def history_writer(chat_repo):
    writer = HistoryWriteQueue(chat_repo)
    await writer.start()
    yield writer
    await writer.stop()


@pytest.fixture
def build_client(chat_repo, history_writer):
    """Factory for an ASGI client wired to fakes and the in-memory store."""
    from main import app

    def _build(provider: ICompletionProvider) -> AsyncClient:
        app.dependency_overrides[get_completion_provider] = lambda: provider
        app.dependency_overrides[get_chat_history_repository] = lambda: chat_repo
        app.dependency_overrides[get_history_writer] = lambda: history_writer
        return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")

    yield _build
    app.dependency_overrides.clear()


@pytest.fixture
def make_provider():
    return FakeCompletionProvider
