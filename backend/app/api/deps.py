"""
Dependency injection for API endpoints.

This module provides FastAPI dependencies that inject the correct
infrastructure implementations based on environment configuration.
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from app.core.config import get_settings
from app.interfaces.chat_history_repository import IChatHistoryRepository
from app.interfaces.completion_provider import ICompletionProvider
from app.services.history_service import HistoryService
from app.services.history_writer import HistoryWriteQueue
from app.services.relay_service import RelayService


# ===========================================
# Repository Dependencies
# ===========================================


@lru_cache()
def get_chat_history_repository() -> IChatHistoryRepository:
    """Get chat history repository instance."""
    settings = get_settings()
    if settings.uses_supabase:
        from app.infrastructure.supabase.chat_history_repository import (
            SupabaseChatHistoryRepository,
        )
        return SupabaseChatHistoryRepository(
            base_url=settings.SUPABASE_URL,
            api_key=settings.SUPABASE_KEY,
            table=settings.SUPABASE_TABLE,
        )
    else:
        from app.infrastructure.local.chat_history_repository import SqliteChatHistoryRepository
        return SqliteChatHistoryRepository()


# ===========================================
# Provider Dependencies
# ===========================================


@lru_cache()
def get_completion_provider() -> ICompletionProvider:
    """Get completion provider instance."""
    settings = get_settings()
    from app.infrastructure.anthropic.completion_provider import AnthropicCompletionProvider
    return AnthropicCompletionProvider(api_key=settings.ANTHROPIC_API_KEY)


# ===========================================
# Service Dependencies
# ===========================================


@lru_cache()
def get_history_writer() -> HistoryWriteQueue:
    """Get the process-wide history write queue."""
    return HistoryWriteQueue(get_chat_history_repository())


def get_relay_service(
    completion_provider: ICompletionProvider = Depends(get_completion_provider),
    history_writer: HistoryWriteQueue = Depends(get_history_writer),
) -> RelayService:
    """Build a request-scoped relay service."""
    return RelayService(completion_provider=completion_provider, history_writer=history_writer)


def get_history_service(
    chat_repo: IChatHistoryRepository = Depends(get_chat_history_repository),
) -> HistoryService:
    """Build a request-scoped history service."""
    return HistoryService(chat_repo=chat_repo)


# ===========================================
# Type Aliases for Dependency Injection
# ===========================================

ChatHistoryRepo = Annotated[IChatHistoryRepository, Depends(get_chat_history_repository)]
CompletionProvider = Annotated[ICompletionProvider, Depends(get_completion_provider)]
HistoryWriter = Annotated[HistoryWriteQueue, Depends(get_history_writer)]
Relay = Annotated[RelayService, Depends(get_relay_service)]
History = Annotated[HistoryService, Depends(get_history_service)]
