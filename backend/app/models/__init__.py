"""Pydantic models (schemas) for the application."""

from app.models.enums import MessageRole
from app.models.chat import (
    ChatRequest,
    ChatResponse,
    ChatTurn,
    ErrorResponse,
    HealthResponse,
    HistoryEntry,
    HistoryResponse,
)
from app.models.chat_history import ChatRow, ChatRowCreate

__all__ = [
    # Enums
    "MessageRole",
    # Chat API
    "ChatTurn",
    "ChatRequest",
    "ChatResponse",
    "HistoryEntry",
    "HistoryResponse",
    "ErrorResponse",
    "HealthResponse",
    # Storage rows
    "ChatRowCreate",
    "ChatRow",
]
