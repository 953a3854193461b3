"""
Chat model definitions.

Wire models for the relay and history endpoints.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from app.models.enums import MessageRole


class ChatTurn(BaseModel):
    """A single conversation turn as sent by the client."""

    role: MessageRole = Field(..., description="'user' or 'assistant'")
    content: str = Field(..., description="Turn text")

    def to_completion_message(self) -> dict[str, str]:
        return {"role": self.role.value, "content": self.content}


class ChatRequest(BaseModel):
    """Request model for the relay endpoint."""

    userId: str = Field(..., min_length=1, description="Opaque client user ID")
    messages: list[ChatTurn] = Field(
        ...,
        min_length=1,
        description="Full conversation so far, oldest first",
    )


class ChatResponse(BaseModel):
    """Response model for the relay endpoint."""

    reply: str = Field(..., description="Assistant reply text")


class HistoryEntry(BaseModel):
    """A stored turn as returned by the history endpoint."""

    role: str
    content: str
    created_at: datetime


class HistoryResponse(BaseModel):
    """Response model for the history endpoint."""

    history: list[HistoryEntry] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    """Error body shared by all endpoints."""

    error: str


class HealthResponse(BaseModel):
    """Health check body."""

    status: Literal["ok"] = "ok"
    message: str = "Server is running"
