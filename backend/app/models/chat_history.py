"""
Stored chat row models.

One row per message, keyed by the client's user ID.
"""

from datetime import datetime
from typing import Optional, Union

from pydantic import BaseModel, Field

from app.models.chat import HistoryEntry


class ChatRowCreate(BaseModel):
    """Schema for inserting a chat row."""

    user_id: str = Field(..., max_length=255, description="Owner user ID")
    role: str = Field(..., max_length=20, description="Message role")
    content: str = Field("", description="Message content")


class ChatRow(ChatRowCreate):
    """Stored chat row."""

    # Supabase tables may have no id column or a uuid key.
    id: Optional[Union[int, str]] = None
    created_at: datetime

    def to_history_entry(self) -> HistoryEntry:
        return HistoryEntry(role=self.role, content=self.content, created_at=self.created_at)
