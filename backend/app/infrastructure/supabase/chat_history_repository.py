"""
Supabase implementation of Chat history repository.

Talks to the PostgREST endpoint that Supabase exposes for each table.
"""

from __future__ import annotations

from datetime import timedelta
from typing import Any, Optional

import httpx

from app.core.exceptions import HistoryReadError, PersistenceError
from app.interfaces.chat_history_repository import IChatHistoryRepository
from app.models.chat_history import ChatRow, ChatRowCreate
from app.utils.datetime_utils import now_utc, parse_iso_to_utc


class SupabaseChatHistoryRepository(IChatHistoryRepository):
    """Supabase (PostgREST) implementation of chat history repository."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        table: str = "chats",
        timeout: Optional[float] = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize Supabase repository.

        Args:
            base_url: Project URL (e.g., "https://xyz.supabase.co")
            api_key: Service role or anon key
            table: Table holding one row per message
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self._endpoint = f"{base_url.rstrip('/')}/rest/v1/{table}"
        self._api_key = api_key
        self._timeout = timeout
        self._transport = transport

    def _headers(self) -> dict[str, str]:
        return {
            "apikey": self._api_key,
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self._timeout, transport=self._transport)

    def _row_to_model(self, raw: dict[str, Any]) -> ChatRow:
        created_at = raw.get("created_at")
        return ChatRow(
            id=raw.get("id"),
            user_id=raw["user_id"],
            role=raw["role"],
            content=raw.get("content") or "",
            created_at=parse_iso_to_utc(created_at) if isinstance(created_at, str) else created_at,
        )

    async def add_messages(self, rows: list[ChatRowCreate]) -> list[ChatRow]:
        """
        Insert rows with one bulk POST.

        Each row gets an explicit created_at one microsecond after the previous
        one, so rows from the same insert keep their order on read.
        """
        if not rows:
            return []

        base = now_utc()
        payload = [
            {**row.model_dump(), "created_at": (base + timedelta(microseconds=i)).isoformat()}
            for i, row in enumerate(rows)
        ]
        headers = {**self._headers(), "Prefer": "return=representation"}
        try:
            async with self._client() as client:
                resp = await client.post(self._endpoint, headers=headers, json=payload)
                resp.raise_for_status()
                data = resp.json()
            return [self._row_to_model(item) for item in data]
        except (httpx.HTTPError, ValueError, KeyError, TypeError) as e:
            raise PersistenceError(f"Supabase insert failed: {e}") from e

    async def list_messages(self, user_id: str) -> list[ChatRow]:
        """List rows for a user, oldest first."""
        params = {
            "select": "*",
            "user_id": f"eq.{user_id}",
            "order": "created_at.asc",
        }
        try:
            async with self._client() as client:
                resp = await client.get(self._endpoint, headers=self._headers(), params=params)
                resp.raise_for_status()
                data = resp.json()
            return [self._row_to_model(item) for item in data]
        except (httpx.HTTPError, ValueError, KeyError, TypeError) as e:
            raise HistoryReadError(f"Supabase query failed: {e}") from e
