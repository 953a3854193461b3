from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Iterable
from urllib.parse import quote, urlparse

import requests

from chat_client.config import AppConfig
from chat_client.errors import (
    DecodingError,
    InvalidURLError,
    NetworkError,
    ServerError,
    UnknownAPIError,
)
from chat_client.models import Message, MessageRole

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# History replay
# ---------------------------------------------------------------------------

def _parse_timestamp(raw: Any) -> datetime | None:
    if not isinstance(raw, str) or not raw.strip():
        return None
    try:
        parsed = datetime.fromisoformat(raw.strip().replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def messages_from_history(rows: Iterable[Any]) -> list[Message]:
    """Map stored rows to messages, silently dropping malformed ones."""
    messages: list[Message] = []
    dropped = 0
    for row in rows:
        if not isinstance(row, dict):
            dropped += 1
            continue
        content = row.get("content")
        try:
            role = MessageRole(row.get("role"))
        except ValueError:
            role = None
        timestamp = _parse_timestamp(row.get("created_at"))
        if role is None or timestamp is None or not isinstance(content, str):
            dropped += 1
            continue
        messages.append(Message(role=role, content=content, timestamp=timestamp))
    if dropped:
        logger.debug("Dropped %d malformed history rows", dropped)
    return messages


# ---------------------------------------------------------------------------
# Relay HTTP client
# ---------------------------------------------------------------------------

class APIClient:
    def __init__(
        self,
        config: AppConfig,
        session: requests.Session | None = None,
        timeout: float | None = None,
    ):
        self._config = config
        self._session = session or requests.Session()
        self._timeout = timeout

    def send_message(self, user_id: str, messages: Iterable[Message]) -> str:
        payload = {
            "userId": user_id,
            "messages": [message.api_representation() for message in messages],
        }
        data = self._request("POST", "/chat", json=payload)
        reply = data.get("reply")
        if not isinstance(reply, str):
            raise UnknownAPIError()
        return reply

    def get_chat_history(self, user_id: str) -> list[Message]:
        data = self._request("GET", f"/chat/history/{quote(user_id, safe='')}")
        history = data.get("history")
        if history is None:
            return []
        if not isinstance(history, list):
            raise DecodingError("history is not a list")
        return messages_from_history(history)

    def _url(self, path: str) -> str:
        base = self._config.api_url
        parsed = urlparse(base)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise InvalidURLError(base)
        return f"{base}{path}"

    def _request(
        self,
        method: str,
        path: str,
        *,
        json: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        url = self._url(path)
        headers = {"Content-Type": "application/json"} if json is not None else {}
        try:
            response = self._session.request(
                method, url, json=json, headers=headers, timeout=self._timeout,
            )
        except requests.RequestException as exc:
            raise NetworkError(exc) from exc

        if response.status_code != 200:
            message = "Unknown error"
            try:
                body = response.json()
                if isinstance(body, dict) and isinstance(body.get("error"), str):
                    message = body["error"]
            except ValueError:
                pass
            raise ServerError(response.status_code, message)

        try:
            data = response.json()
        except ValueError as exc:
            raise DecodingError(exc) from exc

        if not isinstance(data, dict):
            raise DecodingError("response is not a JSON object")
        return data
