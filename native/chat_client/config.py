from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Callable

from dotenv import load_dotenv

from chat_client.storage import LocalStore

DEFAULT_API_URL = "http://localhost:3000"
API_URL_KEY = "api_url"


# ---------------------------------------------------------------------------
# Environment settings
# ---------------------------------------------------------------------------

@dataclass
class ClientSettings:
    default_api_url: str
    request_timeout_seconds: float | None

    @classmethod
    def from_env(cls) -> "ClientSettings":
        load_dotenv()
        base_url = os.getenv("CHAT_API_URL", DEFAULT_API_URL).strip().rstrip("/")
        raw_timeout = os.getenv("REQUEST_TIMEOUT_SECONDS", "").strip()
        return cls(
            default_api_url=base_url or DEFAULT_API_URL,
            request_timeout_seconds=max(1.0, float(raw_timeout)) if raw_timeout else None,
        )


# ---------------------------------------------------------------------------
# Runtime configuration
# ---------------------------------------------------------------------------

class AppConfig:
    """Relay base address, persisted in local storage and editable at runtime."""

    def __init__(self, store: LocalStore, default_api_url: str = DEFAULT_API_URL):
        self._store = store
        self._default_api_url = default_api_url
        self._listeners: list[Callable[[str], None]] = []

    @property
    def api_url(self) -> str:
        value = self._store.get(API_URL_KEY)
        if isinstance(value, str) and value.strip():
            return value.strip().rstrip("/")
        return self._default_api_url

    @api_url.setter
    def api_url(self, value: str) -> None:
        normalized = (value or "").strip().rstrip("/")
        if normalized:
            self._store.set(API_URL_KEY, normalized)
        else:
            self._store.remove(API_URL_KEY)
        current = self.api_url
        for listener in list(self._listeners):
            listener(current)

    def on_api_url_changed(self, listener: Callable[[str], None]) -> None:
        self._listeners.append(listener)
