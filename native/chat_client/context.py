from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from chat_client.api import APIClient
from chat_client.auth import AuthService
from chat_client.config import AppConfig, ClientSettings
from chat_client.session import ChatSession
from chat_client.storage import LocalStore


@dataclass
class ClientContext:
    """Process-lifetime client state, passed explicitly to whatever needs it."""

    store: LocalStore
    config: AppConfig
    auth: AuthService
    api: APIClient

    @classmethod
    def create(
        cls,
        state_file: Path | str | None = None,
        settings: ClientSettings | None = None,
    ) -> "ClientContext":
        settings = settings or ClientSettings.from_env()
        store = LocalStore(state_file)
        config = AppConfig(store, default_api_url=settings.default_api_url)
        return cls(
            store=store,
            config=config,
            auth=AuthService(store),
            api=APIClient(config, timeout=settings.request_timeout_seconds),
        )

    def new_session(self, **kwargs) -> ChatSession:
        return ChatSession(self.api, self.auth, **kwargs)
