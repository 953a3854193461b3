"""
Unit tests for local storage, anonymous identity and app configuration.
"""

import pytest

from chat_client.auth import USER_ID_KEY, AuthService
from chat_client.config import DEFAULT_API_URL, AppConfig, ClientSettings
from chat_client.context import ClientContext
from chat_client.storage import LocalStore


@pytest.fixture
def state_file(tmp_path):
    return tmp_path / "nested" / "state.json"


class TestLocalStore:
    def test_missing_file_reads_empty(self, state_file):
        assert LocalStore(state_file).get("anything") is None

    def test_values_survive_reload(self, state_file):
        LocalStore(state_file).set("api_url", "http://relay.test")

        assert LocalStore(state_file).get("api_url") == "http://relay.test"

    def test_corrupt_file_reads_empty(self, state_file):
        state_file.parent.mkdir(parents=True)
        state_file.write_text("{not json", encoding="utf-8")

        assert LocalStore(state_file).get("user_id") is None

    def test_non_object_file_reads_empty(self, state_file):
        state_file.parent.mkdir(parents=True)
        state_file.write_text("[1, 2]", encoding="utf-8")

        assert LocalStore(state_file).get("user_id") is None

    def test_remove(self, state_file):
        store = LocalStore(state_file)
        store.set("k", "v")
        store.remove("k")

        assert LocalStore(state_file).get("k") is None

    def test_default_path_honours_env(self, tmp_path, monkeypatch):
        monkeypatch.setenv("EQ_CHATBOT_STATE_DIR", str(tmp_path))

        assert LocalStore().path == tmp_path / "state.json"


class TestAuthService:
    def test_starts_signed_out(self, state_file):
        auth = AuthService(LocalStore(state_file))

        assert auth.current_user is None
        assert auth.is_signed_in is False

    def test_sign_in_mints_and_persists_id(self, state_file):
        auth = AuthService(LocalStore(state_file))

        user = auth.sign_in_anonymously()

        assert user.id
        assert auth.is_signed_in
        assert AuthService(LocalStore(state_file)).current_user.id == user.id

    def test_each_sign_in_mints_a_fresh_id(self, state_file):
        auth = AuthService(LocalStore(state_file))

        assert auth.sign_in_anonymously().id != auth.sign_in_anonymously().id

    def test_sign_out_clears_memory_and_storage(self, state_file):
        store = LocalStore(state_file)
        auth = AuthService(store)
        auth.sign_in_anonymously()

        auth.sign_out()

        assert auth.current_user is None
        assert store.get(USER_ID_KEY) is None
        assert AuthService(LocalStore(state_file)).current_user is None


class TestAppConfig:
    def test_default_address(self, state_file):
        assert AppConfig(LocalStore(state_file)).api_url == DEFAULT_API_URL

    def test_set_persists_and_notifies(self, state_file):
        config = AppConfig(LocalStore(state_file))
        seen = []
        config.on_api_url_changed(seen.append)

        config.api_url = "https://relay.example.com/"

        assert config.api_url == "https://relay.example.com"
        assert seen == ["https://relay.example.com"]
        assert AppConfig(LocalStore(state_file)).api_url == "https://relay.example.com"

    def test_blank_value_restores_default(self, state_file):
        config = AppConfig(LocalStore(state_file), default_api_url="http://fallback.test")
        config.api_url = "https://relay.example.com"

        config.api_url = "  "

        assert config.api_url == "http://fallback.test"


class TestClientSettings:
    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("CHAT_API_URL", "https://relay.example.com/")
        monkeypatch.setenv("REQUEST_TIMEOUT_SECONDS", "30")

        settings = ClientSettings.from_env()

        assert settings.default_api_url == "https://relay.example.com"
        assert settings.request_timeout_seconds == 30.0

    def test_no_timeout_by_default(self, monkeypatch):
        monkeypatch.delenv("CHAT_API_URL", raising=False)
        monkeypatch.delenv("REQUEST_TIMEOUT_SECONDS", raising=False)

        settings = ClientSettings.from_env()

        assert settings.default_api_url == DEFAULT_API_URL
        assert settings.request_timeout_seconds is None


class TestClientContext:
    def test_components_share_one_store(self, state_file):
        ctx = ClientContext.create(
            state_file,
            settings=ClientSettings(default_api_url="http://relay.test", request_timeout_seconds=None),
        )

        user = ctx.auth.sign_in_anonymously()
        session = ctx.new_session()

        assert ctx.store.get("user_id") == user.id
        assert ctx.config.api_url == "http://relay.test"
        assert len(session.messages) == 1
