from __future__ import annotations

import logging
import threading
from typing import Iterable, Protocol

from chat_client.auth import AuthService
from chat_client.errors import APIError, AuthRequiredError
from chat_client.models import Message, MessageRole

logger = logging.getLogger(__name__)

WELCOME_MESSAGE = "Hello! I'm your personal assistant. How can I help you today?"
CLEARED_MESSAGE = "Chat cleared. How can I help you today?"


class ChatApi(Protocol):
    def send_message(self, user_id: str, messages: Iterable[Message]) -> str: ...

    def get_chat_history(self, user_id: str) -> list[Message]: ...


class ChatSession:
    """
    View-model for one conversation.

    Holds the ordered message store, the compose input, loading state and
    the last user-visible error. Sends are optimistic: the user message is
    appended before the relay answers and, unless ``rollback_on_failure``
    is set, stays in place when the relay fails.
    """

    def __init__(
        self,
        api_client: ChatApi,
        auth_service: AuthService,
        *,
        rollback_on_failure: bool = False,
    ):
        self._api = api_client
        self._auth = auth_service
        self._rollback_on_failure = rollback_on_failure
        self._lock = threading.RLock()
        self._messages: list[Message] = []

        self.current_input = ""
        self.is_loading = False
        self.error_message: str | None = None

        self._add_assistant_message(WELCOME_MESSAGE)

    # -- Message store

    @property
    def messages(self) -> tuple[Message, ...]:
        with self._lock:
            return tuple(self._messages)

    def append(self, message: Message) -> None:
        with self._lock:
            self._messages.append(message)

    def replace_all(self, messages: Iterable[Message]) -> None:
        with self._lock:
            self._messages = list(messages)

    def _remove(self, message: Message) -> None:
        with self._lock:
            self._messages = [m for m in self._messages if m != message]

    def _add_assistant_message(self, content: str) -> Message:
        message = Message(role=MessageRole.ASSISTANT, content=content)
        self.append(message)
        return message

    # -- History replay

    def start(self) -> threading.Thread | None:
        """Replay stored history in the background if a user is signed in."""
        if self._auth.current_user is None:
            return None
        worker = threading.Thread(target=self.load_history, name="history-replay", daemon=True)
        worker.start()
        return worker

    def load_history(self) -> None:
        user = self._auth.current_user
        if user is None:
            return
        try:
            history = self._api.get_chat_history(user.id)
        except Exception as exc:
            # Replay failures keep the greeting and are not shown to the user.
            logger.warning("Failed to load chat history: %s", exc)
            return
        if history:
            self.replace_all(history)

    # -- Sending

    def send_current_input(self) -> bool:
        """Send the compose input. The input is kept if the send cannot start."""
        text = self.current_input
        if not text.strip() or self.is_loading:
            return False
        if self._auth.current_user is None:
            self.error_message = str(AuthRequiredError())
            return False
        self.current_input = ""
        return self.send_message(text)

    def send_message(self, text: str) -> bool:
        """
        Send ``text`` to the relay with the whole conversation.

        Returns True if a reply was appended.
        """
        if not text or not text.strip():
            return False
        if self.is_loading:
            return False

        user = self._auth.current_user
        if user is None:
            self.error_message = str(AuthRequiredError())
            return False

        user_message = Message(role=MessageRole.USER, content=text)
        self.append(user_message)

        self.is_loading = True
        self.error_message = None
        try:
            reply = self._api.send_message(user.id, self.messages)
        except APIError as exc:
            self._handle_send_failure(user_message, str(exc))
            return False
        except Exception as exc:
            self._handle_send_failure(user_message, f"Failed to send message: {exc}")
            return False
        finally:
            self.is_loading = False

        self._add_assistant_message(reply)
        return True

    def _handle_send_failure(self, user_message: Message, error_text: str) -> None:
        logger.warning("Send failed: %s", error_text)
        self.error_message = error_text
        if self._rollback_on_failure:
            self._remove(user_message)

    # -- Reset

    def clear(self) -> None:
        self.replace_all([])
        self._add_assistant_message(CLEARED_MESSAGE)
