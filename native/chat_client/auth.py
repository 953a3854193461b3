from __future__ import annotations

import uuid

from chat_client.models import User
from chat_client.storage import LocalStore

USER_ID_KEY = "user_id"


class AuthService:
    """Local anonymous identity. Ids are minted on-device and never verified."""

    def __init__(self, store: LocalStore):
        self._store = store
        self.current_user: User | None = None
        user_id = store.get(USER_ID_KEY)
        if isinstance(user_id, str) and user_id:
            self.current_user = User(id=user_id)

    @property
    def is_signed_in(self) -> bool:
        return self.current_user is not None

    def sign_in_anonymously(self) -> User:
        user = User(id=str(uuid.uuid4()).upper())
        self._store.set(USER_ID_KEY, user.id)
        self.current_user = user
        return user

    def sign_out(self) -> None:
        self.current_user = None
        self._store.remove(USER_ID_KEY)
