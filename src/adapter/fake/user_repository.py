"""In-memory implementation of UserRepository for testing."""

import uuid
from dataclasses import replace

from domain.model.errors import ConflictError
from domain.model.user import User


class FakeUserRepository:
    def __init__(self):
        self.store: dict[str, User] = {}
        self.credentials: dict[str, str] = {}

    # ── write operations ─────────────────────────────────────

    def save(self, user: User, password_hash: str | None = None) -> User:
        user_id = user.id or uuid.uuid4().hex

        # Mirrors the unique indexes of the real store.
        for other_id, other in self.store.items():
            if other_id == user_id:
                continue
            if other.email == user.email:
                raise ConflictError("email in use")
            if other.username == user.username:
                raise ConflictError("username in use")

        stored = replace(user, id=user_id)
        self.store[user_id] = stored
        if password_hash is not None:
            self.credentials[user_id] = password_hash
        return replace(stored)

    def delete(self, user_id: str) -> bool:
        self.credentials.pop(user_id, None)
        return self.store.pop(user_id, None) is not None

    # ── read operations ──────────────────────────────────────

    def get_by_id(self, user_id: str) -> User | None:
        user = self.store.get(user_id)
        return replace(user) if user else None

    def get_by_email(self, email: str) -> User | None:
        for user in self.store.values():
            if user.email == email:
                return replace(user)
        return None

    def get_by_username(self, username: str) -> User | None:
        for user in self.store.values():
            if user.username == username:
                return replace(user)
        return None

    def find_all(self) -> list[User]:
        return [replace(user) for user in self.store.values()]

    def exists_by_email(self, email: str) -> bool:
        return any(u.email == email for u in self.store.values())

    def exists_by_username(self, username: str) -> bool:
        return any(u.username == username for u in self.store.values())
