# domain/model/user.py

from __future__ import annotations

from dataclasses import dataclass, field, fields
from datetime import date, datetime
from enum import Enum
from typing import Any


class Provider(str, Enum):
    """Authentication method that created the account."""
    LOCAL = 'LOCAL'
    GOOGLE = 'GOOGLE'

    @classmethod
    def matches(cls, value: str | None, expected: Provider) -> bool:
        """Case-insensitive comparison against a raw provider string."""
        return value is not None and value.strip().upper() == expected.value


@dataclass
class User:
    """Domain model representing a user identity record.

    The credential is never part of this model; it is handed to the
    repository separately on save.
    """
    id: str | None
    name: str | None
    lastname: str | None
    username: str
    email: str
    provider: Provider
    active: bool
    created_at: datetime
    updated_at: datetime
    birth_date: date | None = None

    @property
    def is_deactivated(self) -> bool:
        return not self.active


@dataclass(frozen=True)
class UserRegistration:
    """Input for local registration and Google upsert."""
    name: str | None
    lastname: str | None
    username: str | None
    email: str | None
    provider: str | None
    password: str | None = field(default=None, repr=False)
    birth_date: date | None = None


class _Unset:
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return 'UNSET'

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()


@dataclass(frozen=True)
class UserPatch:
    """Partial update of a user's personal fields.

    A field left as UNSET keeps its current value. None is a distinct value
    and is not used to mean "no change".
    """
    name: str | None = UNSET
    lastname: str | None = UNSET
    username: str | None = UNSET
    email: str | None = UNSET
    birth_date: date | None = UNSET

    def is_set(self, name: str) -> bool:
        return getattr(self, name) is not UNSET

    def changes(self) -> dict[str, Any]:
        """Return only the fields that were supplied."""
        return {f.name: getattr(self, f.name) for f in fields(self) if self.is_set(f.name)}
