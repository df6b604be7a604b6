from typing import Protocol
from domain.model.user import User


class UserRepository(Protocol):
    """Protocol defining the interface for user identity storage.

    Implementations enforce email/username uniqueness themselves and raise
    ConflictError on violation. Storage failures raise InternalError.
    """
    def save(self, user: User, password_hash: str | None = None) -> User:
        """Insert (id is None) or upsert by id. Return the stored User.

        A None password_hash leaves any stored credential unchanged.
        """
        ...

    def get_by_id(self, user_id: str) -> User | None:
        """Find a user by ID. Return User or None if not found."""
        ...

    def get_by_email(self, email: str) -> User | None:
        """Find a user by normalized email. Return User or None if not found."""
        ...

    def get_by_username(self, username: str) -> User | None:
        """Find a user by normalized username. Return User or None if not found."""
        ...

    def find_all(self) -> list[User]:
        """Return every user in store order."""
        ...

    def exists_by_email(self, email: str) -> bool:
        ...

    def exists_by_username(self, username: str) -> bool:
        ...

    def delete(self, user_id: str) -> bool:
        """Hard-delete a user. Return True if a record was removed."""
        ...
