"""Read-only user lookups and existence checks.

Email and username arguments are lowercased before reaching the store.
A missing record is returned as None, never raised.
"""

from domain.model.errors import ValidationError
from domain.model.user import User
from port.user_repository import UserRepository
from services.store_guard import collaborator_errors
from services.user_validation import normalize, require_text


def find_by_id(repo: UserRepository, user_id: str) -> User | None:
    if user_id is None:
        raise ValidationError('id', "id must not be null")
    require_text('id', user_id)
    with collaborator_errors("get user by ID"):
        return repo.get_by_id(user_id)


def find_by_email(repo: UserRepository, email: str) -> User | None:
    require_text('email', email)
    with collaborator_errors("get user by email"):
        return repo.get_by_email(normalize(email))


def find_by_username(repo: UserRepository, username: str) -> User | None:
    require_text('username', username)
    with collaborator_errors("get user by username"):
        return repo.get_by_username(normalize(username))


def find_all(repo: UserRepository) -> list[User]:
    with collaborator_errors("list users"):
        return repo.find_all()


def exists_by_email(repo: UserRepository, email: str) -> bool:
    require_text('email', email)
    with collaborator_errors("check user existence by email"):
        return repo.exists_by_email(normalize(email))


def exists_by_username(repo: UserRepository, username: str) -> bool:
    require_text('username', username)
    with collaborator_errors("check user existence by username"):
        return repo.exists_by_username(normalize(username))
