"""User lifecycle service: registration, Google upsert, partial update, deactivation.

Pure business logic with no HTTP dependencies.
Raises domain errors that route handlers map to HTTP status codes.
"""

import logging
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from enum import Enum

from domain.model.errors import ConflictError, NotFoundError
from domain.model.user import Provider, User, UserPatch, UserRegistration
from port.password_hasher import PasswordHasher
from port.user_repository import UserRepository
from services.store_guard import collaborator_errors
from services.user_validation import (
    normalize,
    require_email,
    require_text,
    validate_google_registration,
    validate_local_registration,
)

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


# ── Google account matching ──────────────────────────────


class MatchOutcome(str, Enum):
    NOT_FOUND = 'not_found'
    SAME_PROVIDER = 'same_provider'
    OTHER_PROVIDER = 'other_provider'


@dataclass(frozen=True)
class GoogleAccountMatch:
    """Result of looking up the record that owns a Google email."""
    outcome: MatchOutcome
    existing: User | None = None


def match_google_account(existing: User | None) -> GoogleAccountMatch:
    if existing is None:
        return GoogleAccountMatch(MatchOutcome.NOT_FOUND)
    if Provider.matches(existing.provider, Provider.GOOGLE):
        return GoogleAccountMatch(MatchOutcome.SAME_PROVIDER, existing)
    return GoogleAccountMatch(MatchOutcome.OTHER_PROVIDER, existing)


# ── helpers ──────────────────────────────────────────────


def _ensure_email_free(repo: UserRepository, email: str) -> None:
    with collaborator_errors("check email availability"):
        taken = repo.exists_by_email(email)
    if taken:
        logger.warning("Email already in use", extra={"email": email})
        raise ConflictError("email in use")


def _ensure_username_free(repo: UserRepository, username: str) -> None:
    with collaborator_errors("check username availability"):
        taken = repo.exists_by_username(username)
    if taken:
        logger.warning("Username already in use", extra={"username": username})
        raise ConflictError("username in use")


def _require_user(repo: UserRepository, user_id: str) -> User:
    require_text('id', user_id)
    with collaborator_errors("get user by ID"):
        user = repo.get_by_id(user_id)
    if user is None:
        raise NotFoundError(f"User {user_id} not found")
    return user


# ── operations ───────────────────────────────────────────


def register_local(
    repo: UserRepository,
    hasher: PasswordHasher,
    registration: UserRegistration,
) -> User:
    """Register a new password-based user.

    Returns the stored User with its store-assigned id.

    Raises:
        ValidationError: provider is not LOCAL, a required field is blank,
            or the email is malformed
        ConflictError: email or username already in use
        InternalError: store or hasher failure
    """
    validate_local_registration(registration)
    email = normalize(registration.email)
    username = normalize(registration.username)

    _ensure_email_free(repo, email)
    _ensure_username_free(repo, username)

    now = _now()
    user = User(
        id=None,
        name=registration.name,
        lastname=registration.lastname,
        username=username,
        email=email,
        provider=Provider.LOCAL,
        active=True,
        created_at=now,
        updated_at=now,
        birth_date=registration.birth_date,
    )

    with collaborator_errors("hash password"):
        password_hash = hasher.hash(registration.password)
    with collaborator_errors("create user"):
        created = repo.save(user, password_hash=password_hash)

    logger.info("User registered", extra={"userId": created.id, "provider": Provider.LOCAL.value})
    return created


def upsert_google(repo: UserRepository, registration: UserRegistration) -> User:
    """Create or refresh a Google-federated user keyed by email.

    An existing Google record keeps its id, created_at and active flag; its
    personal fields are overwritten. No credential is ever stored.

    Raises:
        ValidationError: provider is not GOOGLE, or email/username missing
        ConflictError: email owned by another provider, or username taken
        InternalError: store failure
    """
    validate_google_registration(registration)
    email = normalize(registration.email)
    username = normalize(registration.username)

    with collaborator_errors("get user by email"):
        existing = repo.get_by_email(email)
    match = match_google_account(existing)

    if match.outcome is MatchOutcome.OTHER_PROVIDER:
        logger.warning("Email in use with another provider", extra={
            "email": email, "provider": match.existing.provider.value,
        })
        raise ConflictError("email in use with another provider")

    current_username = match.existing.username if match.existing else None
    if username != current_username:
        _ensure_username_free(repo, username)

    now = _now()
    if match.outcome is MatchOutcome.SAME_PROVIDER:
        user = replace(
            match.existing,
            name=registration.name,
            lastname=registration.lastname,
            birth_date=registration.birth_date,
            username=username,
            email=email,
            provider=Provider.GOOGLE,
            updated_at=now,
        )
    else:
        user = User(
            id=None,
            name=registration.name,
            lastname=registration.lastname,
            username=username,
            email=email,
            provider=Provider.GOOGLE,
            active=True,
            created_at=now,
            updated_at=now,
            birth_date=registration.birth_date,
        )

    with collaborator_errors("save Google user"):
        saved = repo.save(user)

    logger.info("Google user upserted", extra={"userId": saved.id, "outcome": match.outcome.value})
    return saved


def update_partial(repo: UserRepository, user_id: str, patch: UserPatch) -> User:
    """Apply the supplied fields of patch to a user.

    id, provider, active and created_at never change; updated_at is refreshed.

    Raises:
        NotFoundError: no user with user_id
        ValidationError: a supplied email/username is blank or malformed
        ConflictError: the new email or username belongs to another user
    """
    current = _require_user(repo, user_id)
    changes = patch.changes()

    if patch.is_set('email'):
        require_email(patch.email)
        changes['email'] = normalize(patch.email)
        if changes['email'] != current.email.lower():
            _ensure_email_free(repo, changes['email'])

    if patch.is_set('username'):
        require_text('username', patch.username)
        changes['username'] = normalize(patch.username)
        if changes['username'] != current.username.lower():
            _ensure_username_free(repo, changes['username'])

    updated = replace(current, **changes, updated_at=_now())
    with collaborator_errors("update user"):
        saved = repo.save(updated)

    logger.info("User updated", extra={"userId": saved.id, "fields": sorted(changes)})
    return saved


def deactivate(repo: UserRepository, user_id: str) -> None:
    """Soft-delete a user. Calling it on an inactive user only re-stamps updated_at.

    Raises:
        NotFoundError: no user with user_id
    """
    current = _require_user(repo, user_id)
    with collaborator_errors("deactivate user"):
        repo.save(replace(current, active=False, updated_at=_now()))
    logger.info("User deactivated", extra={"userId": user_id})
