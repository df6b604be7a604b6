"""Input validation and normalization shared by the user services.

Every check raises ValidationError naming the offending field; callers get
the first failure only.
"""

import re

from domain.model.errors import ValidationError
from domain.model.user import Provider, UserRegistration

EMAIL_PATTERN = re.compile(r'^[A-Za-z0-9+_.-]+@(.+)$')

LOCAL_REQUIRED_FIELDS = ('name', 'lastname', 'username', 'email', 'password')


def normalize(value: str) -> str:
    """Lowercase an email or username for storage and comparison."""
    return value.lower()


def require_text(field: str, value) -> None:
    if value is None or not str(value).strip():
        raise ValidationError(field, f"{field} is required")


def require_email(value, field: str = 'email') -> None:
    require_text(field, value)
    if not EMAIL_PATTERN.fullmatch(value):
        raise ValidationError(field, f"{field} is not valid")


def require_provider(value: str | None, expected: Provider) -> None:
    if not Provider.matches(value, expected):
        raise ValidationError('provider', f"provider must be {expected.value}")


def validate_local_registration(registration: UserRegistration) -> None:
    require_provider(registration.provider, Provider.LOCAL)
    for field in LOCAL_REQUIRED_FIELDS:
        require_text(field, getattr(registration, field))
    require_email(registration.email)


def validate_google_registration(registration: UserRegistration) -> None:
    require_provider(registration.provider, Provider.GOOGLE)
    require_email(registration.email)
    require_text('username', registration.username)
