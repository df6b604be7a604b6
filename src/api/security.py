"""Caller authentication: bearer JWT or internal service token."""

import base64
import binascii
import hmac
import os
import logging
from dataclasses import dataclass, field
from typing import Optional
from fastapi import Depends, Header, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt

logger = logging.getLogger(__name__)

# JWT Configuration
JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY")
JWT_ISSUER = os.getenv("JWT_ISSUER")
JWT_ALGORITHM = "HS384"
JWT_LEEWAY_SECONDS = 60

# Base64-encoded shared secret for service-to-service calls
S2S_TOKEN = os.getenv("S2S_TOKEN")
INTERNAL_TOKEN_HEADER = "X-Internal-Token"
INTERNAL_PRINCIPAL = "internal-service"

security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class Principal:
    """Authenticated caller."""
    subject: str
    roles: list[str] = field(default_factory=list)
    internal: bool = False


def _decode_b64(value: str) -> bytes | None:
    try:
        return base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError):
        return None


def verify_internal_token(provided: str) -> bool:
    """Compare a provided X-Internal-Token against the configured S2S_TOKEN."""
    if not S2S_TOKEN or not provided:
        return False
    expected = _decode_b64(S2S_TOKEN)
    actual = _decode_b64(provided)
    if expected is None or actual is None:
        return False
    return hmac.compare_digest(expected, actual)


def verify_token(token: str) -> Optional[Principal]:
    """Verify JWT token and build the Principal from its claims."""
    if not JWT_SECRET_KEY:
        logger.warning("JWT_SECRET_KEY not configured; rejecting bearer token")
        return None

    options = {"leeway": JWT_LEEWAY_SECONDS, "verify_iss": bool(JWT_ISSUER)}
    try:
        payload = jwt.decode(
            token,
            JWT_SECRET_KEY,
            algorithms=[JWT_ALGORITHM],
            issuer=JWT_ISSUER,
            options=options,
        )
    except JWTError as e:
        logger.debug(f"JWT verification failed: {e}")
        return None

    subject = payload.get("sub")
    if subject is None:
        return None
    roles = payload.get("roles") or []
    if isinstance(roles, str):
        roles = [roles]
    return Principal(subject=subject, roles=list(roles))


def get_current_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    internal_token: Optional[str] = Header(None, alias=INTERNAL_TOKEN_HEADER),
) -> Principal:
    """Authenticate the caller (required). Raises 401 if neither credential is valid."""
    if internal_token and verify_internal_token(internal_token):
        return Principal(subject=INTERNAL_PRINCIPAL, internal=True)

    if credentials:
        principal = verify_token(credentials.credentials)
        if principal:
            return principal
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Not authenticated",
        headers={"WWW-Authenticate": "Bearer"},
    )
