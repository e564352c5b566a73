"""Bearer token helpers.

Identity is issued elsewhere; this service only needs to read the username
from the `sub` claim of a signed JWT.
"""
from __future__ import annotations

from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from launch_deck.core.settings import settings


def create_access_token(username: str, extra_claims: dict[str, str] | None = None) -> str:
    """Create a JWT whose subject is `username`."""
    to_encode: dict[str, object] = {"sub": username}
    if extra_claims:
        to_encode.update(extra_claims)
    expire = datetime.now(UTC) + timedelta(minutes=settings.access_token_expire_minutes)
    to_encode["exp"] = expire
    encoded_jwt: str = jwt.encode(
        to_encode,
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )
    return encoded_jwt


def decode_username(token: str) -> str | None:
    """Return the username carried by `token`, or None if it is invalid."""
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None
    subject = payload.get("sub")
    return subject if isinstance(subject, str) and subject else None
