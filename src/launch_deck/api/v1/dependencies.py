"""Shared API dependencies for authentication and error translation."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from launch_deck.core.errors import (
    LaunchDeckError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from launch_deck.core.security import decode_username
from launch_deck.db.session import get_db

# HTTP Bearer scheme for JWT authentication
bearer_scheme = HTTPBearer()

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def get_current_username(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(bearer_scheme)],
) -> str:
    """Return the username carried by the bearer token.

    Raises:
        HTTPException: If the token is invalid or carries no subject
    """
    username = decode_username(credentials.credentials)
    if username is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
        )
    return username


# Type alias for current user dependency
CurrentUsernameDep = Annotated[str, Depends(get_current_username)]

_STATUS_BY_ERROR: tuple[tuple[type[LaunchDeckError], int], ...] = (
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (PermissionDeniedError, status.HTTP_403_FORBIDDEN),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
)


@contextmanager
def domain_errors() -> Iterator[None]:
    """Translate service-layer errors into HTTP responses with the message as detail."""
    try:
        yield
    except LaunchDeckError as err:
        code = status.HTTP_400_BAD_REQUEST
        for error_type, mapped in _STATUS_BY_ERROR:
            if isinstance(err, error_type):
                code = mapped
                break
        raise HTTPException(status_code=code, detail=str(err)) from err
