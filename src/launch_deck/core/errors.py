"""Domain exceptions raised by the service layer.

Services raise these; the API layer translates them into HTTP responses and
surfaces the message verbatim.
"""

from __future__ import annotations


class LaunchDeckError(Exception):
    """Base class for all domain errors."""


class ValidationError(LaunchDeckError):
    """A precondition on the caller's request was not met."""


class NotFoundError(LaunchDeckError):
    """A referenced entity does not exist."""


class PermissionDeniedError(LaunchDeckError):
    """The caller lacks the role required for the action."""


__all__ = [
    "LaunchDeckError",
    "ValidationError",
    "NotFoundError",
    "PermissionDeniedError",
]
