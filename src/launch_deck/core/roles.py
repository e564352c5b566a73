"""Default station roles and permission helpers."""

from __future__ import annotations

from dataclasses import dataclass

PERMISSION_VIEW = "view"
PERMISSION_POST = "post"
PERMISSION_PIN = "pin"
PERMISSION_DELETE = "delete"
PERMISSION_SETTINGS = "settings"
PERMISSION_PROMOTE = "promote"
PERMISSION_BAN = "ban"
PERMISSION_ROLES = "roles"

ROLE_CAPTAIN = "captain"
ROLE_CO_CAPTAIN = "co-captain"
ROLE_MODERATOR = "moderator"
ROLE_CREW = "crew"


@dataclass(frozen=True)
class RoleTemplate:
    """Blueprint for a role seeded into every new station."""

    name: str
    slug: str
    color: str
    permissions: tuple[str, ...]
    # Higher priority outranks lower when comparing authority.
    priority: int
    is_default: bool = False
    is_system: bool = True


DEFAULT_STATION_ROLES: tuple[RoleTemplate, ...] = (
    RoleTemplate(
        name="Captain",
        slug=ROLE_CAPTAIN,
        color="#FFD700",
        permissions=(
            PERMISSION_VIEW,
            PERMISSION_POST,
            PERMISSION_PIN,
            PERMISSION_DELETE,
            PERMISSION_SETTINGS,
            PERMISSION_PROMOTE,
            PERMISSION_BAN,
            PERMISSION_ROLES,
        ),
        priority=100,
    ),
    RoleTemplate(
        name="Co-Captain",
        slug=ROLE_CO_CAPTAIN,
        color="#C0C0C0",
        permissions=(
            PERMISSION_VIEW,
            PERMISSION_POST,
            PERMISSION_PIN,
            PERMISSION_DELETE,
            PERMISSION_SETTINGS,
            PERMISSION_PROMOTE,
            PERMISSION_BAN,
        ),
        priority=90,
    ),
    RoleTemplate(
        name="Moderator",
        slug=ROLE_MODERATOR,
        color="#4CAF50",
        permissions=(PERMISSION_VIEW, PERMISSION_POST, PERMISSION_PIN, PERMISSION_DELETE),
        priority=50,
    ),
    RoleTemplate(
        name="Crew",
        slug=ROLE_CREW,
        color="#2196F3",
        permissions=(PERMISSION_VIEW, PERMISSION_POST),
        priority=10,
        is_default=True,
    ),
)

_TEMPLATES_BY_SLUG = {template.slug: template for template in DEFAULT_STATION_ROLES}


def has_permission(role: str, permission: str) -> bool:
    """Return True when the system role `role` grants `permission`."""
    template = _TEMPLATES_BY_SLUG.get(role)
    if template is None:
        return False
    return permission in template.permissions


def role_priority(role: str) -> int:
    template = _TEMPLATES_BY_SLUG.get(role)
    return template.priority if template else 0


__all__ = [
    "DEFAULT_STATION_ROLES",
    "RoleTemplate",
    "has_permission",
    "role_priority",
    "ROLE_CAPTAIN",
    "ROLE_CO_CAPTAIN",
    "ROLE_MODERATOR",
    "ROLE_CREW",
]
