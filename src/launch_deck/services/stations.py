"""Station membership and role checks."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from launch_deck.core.errors import NotFoundError, ValidationError
from launch_deck.core.roles import ROLE_CREW
from launch_deck.db.time import utcnow
from launch_deck.models import Station, StationCrew, StationRole
from launch_deck.models.station import STATION_STATUS_ACTIVE
from launch_deck.repositories import Repository, eq

from .provisioning import adjust_station_memberships

logger = logging.getLogger(__name__)


class StationService:
    """Crew membership for existing stations."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.stations = Repository(db, Station)
        self.crew = Repository(db, StationCrew)
        self.roles = Repository(db, StationRole)

    def get_by_slug(self, slug: str) -> Station:
        station = self.stations.first(eq(Station.slug, slug))
        if station is None:
            raise NotFoundError("Station not found")
        return station

    def list_crew(self, station: Station) -> list[StationCrew]:
        return self.crew.collect(eq(StationCrew.station_id, station.id))

    def list_roles(self, station: Station) -> list[StationRole]:
        return self.roles.collect(
            eq(StationRole.station_id, station.id),
            order_by=StationRole.priority.desc(),
        )

    def get_membership(self, station: Station, username: str) -> StationCrew | None:
        return self.crew.first(
            eq(StationCrew.station_id, station.id),
            eq(StationCrew.username, username),
        )

    def _default_role(self, station: Station) -> str:
        role = self.roles.first(
            eq(StationRole.station_id, station.id),
            eq(StationRole.is_default, True),
        )
        return role.slug if role is not None else ROLE_CREW

    def join(self, station: Station, username: str) -> StationCrew:
        if station.status != STATION_STATUS_ACTIVE:
            raise ValidationError("Station is not active")
        if self.get_membership(station, username) is not None:
            raise ValidationError("Already a crew member")

        member = self.crew.add(
            StationCrew(
                station_id=station.id,
                username=username,
                role=self._default_role(station),
                karma_earned_here=0,
                joined_at=utcnow(),
            )
        )
        station.member_count += 1
        adjust_station_memberships(self.db, username, 1)
        logger.info("%s joined station %s", username, station.slug)
        return member

    def leave(self, station: Station, username: str) -> None:
        if station.owner_username == username:
            raise ValidationError("Captain cannot leave their station")
        member = self.get_membership(station, username)
        if member is None:
            raise ValidationError("Not a crew member")

        self.crew.delete(member)
        station.member_count = max(0, station.member_count - 1)
        adjust_station_memberships(self.db, username, -1)
        logger.info("%s left station %s", username, station.slug)

    def _role_row(self, station: Station, role_slug: str) -> StationRole | None:
        return self.roles.first(
            eq(StationRole.station_id, station.id),
            eq(StationRole.slug, role_slug),
        )

    def check_permission(self, station: Station, username: str, permission: str) -> bool:
        """Return True when the user's role in this station grants `permission`."""
        member = self.get_membership(station, username)
        if member is None:
            return False
        role = self._role_row(station, member.role)
        return role is not None and permission in role.permissions

    def outranks(self, station: Station, actor: str, target: str) -> bool:
        """Return True when `actor` holds a strictly higher-priority role than `target`."""
        actor_member = self.get_membership(station, actor)
        target_member = self.get_membership(station, target)
        if actor_member is None or target_member is None:
            return False
        actor_role = self._role_row(station, actor_member.role)
        target_role = self._role_row(station, target_member.role)
        actor_priority = actor_role.priority if actor_role else 0
        target_priority = target_role.priority if target_role else 0
        return actor_priority > target_priority


__all__ = ["StationService"]
