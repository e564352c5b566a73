"""Community station auto-provisioning.

A station is created for a launch either when the launch is submitted or when
it first crosses the Poten threshold. Both entry points are idempotent: a
launch never gets more than one station, whether the second call comes
sequentially or races the first one.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from launch_deck.core.errors import NotFoundError, ValidationError
from launch_deck.core.roles import DEFAULT_STATION_ROLES, ROLE_CAPTAIN, ROLE_CREW
from launch_deck.db.time import utcnow
from launch_deck.models import Launch, LaunchVote, Station, StationCrew, StationRole, User
from launch_deck.models.station import STATION_STATUS_ACTIVE
from launch_deck.repositories import Repository, eq

logger = logging.getLogger(__name__)

SLUG_MAX_LENGTH = 50
_SLUG_INVALID = re.compile(r"[^a-z0-9]+")


def generate_slug(title: str) -> str:
    """Turn a launch title into a URL slug.

    Lower-cases, collapses every run of characters outside `[a-z0-9]` into a
    single hyphen, strips edge hyphens and truncates to 50 characters.
    """
    slug = _SLUG_INVALID.sub("-", title.lower()).strip("-")
    return slug[:SLUG_MAX_LENGTH] or "station"


def adjust_station_memberships(db: Session, username: str, delta: int) -> None:
    """Shift a user's membership counter, floored at zero; unknown users are skipped."""
    user = Repository(db, User).first(eq(User.username, username))
    if user is None:
        return
    user.station_memberships = max(0, user.station_memberships + delta)


class StationProvisioner:
    """Creates stations for launches.

    Provisioning runs inside the caller's transaction. The station insert and
    everything hanging off it are wrapped in a savepoint: when a concurrent
    caller wins the race on the unique `launch_id` index, the savepoint is
    rolled back and the winner's station is returned instead.
    """

    def __init__(self, db: Session) -> None:
        self.db = db
        self.stations = Repository(db, Station)
        self.roles = Repository(db, StationRole)
        self.crew = Repository(db, StationCrew)

    def get_station_for_launch(self, launch_id: int) -> Station | None:
        return self.stations.first(eq(Station.launch_id, launch_id))

    def unique_slug(self, title: str) -> str:
        base = generate_slug(title)
        slug = base
        counter = 1
        while self.stations.first(eq(Station.slug, slug)) is not None:
            slug = f"{base}-{counter}"
            counter += 1
        return slug

    def create_station_for_launch(self, launch_id: int) -> Station:
        """Provision the station for a freshly submitted launch."""
        launch = self._get_launch(launch_id)
        return self._provision(launch, voters=())

    def create_station_from_poten(self, launch_id: int) -> Station:
        """Provision the station for a launch that went Poten.

        Every existing voter other than the owner joins as crew.
        """
        launch = self._get_launch(launch_id)
        if not launch.is_poten:
            raise ValidationError("Only Poten launches can create stations")
        votes = Repository(self.db, LaunchVote).collect(eq(LaunchVote.launch_id, launch.id))
        return self._provision(launch, voters=(vote.voter_username for vote in votes))

    def _get_launch(self, launch_id: int) -> Launch:
        launch = self.db.get(Launch, launch_id)
        if launch is None:
            raise NotFoundError("Launch not found.")
        return launch

    def _provision(self, launch: Launch, voters: Iterable[str]) -> Station:
        existing = self.get_station_for_launch(launch.id)
        if existing is not None:
            logger.debug("Station %s already exists for launch %d", existing.slug, launch.id)
            return existing

        try:
            with self.db.begin_nested():
                station = self._insert_station(launch)
                self._seed_roles(station)
                self._add_member(station, launch.username, ROLE_CAPTAIN)

                member_count = 1
                seen = {launch.username}
                for voter in voters:
                    if voter in seen:
                        continue
                    seen.add(voter)
                    self._add_member(station, voter, ROLE_CREW)
                    member_count += 1
                station.member_count = member_count
                self.db.flush()
        except IntegrityError:
            existing = self.get_station_for_launch(launch.id)
            if existing is None:
                raise
            logger.info("Lost station race for launch %d; using %s", launch.id, existing.slug)
            return existing

        logger.info(
            "Provisioned station %s for launch %d with %d members",
            station.slug,
            launch.id,
            station.member_count,
        )
        return station

    def _insert_station(self, launch: Launch) -> Station:
        return self.stations.add(
            Station(
                slug=self.unique_slug(launch.title),
                name=launch.title,
                description=launch.description,
                owner_username=launch.username,
                launch_id=launch.id,
                logo_url=launch.og_image or launch.screenshot,
                member_count=1,
                post_count=0,
                weekly_active_members=1,
                status=STATION_STATUS_ACTIVE,
                created_at=utcnow(),
            )
        )

    def _seed_roles(self, station: Station) -> None:
        for template in DEFAULT_STATION_ROLES:
            self.db.add(
                StationRole(
                    station_id=station.id,
                    name=template.name,
                    slug=template.slug,
                    color=template.color,
                    permissions=list(template.permissions),
                    priority=template.priority,
                    is_default=template.is_default,
                    is_system=template.is_system,
                )
            )
        self.db.flush()

    def _add_member(self, station: Station, username: str, role: str) -> None:
        self.crew.add(
            StationCrew(
                station_id=station.id,
                username=username,
                role=role,
                karma_earned_here=0,
                joined_at=utcnow(),
            )
        )
        adjust_station_memberships(self.db, username, 1)


__all__ = [
    "StationProvisioner",
    "adjust_station_memberships",
    "generate_slug",
]
