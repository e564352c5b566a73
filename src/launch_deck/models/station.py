"""SQLAlchemy models for stations, their roles and crew membership."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import (
    JSON,
    Boolean,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from launch_deck.db.session import Base
from launch_deck.db.time import utcnow

STATION_STATUS_ACTIVE = "active"
STATION_STATUS_ARCHIVED = "archived"


class Station(Base):
    """Community space provisioned for exactly one launch."""

    __tablename__ = "station"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    slug: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    owner_username: Mapped[str] = mapped_column(Text, nullable=False)
    # One station per launch.
    launch_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("launch.id"), unique=True, nullable=False
    )
    logo_url: Mapped[str | None] = mapped_column(Text, nullable=True)

    member_count: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    post_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    weekly_active_members: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    status: Mapped[str] = mapped_column(Text, nullable=False, default=STATION_STATUS_ACTIVE)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )


class StationRole(Base):
    """Named permission set inside a station."""

    __tablename__ = "station_role"
    __table_args__ = (
        UniqueConstraint("station_id", "slug", name="uq_station_role_station_slug"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    station_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("station.id", ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)
    slug: Mapped[str] = mapped_column(Text, nullable=False)
    color: Mapped[str | None] = mapped_column(Text, nullable=True)
    permissions: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    priority: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    # Role given to new joiners.
    is_default: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    # System roles cannot be deleted.
    is_system: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)


class StationCrew(Base):
    """Membership of a user in a station."""

    __tablename__ = "station_crew"
    __table_args__ = (
        UniqueConstraint("station_id", "username", name="uq_station_crew_station_user"),
        Index("ix_station_crew_username", "username"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    station_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("station.id", ondelete="CASCADE"), nullable=False
    )
    username: Mapped[str] = mapped_column(Text, nullable=False)
    # Slug of a StationRole row.
    role: Mapped[str] = mapped_column(Text, nullable=False)
    karma_earned_here: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    joined_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
