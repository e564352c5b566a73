"""SQLAlchemy models for participant profiles and builder ranks."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from launch_deck.db.session import Base
from launch_deck.db.time import utcnow


class User(Base):
    """Participant profile keyed by the username identity supplies."""

    __tablename__ = "app_user"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    display_name: Mapped[str | None] = mapped_column(Text, nullable=True)
    avatar_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    # Number of stations the user belongs to, in any role.
    station_memberships: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class BuilderRank(Base):
    """Per-participant standing that gates voting and collects rewards."""

    __tablename__ = "builder_rank"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(Text, unique=True, nullable=False)

    # 0 = Ground Control (cannot vote) ... 7 = Cosmos.
    tier: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    shipping_points: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    community_karma: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    trust_score: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    tier_score: Mapped[int] = mapped_column(Integer, nullable=False, default=0, index=True)
    promotion_points: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    weekly_wins: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    monthly_wins: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    poten_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )
