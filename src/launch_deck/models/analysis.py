"""SQLAlchemy models for GitHub profile analyses and the leaderboard cache."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, Float, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from launch_deck.db.session import Base
from launch_deck.db.time import utcnow

SNAPSHOT_TYPE_LEADERBOARD = "leaderboard"


class Analysis(Base):
    """Latest profile analysis for a GitHub user (one row per username)."""

    __tablename__ = "analysis"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    avatar_url: Mapped[str] = mapped_column(Text, nullable=False, default="")
    name: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Signal scores, 0-100.
    grit: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    focus: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    craft: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    impact: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    voice: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    reach: Mapped[float] = mapped_column(Float, nullable=False, default=0)

    overall_rating: Mapped[float] = mapped_column(Float, nullable=False, index=True)
    # Letter grade: S, A, B or C.
    tier: Mapped[str] = mapped_column(Text, nullable=False)
    archetype_id: Mapped[str] = mapped_column(Text, nullable=False)

    total_stars: Mapped[int | None] = mapped_column(Integer, nullable=True)
    followers: Mapped[int | None] = mapped_column(Integer, nullable=True)
    top_language: Mapped[str | None] = mapped_column(Text, nullable=True)

    analyzed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )


class LeaderboardSnapshot(Base):
    """Pre-aggregated leaderboard, rebuilt wholesale by the aggregator."""

    __tablename__ = "stats"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # Singleton per type.
    type: Mapped[str] = mapped_column(
        Text, unique=True, nullable=False, default=SNAPSHOT_TYPE_LEADERBOARD
    )
    top_users: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)
    # [{"bucket": "0-10", "count": 3}, ...] in ascending bucket order.
    distribution: Mapped[list[dict[str, Any]]] = mapped_column(
        JSON, nullable=False, default=list
    )
    total_users: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
