"""SQLAlchemy models for launches, launch votes and weekly results."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import (
    JSON,
    BigInteger,
    Boolean,
    CheckConstraint,
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

LAUNCH_STATUS_PENDING = "pending"
LAUNCH_STATUS_ACTIVE = "active"
LAUNCH_STATUS_CLOSED = "closed"

PRODUCT_TYPES = ("vitamin", "painkiller", "candy")


class Launch(Base):
    """A product submitted to a weekly competition."""

    __tablename__ = "launch"
    __table_args__ = (
        CheckConstraint(
            "status IN ('pending', 'active', 'closed')", name="ck_launch_status"
        ),
        Index("ix_launch_week_number", "week_number"),
        Index("ix_launch_username", "username"),
        Index("ix_launch_linked_idea_id", "linked_idea_id"),
        Index("ix_launch_is_poten", "is_poten"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(Text, nullable=False)

    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    demo_url: Mapped[str] = mapped_column(Text, nullable=False)
    github_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    screenshot: Mapped[str | None] = mapped_column(Text, nullable=True)
    target_audience: Mapped[str | None] = mapped_column(Text, nullable=True)
    problem_solved: Mapped[str | None] = mapped_column(Text, nullable=True)

    # URL metadata captured when the demo link was unfurled.
    og_image: Mapped[str | None] = mapped_column(Text, nullable=True)
    favicon: Mapped[str | None] = mapped_column(Text, nullable=True)
    site_name: Mapped[str | None] = mapped_column(Text, nullable=True)

    # ISO week key, e.g. "2026-W07".
    week_number: Mapped[str] = mapped_column(Text, nullable=False)

    vote_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    weighted_score: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    # One-way latch; see PotenAchievement for the crossing record.
    is_poten: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    poten_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    # 1..3, assigned only when the week is finalized.
    rank: Mapped[int | None] = mapped_column(Integer, nullable=True)
    status: Mapped[str] = mapped_column(Text, nullable=False, default=LAUNCH_STATUS_ACTIVE)

    vitamin_votes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    painkiller_votes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    candy_votes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    verified_feedback_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    promotion_boost: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # Uniqueness is enforced by lookup at submission time, not by the schema.
    linked_idea_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("idea.id"), nullable=True
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )


class LaunchVote(Base):
    """A single voter's weighted vote on a launch.

    Votes are never edited; removing a vote deletes the row.
    """

    __tablename__ = "launch_vote"
    __table_args__ = (
        UniqueConstraint("launch_id", "voter_username", name="uq_launch_vote_launch_voter"),
        CheckConstraint(
            "product_type_vote IS NULL OR product_type_vote IN ('vitamin', 'painkiller', 'candy')",
            name="ck_launch_vote_product_type",
        ),
        Index("ix_launch_vote_launch_id", "launch_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    launch_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("launch.id", ondelete="CASCADE"), nullable=False
    )
    voter_username: Mapped[str] = mapped_column(Text, nullable=False)

    weight: Mapped[int] = mapped_column(Integer, nullable=False)
    multiplier: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    is_verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    feedback_text: Mapped[str | None] = mapped_column(Text, nullable=True)
    product_type_vote: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Epoch milliseconds reported by the client around the product visit.
    visited_at: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    returned_at: Mapped[int | None] = mapped_column(BigInteger, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )


class WeeklyResult(Base):
    """Frozen outcome of a finalized competition week."""

    __tablename__ = "weekly_result"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # Unique so a week can only ever be finalized once.
    week_number: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    winners: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)
    total_launches: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_votes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    finalized_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
