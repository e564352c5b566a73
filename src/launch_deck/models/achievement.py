"""Append-only record of Poten threshold crossings."""

from datetime import datetime

from sqlalchemy import DateTime, Integer, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from launch_deck.db.session import Base
from launch_deck.db.time import utcnow

TARGET_LAUNCH = "launch"
TARGET_POST = "post"


class PotenAchievement(Base):
    """Event row written once when a launch or post first crosses its threshold.

    Rows are never updated or deleted; the `is_poten` flags on Launch and Post
    mirror the existence of a row here.
    """

    __tablename__ = "poten_achievement"
    __table_args__ = (
        UniqueConstraint("target_type", "target_id", name="uq_poten_achievement_target"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    target_type: Mapped[str] = mapped_column(Text, nullable=False)
    target_id: Mapped[int] = mapped_column(Integer, nullable=False)
    score_at_crossing: Mapped[int] = mapped_column(Integer, nullable=False)
    crossed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
