# src/launch_deck/models/post.py
"""SQLAlchemy models for discussion board posts."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from launch_deck.db.session import Base
from launch_deck.db.time import utcnow

# Minimum author tier required to post in each board.
BOARD_MIN_TIER: dict[str, int] = {
    "launch_week": 0,
    "hall_of_fame": 0,
    "feedback": 1,
    "discussion": 2,
    "vip_lounge": 6,
}


class Post(Base):
    """Discussion post that can break out ("Poten") on net upvotes."""

    __tablename__ = "board_post"
    __table_args__ = (
        Index("ix_board_post_board_type", "board_type"),
        Index("ix_board_post_is_poten", "is_poten"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    author_username: Mapped[str] = mapped_column(Text, nullable=False)
    board_type: Mapped[str] = mapped_column(Text, nullable=False)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)

    upvotes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    downvotes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    comment_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # One-way latch stamped the first time net votes reach the threshold.
    is_poten: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    poten_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
