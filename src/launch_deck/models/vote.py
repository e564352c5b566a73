# src/launch_deck/models/vote.py
"""Models capturing up/down voting on board posts."""

from datetime import datetime

from sqlalchemy import (
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

VOTE_UP = "up"
VOTE_DOWN = "down"


class PostVote(Base):
    """Per-user vote on a board post."""

    __tablename__ = "board_post_vote"
    __table_args__ = (
        CheckConstraint("vote_type IN ('up', 'down')", name="ck_board_post_vote_type"),
        # Prevents duplicate votes from the same user.
        UniqueConstraint("post_id", "voter_username", name="uq_board_post_vote_post_voter"),
        Index("ix_board_post_vote_post_id", "post_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    post_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("board_post.id", ondelete="CASCADE"),
        nullable=False,
    )
    voter_username: Mapped[str] = mapped_column(Text, nullable=False)
    vote_type: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
