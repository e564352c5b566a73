"""SQLAlchemy model for validated product ideas."""

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from launch_deck.db.session import Base
from launch_deck.db.time import utcnow

IDEA_STATUS_OPEN = "open"
IDEA_STATUS_VALIDATED = "validated"
IDEA_STATUS_LAUNCHED = "launched"
IDEA_STATUS_CLOSED = "closed"


class Idea(Base):
    """An idea the community validates before it becomes a launch."""

    __tablename__ = "idea"
    __table_args__ = (
        CheckConstraint(
            "status IN ('open', 'validated', 'launched', 'closed')", name="ck_idea_status"
        ),
        Index("ix_idea_author_username", "author_username"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    author_username: Mapped[str] = mapped_column(Text, nullable=False)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    problem: Mapped[str] = mapped_column(Text, nullable=False, default="")
    solution: Mapped[str] = mapped_column(Text, nullable=False, default="")
    target_audience: Mapped[str] = mapped_column(Text, nullable=False, default="")
    status: Mapped[str] = mapped_column(Text, nullable=False, default=IDEA_STATUS_OPEN)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
