"""Unit-of-work helper used by every mutating service call."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.orm import Session


@contextmanager
def atomic(db: Session) -> Iterator[Session]:
    """Run the enclosed block as one transaction.

    Commits when the block finishes and rolls back on any exception, so a
    failed precondition leaves no partial writes behind.
    """
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
