"""Append-only Poten crossing records."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from launch_deck.db.time import utcnow
from launch_deck.models import PotenAchievement
from launch_deck.repositories import Repository, eq

logger = logging.getLogger(__name__)


def record_poten(db: Session, target_type: str, target_id: int, score: int) -> PotenAchievement:
    """Append the crossing record for a target inside the caller's transaction.

    Returns the existing row when the target already crossed; rows are never
    updated.
    """
    repo = Repository(db, PotenAchievement)
    existing = repo.first(
        eq(PotenAchievement.target_type, target_type),
        eq(PotenAchievement.target_id, target_id),
    )
    if existing is not None:
        return existing

    achievement = repo.add(
        PotenAchievement(
            target_type=target_type,
            target_id=target_id,
            score_at_crossing=score,
            crossed_at=utcnow(),
        )
    )
    logger.info("%s %d crossed the Poten threshold at score %d", target_type, target_id, score)
    return achievement


__all__ = ["record_poten"]
