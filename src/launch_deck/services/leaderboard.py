"""Leaderboard snapshot aggregation and rank estimation.

The snapshot is a single pre-aggregated row rebuilt wholesale from every
stored analysis. Rank lookups read only the snapshot's ten rating buckets, so
they are constant-time but approximate: users inside the caller's own bucket
are assumed to be split evenly above and below.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from launch_deck.core.settings import settings
from launch_deck.db.time import utcnow
from launch_deck.db.transaction import atomic
from launch_deck.models import Analysis, LeaderboardSnapshot
from launch_deck.models.analysis import SNAPSHOT_TYPE_LEADERBOARD
from launch_deck.repositories import Repository, eq
from launch_deck.schemas.leaderboard import AnalysisCreate

logger = logging.getLogger(__name__)

BUCKET_WIDTH = 10
BUCKET_COUNT = 10
_TOP_USER_FIELDS = (
    "username",
    "avatar_url",
    "overall_rating",
    "tier",
    "archetype_id",
    "total_stars",
    "followers",
    "top_language",
)


@dataclass(frozen=True)
class UserRank:
    rank: int | None
    total: int
    percentile: int | None


def bucket_start(rating: float) -> int:
    """Return the lower edge of the rating's bucket; 100 falls into 90-100."""
    start = math.floor(rating / BUCKET_WIDTH) * BUCKET_WIDTH
    return min(max(start, 0), BUCKET_WIDTH * (BUCKET_COUNT - 1))


def bucket_label(start: int) -> str:
    return f"{start}-{start + BUCKET_WIDTH}"


def calculate_distribution(ratings: Iterable[float]) -> list[dict[str, Any]]:
    """Count ratings per bucket; every bucket is present, in ascending order."""
    counts = {start: 0 for start in range(0, BUCKET_WIDTH * BUCKET_COUNT, BUCKET_WIDTH)}
    for rating in ratings:
        counts[bucket_start(rating)] += 1
    return [{"bucket": bucket_label(start), "count": count} for start, count in counts.items()]


def estimate_rank(
    rating: float, distribution: Sequence[Mapping[str, Any]], total: int
) -> tuple[int, int]:
    """Estimate `(rank, percentile)` for a rating from bucket counts."""
    own_bucket = bucket_start(rating)
    # Nobody is above a rating at the top edge of the last bucket.
    at_ceiling = rating >= BUCKET_WIDTH * BUCKET_COUNT
    higher = 0
    for bucket in distribution:
        start = int(str(bucket["bucket"]).split("-", 1)[0])
        if start > rating:
            higher += int(bucket["count"])
        elif start == own_bucket and not at_ceiling:
            higher += int(bucket["count"]) // 2

    rank = higher + 1
    if total <= 0:
        return rank, 0
    # Half-up rounding.
    percentile = math.floor((total - rank + 1) / total * 100 + 0.5)
    return rank, percentile


def _top_user(analysis: Analysis) -> dict[str, Any]:
    return {name: getattr(analysis, name) for name in _TOP_USER_FIELDS}


class LeaderboardAggregator:
    """Maintains the leaderboard snapshot."""

    def __init__(self, db: Session, top_limit: int | None = None) -> None:
        self.db = db
        self.top_limit = top_limit or settings.leaderboard_top_limit
        self.analyses = Repository(db, Analysis)
        self.snapshots = Repository(db, LeaderboardSnapshot)

    def save_analysis(self, data: AnalysisCreate) -> Analysis:
        """Insert or replace the analysis for `data.username`."""
        values = data.model_dump()
        values["analyzed_at"] = values.get("analyzed_at") or utcnow()
        with atomic(self.db):
            analysis = self.analyses.first(eq(Analysis.username, data.username))
            if analysis is None:
                analysis = self.analyses.add(Analysis(**values))
            else:
                for name, value in values.items():
                    setattr(analysis, name, value)
                self.db.flush()
        return analysis

    def get_analysis(self, username: str) -> Analysis | None:
        return self.analyses.first(eq(Analysis.username, username))

    def rebuild_snapshot(self) -> LeaderboardSnapshot | None:
        """Recompute the snapshot from all analyses.

        Does nothing (and returns None) when there are no analyses yet.
        """
        stmt = select(Analysis).order_by(Analysis.overall_rating.desc(), Analysis.id)
        analyses = list(self.db.execute(stmt).scalars())
        if not analyses:
            logger.debug("No analyses stored; leaderboard snapshot left unchanged")
            return None

        top_users = [_top_user(analysis) for analysis in analyses[: self.top_limit]]
        distribution = calculate_distribution(analysis.overall_rating for analysis in analyses)

        with atomic(self.db):
            snapshot = self.get_snapshot()
            if snapshot is None:
                snapshot = LeaderboardSnapshot(type=SNAPSHOT_TYPE_LEADERBOARD)
                self.db.add(snapshot)
            snapshot.top_users = top_users
            snapshot.distribution = distribution
            snapshot.total_users = len(analyses)
            snapshot.updated_at = utcnow()
            self.db.flush()

        logger.info("Rebuilt leaderboard snapshot over %d analyses", len(analyses))
        return snapshot

    def get_snapshot(self) -> LeaderboardSnapshot | None:
        return self.snapshots.first(eq(LeaderboardSnapshot.type, SNAPSHOT_TYPE_LEADERBOARD))

    def get_user_rank(self, rating: float) -> UserRank:
        snapshot = self.get_snapshot()
        if snapshot is None:
            return UserRank(rank=None, total=0, percentile=None)
        rank, percentile = estimate_rank(rating, snapshot.distribution, snapshot.total_users)
        return UserRank(rank=rank, total=snapshot.total_users, percentile=percentile)


__all__ = [
    "LeaderboardAggregator",
    "UserRank",
    "bucket_start",
    "calculate_distribution",
    "estimate_rank",
]
