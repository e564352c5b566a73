"""Builder rank bookkeeping.

Point grants are applied as in-database increments on the participant's row,
so a weekly reward and a concurrent vote on the same row both land. Shipping
grants then recompute the tier score and the tier from the three point pools;
promotion grants do not move the tier. Grants for a participant without a
rank row create one first, so a reward is never dropped for lack of a profile.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from launch_deck.core.tiers import TIER_NAMES, TierModel, default_tier_model
from launch_deck.db.time import utcnow
from launch_deck.models import BuilderRank
from launch_deck.repositories import Repository, eq

logger = logging.getLogger(__name__)

REASON_WEEKLY_FIRST = "weekly_first"
REASON_WEEKLY_PODIUM = "weekly_podium"


@dataclass(frozen=True)
class PromotionGrant:
    promotion_points: int
    vote_multiplier: int


class BuilderRankService:
    """Reads and updates `BuilderRank` rows.

    Methods run inside the caller's transaction; callers wrap them in
    `atomic`.
    """

    def __init__(self, db: Session, tiers: TierModel | None = None) -> None:
        self.db = db
        self.tiers = tiers or default_tier_model()
        self.ranks = Repository(db, BuilderRank)

    def get(self, username: str) -> BuilderRank | None:
        return self.ranks.first(eq(BuilderRank.username, username))

    def initialize(self, username: str) -> BuilderRank:
        """Return the participant's rank, creating it at Ground Control if missing."""
        rank = self.get(username)
        if rank is not None:
            return rank
        try:
            with self.db.begin_nested():
                rank = self.ranks.add(
                    BuilderRank(
                        username=username,
                        tier=0,
                        shipping_points=0,
                        community_karma=0,
                        trust_score=0,
                        tier_score=0,
                        promotion_points=0,
                        weekly_wins=0,
                        monthly_wins=0,
                        poten_count=0,
                    )
                )
        except IntegrityError:
            # Created by a concurrent request.
            rank = self.get(username)
            if rank is None:
                raise
            return rank
        logger.debug("Initialized builder rank for %s", username)
        return rank

    def lock(self, username: str) -> BuilderRank:
        """Lock the participant's rank row until the transaction ends.

        Serializes per-participant checks such as the weekly launch cap. The
        row is touched as well, which takes the write lock on backends
        without row locks (SQLite).
        """
        rank = self.ranks.get(self.initialize(username).id, for_update=True)
        rank.updated_at = utcnow()
        self.db.flush()
        return rank

    def _recompute(self, rank: BuilderRank) -> None:
        rank.tier_score = self.tiers.calculate_tier_score(
            rank.shipping_points, rank.community_karma, rank.trust_score
        )
        previous = rank.tier
        rank.tier = self.tiers.tier_from_score(rank.tier_score)
        rank.updated_at = utcnow()
        if rank.tier != previous:
            logger.info(
                "%s moved from tier %d to tier %d (score %d)",
                rank.username,
                previous,
                rank.tier,
                rank.tier_score,
            )
        self.db.flush()

    def add_shipping_points(self, username: str, points: int, reason: str) -> BuilderRank:
        """Grant shipping points; a weekly first place also counts as a weekly win."""
        deltas = {"shipping_points": points}
        if reason == REASON_WEEKLY_FIRST:
            deltas["weekly_wins"] = 1
        rank = self.ranks.increment(self.initialize(username).id, **deltas)
        self._recompute(rank)
        return rank

    def add_promotion_points(self, username: str, points: int) -> PromotionGrant:
        """Grant promotion points; they count toward community karma as well."""
        rank = self.ranks.increment(
            self.initialize(username).id,
            promotion_points=points,
            community_karma=points,
        )
        return PromotionGrant(
            promotion_points=rank.promotion_points,
            vote_multiplier=self.tiers.promotion_vote_multiplier(rank.promotion_points),
        )

    def top_builders(self, limit: int = 20) -> list[BuilderRank]:
        stmt = (
            select(BuilderRank)
            .order_by(BuilderRank.tier_score.desc(), BuilderRank.id)
            .limit(limit)
        )
        return list(self.db.execute(stmt).scalars())

    def by_tier(self, tier: int) -> list[BuilderRank]:
        return self.ranks.collect(eq(BuilderRank.tier, tier))

    def tier_distribution(self) -> dict[int, int]:
        """Return the number of participants per tier, with every tier present."""
        counts = {tier: 0 for tier in range(len(TIER_NAMES))}
        stmt = select(BuilderRank.tier, func.count()).group_by(BuilderRank.tier)
        for tier, count in self.db.execute(stmt):
            counts[tier] = int(count)
        return counts


def tier_name(tier: int) -> str:
    if 0 <= tier < len(TIER_NAMES):
        return TIER_NAMES[tier]
    return TIER_NAMES[0]


__all__ = [
    "BuilderRankService",
    "PromotionGrant",
    "REASON_WEEKLY_FIRST",
    "REASON_WEEKLY_PODIUM",
    "tier_name",
]
