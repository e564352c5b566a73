"""Tier-based scoring tables.

`TierModel` bundles every constant the ranking engines depend on: vote
weights per participation tier, feedback multipliers, promotion point grants,
Poten thresholds and weekly rewards. Engines receive an instance at
construction time so tests can substitute alternate tables.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum
from types import MappingProxyType

from launch_deck.core.settings import settings


class FeedbackKind(str, Enum):
    """How much effort a voter put into a vote."""

    QUICK_VOTE = "quickVote"
    REVIEW = "review"
    VERIFIED_REVIEW = "verifiedReview"


# Ground Control, Cadet, Pilot, Astronaut, Commander, Captain, Admiral, Cosmos.
TIER_NAMES: tuple[str, ...] = (
    "Ground Control",
    "Cadet",
    "Pilot",
    "Astronaut",
    "Commander",
    "Captain",
    "Admiral",
    "Cosmos",
)

_DEFAULT_VOTE_WEIGHTS = MappingProxyType({0: 0, 1: 1, 2: 1, 3: 2, 4: 3, 5: 5, 6: 5, 7: 5})
_DEFAULT_MULTIPLIERS = MappingProxyType(
    {
        FeedbackKind.QUICK_VOTE: 1,
        FeedbackKind.REVIEW: 3,
        FeedbackKind.VERIFIED_REVIEW: 5,
    }
)
_DEFAULT_PROMOTION_POINTS = MappingProxyType(
    {
        FeedbackKind.QUICK_VOTE: 1,
        FeedbackKind.REVIEW: 5,
        FeedbackKind.VERIFIED_REVIEW: 10,
    }
)
# (minimum tier score, tier), highest first.
_DEFAULT_TIER_THRESHOLDS: tuple[tuple[int, int], ...] = (
    (3000, 7),
    (1500, 6),
    (800, 5),
    (400, 4),
    (150, 3),
    (50, 2),
    (10, 1),
)


@dataclass(frozen=True)
class TierModel:
    """Immutable lookup tables for vote weighting and rewards."""

    vote_weights: Mapping[int, int] = field(default_factory=lambda: _DEFAULT_VOTE_WEIGHTS)
    feedback_multipliers: Mapping[FeedbackKind, int] = field(
        default_factory=lambda: _DEFAULT_MULTIPLIERS
    )
    promotion_points: Mapping[FeedbackKind, int] = field(
        default_factory=lambda: _DEFAULT_PROMOTION_POINTS
    )
    tier_thresholds: tuple[tuple[int, int], ...] = _DEFAULT_TIER_THRESHOLDS
    shipping_weight: float = 1.5
    karma_weight: float = 1.0
    trust_weight: float = 0.5
    min_voting_tier: int = 1
    launch_poten_threshold: int = 10
    post_poten_threshold: int = 10
    review_min_length: int = 50
    verified_min_dwell: timedelta = timedelta(minutes=10)
    max_launches_per_week: int = 3
    # Shipping points for ranks 1, 2 and 3.
    rank_shipping_points: tuple[int, ...] = (200, 150, 100)

    def vote_weight(self, tier: int) -> int:
        """Return the base vote weight for `tier`; unknown tiers count as 1."""
        return self.vote_weights.get(tier, 1)

    def multiplier(self, kind: FeedbackKind) -> int:
        return self.feedback_multipliers[kind]

    def promotion_points_for(self, kind: FeedbackKind) -> int:
        return self.promotion_points[kind]

    def classify_feedback(
        self,
        feedback_text: str | None,
        visited_at: int | None,
        returned_at: int | None,
    ) -> tuple[FeedbackKind, bool]:
        """Classify a vote's feedback and report whether it is verified.

        Args:
            feedback_text: Free-form review text; judged after trimming.
            visited_at: Epoch milliseconds when the voter left to try the product.
            returned_at: Epoch milliseconds when the voter came back.

        Returns:
            The feedback kind and the verified flag. A vote is verified only
            when it carries a review and the visit lasted at least
            `verified_min_dwell`.
        """
        has_review = bool(feedback_text) and len(feedback_text.strip()) >= self.review_min_length
        dwell_ms = self.verified_min_dwell.total_seconds() * 1000
        dwelled = (
            visited_at is not None
            and returned_at is not None
            and returned_at - visited_at >= dwell_ms
        )
        is_verified = has_review and dwelled
        if is_verified:
            return FeedbackKind.VERIFIED_REVIEW, True
        if has_review:
            return FeedbackKind.REVIEW, False
        return FeedbackKind.QUICK_VOTE, False

    def shipping_points_for_rank(self, rank: int) -> int:
        if 1 <= rank <= len(self.rank_shipping_points):
            return self.rank_shipping_points[rank - 1]
        return 0

    def calculate_tier_score(
        self, shipping_points: float, community_karma: float, trust_score: float
    ) -> int:
        """Combine the three point pools into a single tier score."""
        raw = (
            shipping_points * self.shipping_weight
            + community_karma * self.karma_weight
            + trust_score * self.trust_weight
        )
        # Half-up rounding to match the published scoring table.
        return math.floor(raw + 0.5)

    def tier_from_score(self, score: float) -> int:
        for minimum, tier in self.tier_thresholds:
            if score >= minimum:
                return tier
        return 0

    @staticmethod
    def promotion_vote_multiplier(promotion_points: int) -> int:
        if promotion_points >= 151:
            return 5
        if promotion_points >= 51:
            return 3
        if promotion_points >= 11:
            return 2
        return 1


def default_tier_model() -> TierModel:
    """Build the tier model with thresholds taken from settings."""
    return TierModel(
        launch_poten_threshold=settings.launch_poten_threshold,
        post_poten_threshold=settings.post_poten_threshold,
        max_launches_per_week=settings.max_launches_per_week,
    )


__all__ = ["FeedbackKind", "TIER_NAMES", "TierModel", "default_tier_model"]
