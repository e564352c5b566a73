"""Tier-weighted voting on launches.

Casting a vote is a two-phase protocol:

1. In one transaction the vote row is inserted, the launch counters are
   updated, the Poten latch is set (with its achievement record) when the new
   weighted score first reaches the threshold, and the voter's promotion
   points are granted. The transaction commits before anything else happens.
2. Only if phase 1 flipped the latch, a second transaction re-reads the launch
   from the database with a row lock and, if it is Poten, provisions its
   station. Provisioning is idempotent by launch, so two voters whose phase 1
   both observed "not yet Poten" still produce a single station.

Counters are applied as in-database increments and the launch is re-read
locked afterwards, so concurrent voters never overwrite each other's counts.

A failure in phase 2 is logged and leaves the committed vote in place; the
station can be provisioned later by any subsequent call for the same launch.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from launch_deck.core.errors import LaunchDeckError, NotFoundError, ValidationError
from launch_deck.core.settings import settings
from launch_deck.core.tiers import TierModel, default_tier_model
from launch_deck.db.time import utcnow
from launch_deck.db.transaction import atomic
from launch_deck.models import BuilderRank, Launch, LaunchVote
from launch_deck.models.achievement import TARGET_LAUNCH
from launch_deck.repositories import Repository, eq

from .achievements import record_poten
from .builder_ranks import BuilderRankService
from .provisioning import StationProvisioner

logger = logging.getLogger(__name__)

_CATEGORY_COUNTERS = {
    "vitamin": "vitamin_votes",
    "painkiller": "painkiller_votes",
    "candy": "candy_votes",
}


@dataclass(frozen=True)
class CastVoteResult:
    weight: int
    multiplier: int
    promotion_points: int
    crossed_poten: bool = False


@dataclass(frozen=True)
class VoteCount:
    count: int
    weighted_score: int


def normalize_feedback(feedback_text: str | None) -> str | None:
    """Trim feedback text; blank text is stored as NULL."""
    if feedback_text is None:
        return None
    trimmed = feedback_text.strip()
    return trimmed or None


class VotingEngine:
    """Casts and removes votes on launches."""

    def __init__(
        self,
        db: Session,
        tiers: TierModel | None = None,
        *,
        allow_self_votes: bool | None = None,
    ) -> None:
        self.db = db
        self.tiers = tiers or default_tier_model()
        self.allow_self_votes = settings.dev_mode if allow_self_votes is None else allow_self_votes
        self.launches = Repository(db, Launch)
        self.votes = Repository(db, LaunchVote)
        self.ranks = Repository(db, BuilderRank)

    def _find_vote(self, launch_id: int, voter_username: str) -> LaunchVote | None:
        return self.votes.first(
            eq(LaunchVote.launch_id, launch_id),
            eq(LaunchVote.voter_username, voter_username),
        )

    def cast_vote(
        self,
        launch_id: int,
        voter_username: str,
        *,
        feedback_text: str | None = None,
        product_type_vote: str | None = None,
        visited_at: int | None = None,
        returned_at: int | None = None,
    ) -> CastVoteResult:
        """Record a weighted vote and react to a Poten crossing.

        Raises:
            ValidationError: The voter is below the minimum tier, is voting on
                their own launch, or has already voted.
            NotFoundError: The launch does not exist.
        """
        try:
            with atomic(self.db):
                result = self._apply_vote(
                    launch_id,
                    voter_username,
                    feedback_text=feedback_text,
                    product_type_vote=product_type_vote,
                    visited_at=visited_at,
                    returned_at=returned_at,
                )
        except IntegrityError as exc:
            # A concurrent cast from the same voter committed first.
            raise ValidationError("You've already voted for this launch.") from exc

        if result.crossed_poten:
            try:
                self._provision_after_poten(launch_id)
            except (SQLAlchemyError, LaunchDeckError) as e:
                logger.error(
                    "Station provisioning failed for Poten launch %d: %s",
                    launch_id,
                    e,
                    exc_info=True,
                )
        return result

    def _provision_after_poten(self, launch_id: int) -> None:
        with atomic(self.db):
            launch = self.launches.get(launch_id, for_update=True)
            if launch is not None and launch.is_poten:
                StationProvisioner(self.db).create_station_from_poten(launch.id)

    def _apply_vote(
        self,
        launch_id: int,
        voter_username: str,
        *,
        feedback_text: str | None,
        product_type_vote: str | None,
        visited_at: int | None,
        returned_at: int | None,
    ) -> CastVoteResult:
        voter_rank = self.ranks.first(eq(BuilderRank.username, voter_username))
        voter_tier = voter_rank.tier if voter_rank is not None else 0
        if voter_tier < self.tiers.min_voting_tier:
            raise ValidationError("You need to be at least Cadet (T1) to vote.")

        launch = self.launches.get(launch_id)
        if launch is None:
            raise NotFoundError("Launch not found.")
        if launch.username == voter_username and not self.allow_self_votes:
            raise ValidationError("You cannot vote for your own launch.")
        if self._find_vote(launch_id, voter_username) is not None:
            raise ValidationError("You've already voted for this launch.")

        kind, is_verified = self.tiers.classify_feedback(feedback_text, visited_at, returned_at)
        multiplier = self.tiers.multiplier(kind)
        weight = self.tiers.vote_weight(voter_tier) * multiplier

        self.votes.add(
            LaunchVote(
                launch_id=launch.id,
                voter_username=voter_username,
                weight=weight,
                multiplier=multiplier,
                is_verified=is_verified,
                feedback_text=normalize_feedback(feedback_text),
                product_type_vote=product_type_vote,
                visited_at=visited_at,
                returned_at=returned_at,
                created_at=utcnow(),
            )
        )

        deltas = {"vote_count": 1, "weighted_score": weight}
        if is_verified:
            deltas["verified_feedback_count"] = 1
        counter = _CATEGORY_COUNTERS.get(product_type_vote or "")
        if counter is not None:
            deltas[counter] = 1
        launch = self.launches.increment(launch.id, **deltas)

        crossed = not launch.is_poten and launch.weighted_score >= self.tiers.launch_poten_threshold
        if crossed:
            launch.is_poten = True
            launch.poten_at = utcnow()
            record_poten(self.db, TARGET_LAUNCH, launch.id, launch.weighted_score)

        promotion_points = self.tiers.promotion_points_for(kind)
        BuilderRankService(self.db, self.tiers).add_promotion_points(
            voter_username, promotion_points
        )

        self.db.flush()
        logger.debug(
            "%s voted on launch %d with weight %d (%s)",
            voter_username,
            launch.id,
            weight,
            kind.value,
        )
        return CastVoteResult(
            weight=weight,
            multiplier=multiplier,
            promotion_points=promotion_points,
            crossed_poten=crossed,
        )

    def remove_vote(self, launch_id: int, voter_username: str) -> None:
        """Delete a vote and roll back its contribution; the Poten latch stays set."""
        with atomic(self.db):
            vote = self._find_vote(launch_id, voter_username)
            if vote is None:
                raise NotFoundError("Vote not found.")
            deltas = {"vote_count": -1, "weighted_score": -vote.weight}
            if vote.is_verified:
                deltas["verified_feedback_count"] = -1
            counter = _CATEGORY_COUNTERS.get(vote.product_type_vote or "")
            if counter is not None:
                deltas[counter] = -1

            self.votes.delete(vote)
            self.launches.increment(launch_id, **deltas)
        logger.debug("%s removed their vote on launch %d", voter_username, launch_id)

    def has_voted(self, launch_id: int, voter_username: str) -> bool:
        return self._find_vote(launch_id, voter_username) is not None

    def get_vote(self, launch_id: int, voter_username: str) -> LaunchVote | None:
        return self._find_vote(launch_id, voter_username)

    def get_vote_count(self, launch_id: int) -> VoteCount:
        """Count the launch's votes straight from the vote rows."""
        stmt = select(func.count(), func.coalesce(func.sum(LaunchVote.weight), 0)).where(
            LaunchVote.launch_id == launch_id
        )
        count, weighted = self.db.execute(stmt).one()
        return VoteCount(count=int(count), weighted_score=int(weighted))


__all__ = ["CastVoteResult", "VoteCount", "VotingEngine", "normalize_feedback"]
