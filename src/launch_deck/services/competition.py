"""Weekly competition lifecycle: submission, finalization and results.

Weeks are keyed by ISO-8601 week (`YYYY-Www`, weeks start on Monday and
belong to the year that holds their Thursday). The scheduled trigger fires on
Saturday 00:00 UTC and finalizes the *previous* week.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from launch_deck.core.errors import NotFoundError, ValidationError
from launch_deck.core.tiers import TierModel, default_tier_model
from launch_deck.db.time import utcnow
from launch_deck.db.transaction import atomic
from launch_deck.models import Idea, Launch, WeeklyResult
from launch_deck.models.idea import IDEA_STATUS_LAUNCHED, IDEA_STATUS_VALIDATED
from launch_deck.models.launch import LAUNCH_STATUS_ACTIVE, LAUNCH_STATUS_CLOSED
from launch_deck.repositories import Repository, eq
from launch_deck.schemas.launch import LaunchCreate

from .builder_ranks import REASON_WEEKLY_FIRST, REASON_WEEKLY_PODIUM, BuilderRankService
from .provisioning import StationProvisioner

logger = logging.getLogger(__name__)

REASON_ALREADY_FINALIZED = "Week already finalized"
REASON_NO_LAUNCHES = "No launches this week"
WINNER_SLOTS = 3


def compute_iso_week(moment: datetime) -> str:
    """Return the ISO week key for the UTC calendar date of `moment`.

    Naive datetimes are taken to be UTC already.
    """
    if moment.tzinfo is not None:
        moment = moment.astimezone(UTC)
    iso_year, iso_week, _ = moment.date().isocalendar()
    return f"{iso_year}-W{iso_week:02d}"


def get_current_week_number(now: datetime | None = None) -> str:
    return compute_iso_week(now or utcnow())


def get_previous_week_number(now: datetime | None = None) -> str:
    return compute_iso_week((now or utcnow()) - timedelta(days=7))


@dataclass
class FinalizeOutcome:
    success: bool
    reason: str | None = None
    week_number: str | None = None
    winners: list[dict[str, Any]] = field(default_factory=list)


class CompetitionService:
    """Runs the weekly competition against one session."""

    def __init__(self, db: Session, tiers: TierModel | None = None) -> None:
        self.db = db
        self.tiers = tiers or default_tier_model()
        self.launches = Repository(db, Launch)
        self.results = Repository(db, WeeklyResult)
        self.ideas = Repository(db, Idea)

    # Submission

    def submit_launch(
        self, username: str, data: LaunchCreate, *, now: datetime | None = None
    ) -> Launch:
        """Insert a launch for `username` and provision its station.

        Raises:
            ValidationError: Weekly cap reached or the linked idea is not
                eligible.
            NotFoundError: The linked idea does not exist.
        """
        week_number = data.week_number or get_current_week_number(now)
        with atomic(self.db):
            # Held until commit so concurrent submissions from the same user
            # see each other in the count below.
            BuilderRankService(self.db, self.tiers).lock(username)
            already = self.launches.count(
                eq(Launch.week_number, week_number),
                eq(Launch.username, username),
            )
            cap = self.tiers.max_launches_per_week
            if already >= cap:
                raise ValidationError(
                    f"Maximum {cap} launches per week. You've already submitted {already}."
                )

            idea = self._check_linked_idea(username, data.linked_idea_id)

            launch = self.launches.add(
                Launch(
                    username=username,
                    title=data.title,
                    description=data.description,
                    demo_url=data.demo_url,
                    github_url=data.github_url,
                    screenshot=data.screenshot,
                    target_audience=data.target_audience,
                    problem_solved=data.problem_solved,
                    og_image=data.og_image,
                    favicon=data.favicon,
                    site_name=data.site_name,
                    linked_idea_id=data.linked_idea_id,
                    week_number=week_number,
                    vote_count=0,
                    weighted_score=0,
                    is_poten=False,
                    status=LAUNCH_STATUS_ACTIVE,
                    vitamin_votes=0,
                    painkiller_votes=0,
                    candy_votes=0,
                    verified_feedback_count=0,
                    promotion_boost=0,
                    created_at=utcnow(),
                )
            )
            if idea is not None:
                idea.status = IDEA_STATUS_LAUNCHED

            StationProvisioner(self.db).create_station_for_launch(launch.id)

        logger.info("%s submitted launch %d for %s", username, launch.id, week_number)
        return launch

    def _check_linked_idea(self, username: str, idea_id: int | None) -> Idea | None:
        if idea_id is None:
            return None
        idea = self.ideas.get(idea_id)
        if idea is None:
            raise NotFoundError("Linked idea not found.")
        if idea.author_username != username:
            raise ValidationError("You can only link your own validated ideas.")
        if idea.status != IDEA_STATUS_VALIDATED:
            raise ValidationError("Only validated ideas can be linked to launches.")
        if self.get_launch_by_linked_idea(idea_id) is not None:
            raise ValidationError("This idea is already linked to another launch.")
        return idea

    # Finalization

    def finalize_week(self, week_number: str) -> FinalizeOutcome:
        """Rank the week's launches, reward the top three and freeze the result.

        Declines with `success=False` instead of raising when the week was
        already finalized or had no launches.
        """
        try:
            with atomic(self.db):
                outcome = self._finalize(week_number)
        except IntegrityError:
            logger.info("Week %s was finalized concurrently", week_number)
            return FinalizeOutcome(success=False, reason=REASON_ALREADY_FINALIZED)

        if outcome.success:
            logger.info(
                "Finalized %s with %d winner(s)", week_number, len(outcome.winners)
            )
        else:
            logger.debug("Skipped finalizing %s: %s", week_number, outcome.reason)
        return outcome

    def finalize_current_week(self, now: datetime | None = None) -> FinalizeOutcome:
        """Finalize the week before `now`; the trigger runs on Saturday."""
        return self.finalize_week(get_previous_week_number(now))

    def _finalize(self, week_number: str) -> FinalizeOutcome:
        if self.get_week_result(week_number) is not None:
            return FinalizeOutcome(success=False, reason=REASON_ALREADY_FINALIZED)

        # Read in submission order; the stable sort below keeps earlier
        # submissions ahead on equal scores.
        launches = self.launches.collect(eq(Launch.week_number, week_number))
        if not launches:
            return FinalizeOutcome(success=False, reason=REASON_NO_LAUNCHES)

        ranked = sorted(launches, key=lambda launch: launch.weighted_score, reverse=True)
        builders = BuilderRankService(self.db, self.tiers)
        winners: list[dict[str, Any]] = []

        for index, launch in enumerate(ranked):
            launch.status = LAUNCH_STATUS_CLOSED
            if index >= WINNER_SLOTS:
                continue
            rank = index + 1
            launch.rank = rank
            winners.append(
                {
                    "rank": rank,
                    "launch_id": launch.id,
                    "username": launch.username,
                    "title": launch.title,
                    "weighted_score": launch.weighted_score,
                    "og_image": launch.og_image,
                    "screenshot": launch.screenshot,
                }
            )

            builders.add_shipping_points(
                launch.username,
                self.tiers.shipping_points_for_rank(rank),
                REASON_WEEKLY_FIRST if rank == 1 else REASON_WEEKLY_PODIUM,
            )

        self.results.add(
            WeeklyResult(
                week_number=week_number,
                winners=winners,
                total_launches=len(launches),
                total_votes=sum(launch.vote_count for launch in launches),
                finalized_at=utcnow(),
            )
        )
        return FinalizeOutcome(success=True, week_number=week_number, winners=winners)

    # Queries

    def get_launch(self, launch_id: int) -> Launch:
        launch = self.launches.get(launch_id)
        if launch is None:
            raise NotFoundError("Launch not found.")
        return launch

    def get_weekly_launches(self, week_number: str) -> list[Launch]:
        """Return the week's launches, highest weighted score first."""
        launches = self.launches.collect(eq(Launch.week_number, week_number))
        return sorted(launches, key=lambda launch: launch.weighted_score, reverse=True)

    def get_current_week_launches(self, now: datetime | None = None) -> list[Launch]:
        return self.get_weekly_launches(get_current_week_number(now))

    def get_launches_by_username(self, username: str) -> list[Launch]:
        return self.launches.collect(eq(Launch.username, username))

    def get_launch_by_linked_idea(self, idea_id: int) -> Launch | None:
        return self.launches.first(eq(Launch.linked_idea_id, idea_id))

    def get_poten_launches(self, limit: int = 20) -> list[Launch]:
        """Return Poten launches, newest submission first."""
        stmt = (
            select(Launch)
            .where(Launch.is_poten.is_(True))
            .order_by(Launch.created_at.desc(), Launch.id.desc())
            .limit(limit)
        )
        return list(self.db.execute(stmt).scalars())

    def get_week_result(self, week_number: str) -> WeeklyResult | None:
        return self.results.first(eq(WeeklyResult.week_number, week_number))

    def get_weekly_results(self, year: int | None = None, limit: int = 52) -> list[WeeklyResult]:
        """Return finalized weeks for the hall of fame, most recent first."""
        stmt = select(WeeklyResult)
        if year is not None:
            stmt = stmt.where(WeeklyResult.week_number.startswith(f"{year}-"))
        stmt = stmt.order_by(WeeklyResult.finalized_at.desc(), WeeklyResult.id.desc()).limit(limit)
        return list(self.db.execute(stmt).scalars())

    def get_last_week_champions(self) -> dict[str, Any] | None:
        """Return the most recent result with winners enriched from their launches."""
        results = self.get_weekly_results(limit=1)
        if not results:
            return None
        result = results[0]

        winners = []
        for winner in result.winners:
            launch = self.launches.get(winner["launch_id"])
            winners.append(
                {
                    **winner,
                    "screenshot": launch.screenshot if launch else winner.get("screenshot"),
                    "og_image": launch.og_image if launch else winner.get("og_image"),
                    "demo_url": launch.demo_url if launch else None,
                }
            )
        return {
            "week_number": result.week_number,
            "winners": winners,
            "total_launches": result.total_launches,
            "total_votes": result.total_votes,
            "finalized_at": result.finalized_at,
        }

    def get_available_years(self) -> list[int]:
        weeks = self.db.execute(select(WeeklyResult.week_number)).scalars()
        return sorted({int(week.split("-", 1)[0]) for week in weeks}, reverse=True)


__all__ = [
    "CompetitionService",
    "FinalizeOutcome",
    "REASON_ALREADY_FINALIZED",
    "REASON_NO_LAUNCHES",
    "compute_iso_week",
    "get_current_week_number",
    "get_previous_week_number",
]
