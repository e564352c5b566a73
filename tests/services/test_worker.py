"""Tests for the scheduled competition jobs."""

from __future__ import annotations

import asyncio
from datetime import UTC, datetime

import pytest
from sqlalchemy.exc import OperationalError

from launch_deck.schemas.leaderboard import AnalysisCreate
from launch_deck.services.competition import CompetitionService
from launch_deck.services.leaderboard import LeaderboardAggregator
from launch_deck.services.worker import CompetitionWorker

SATURDAY = datetime(2026, 1, 17, 0, 5, tzinfo=UTC)
SUNDAY = datetime(2026, 1, 18, 0, 5, tzinfo=UTC)


def _worker(session_factory, now: datetime) -> CompetitionWorker:
    return CompetitionWorker(
        session_factory,
        snapshot_interval=60,
        finalize_interval=60,
        clock=lambda: now,
    )


def test_finalize_runs_on_saturday(db_session, session_factory, make_launch) -> None:
    make_launch("maker", week_number="2026-W02")

    outcome = _worker(session_factory, SATURDAY).finalize_if_due()

    assert outcome is not None
    assert outcome.success is True
    assert CompetitionService(db_session).get_week_result("2026-W02") is not None


def test_finalize_is_idempotent_across_checks(session_factory, make_launch) -> None:
    make_launch("maker", week_number="2026-W02")
    worker = _worker(session_factory, SATURDAY)

    worker.finalize_if_due()
    second = worker.finalize_if_due()

    assert second.success is False
    assert second.reason == "Week already finalized"


def test_finalize_skipped_on_other_days(session_factory, make_launch) -> None:
    make_launch("maker", week_number="2026-W02")

    assert _worker(session_factory, SUNDAY).finalize_if_due() is None


def test_finalize_database_errors_are_logged(session_factory, mocker) -> None:
    mocker.patch.object(
        CompetitionService,
        "finalize_current_week",
        side_effect=OperationalError("SELECT 1", {}, Exception("database is locked")),
    )
    logger = mocker.patch("launch_deck.services.worker.logger")

    assert _worker(session_factory, SATURDAY).finalize_if_due() is None
    logger.error.assert_called_once()


def test_rebuild_snapshot_job(db_session, session_factory) -> None:
    LeaderboardAggregator(db_session).save_analysis(
        AnalysisCreate(username="dev", overall_rating=55, tier="B", archetype_id="maker")
    )

    _worker(session_factory, SUNDAY).rebuild_snapshot()

    db_session.expire_all()
    snapshot = LeaderboardAggregator(db_session).get_snapshot()
    assert snapshot is not None
    assert snapshot.total_users == 1


@pytest.mark.asyncio
async def test_worker_start_and_stop(db_session, session_factory) -> None:
    LeaderboardAggregator(db_session).save_analysis(
        AnalysisCreate(username="dev", overall_rating=55, tier="B", archetype_id="maker")
    )
    worker = _worker(session_factory, SUNDAY)

    await worker.start()
    assert worker.running is True
    await asyncio.sleep(0.1)
    await worker.stop()

    assert worker.running is False
    db_session.expire_all()
    assert LeaderboardAggregator(db_session).get_snapshot() is not None


@pytest.mark.asyncio
async def test_stop_without_start_is_a_noop(session_factory) -> None:
    worker = _worker(session_factory, SUNDAY)

    await worker.stop()

    assert worker.running is False
