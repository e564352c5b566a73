"""Tests for the leaderboard snapshot and rank estimation."""

from __future__ import annotations

import pytest

from launch_deck.schemas.leaderboard import AnalysisCreate
from launch_deck.services.leaderboard import (
    LeaderboardAggregator,
    bucket_start,
    calculate_distribution,
    estimate_rank,
)


def _analysis(username: str, rating: float, **fields) -> AnalysisCreate:
    return AnalysisCreate(
        username=username,
        overall_rating=rating,
        tier=fields.pop("tier", "B"),
        archetype_id=fields.pop("archetype_id", "builder"),
        **fields,
    )


@pytest.mark.parametrize(
    ("rating", "start"),
    [(0, 0), (9.99, 0), (10, 10), (85, 80), (99.5, 90), (100, 90)],
)
def test_bucket_start(rating: float, start: int) -> None:
    assert bucket_start(rating) == start


def test_distribution_has_every_bucket_in_order() -> None:
    distribution = calculate_distribution([5, 15, 15, 100])

    assert [bucket["bucket"] for bucket in distribution] == [
        "0-10",
        "10-20",
        "20-30",
        "30-40",
        "40-50",
        "50-60",
        "60-70",
        "70-80",
        "80-90",
        "90-100",
    ]
    counts = {bucket["bucket"]: bucket["count"] for bucket in distribution}
    assert counts["0-10"] == 1
    assert counts["10-20"] == 2
    assert counts["90-100"] == 1
    assert sum(counts.values()) == 4


def test_estimate_rank_counts_half_of_own_bucket() -> None:
    distribution = [{"bucket": "80-90", "count": 4}, {"bucket": "90-100", "count": 2}]

    assert estimate_rank(85, distribution, 6) == (5, 33)


def test_estimate_rank_at_the_top() -> None:
    distribution = calculate_distribution([100])

    assert estimate_rank(100, distribution, 1) == (1, 100)


def test_perfect_rating_ranks_first_in_a_crowded_top_bucket() -> None:
    distribution = [{"bucket": "80-90", "count": 3}, {"bucket": "90-100", "count": 4}]

    assert estimate_rank(100, distribution, 7) == (1, 100)
    assert estimate_rank(95, distribution, 7) == (3, 71)


def test_estimate_rank_with_empty_population() -> None:
    assert estimate_rank(50, [], 0) == (1, 0)


def test_user_rank_without_snapshot(db_session) -> None:
    rank = LeaderboardAggregator(db_session).get_user_rank(70)

    assert rank.rank is None
    assert rank.total == 0
    assert rank.percentile is None


def test_rebuild_without_analyses_is_a_noop(db_session) -> None:
    aggregator = LeaderboardAggregator(db_session)

    assert aggregator.rebuild_snapshot() is None
    assert aggregator.get_snapshot() is None


def test_rebuild_and_rank_from_snapshot(db_session) -> None:
    aggregator = LeaderboardAggregator(db_session, top_limit=3)
    for index, rating in enumerate([81, 82, 83, 84, 91, 95]):
        aggregator.save_analysis(_analysis(f"dev{index}", rating))

    snapshot = aggregator.rebuild_snapshot()

    assert snapshot is not None
    assert snapshot.total_users == 6
    assert [user["username"] for user in snapshot.top_users] == ["dev5", "dev4", "dev3"]
    assert snapshot.top_users[0]["overall_rating"] == 95

    rank = aggregator.get_user_rank(85)
    assert (rank.rank, rank.total, rank.percentile) == (5, 6, 33)


def test_rebuild_replaces_previous_snapshot(db_session) -> None:
    aggregator = LeaderboardAggregator(db_session)
    aggregator.save_analysis(_analysis("solo", 40))
    first = aggregator.rebuild_snapshot()

    aggregator.save_analysis(_analysis("second", 60))
    second = aggregator.rebuild_snapshot()

    assert first.id == second.id
    assert second.total_users == 2


def test_save_analysis_replaces_existing_row(db_session) -> None:
    aggregator = LeaderboardAggregator(db_session)
    aggregator.save_analysis(_analysis("dev", 40, top_language="Go"))

    updated = aggregator.save_analysis(_analysis("dev", 75, tier="A"))

    stored = aggregator.get_analysis("dev")
    assert stored.id == updated.id
    assert stored.overall_rating == 75
    assert stored.tier == "A"
    assert stored.top_language is None
