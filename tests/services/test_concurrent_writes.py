"""Interleaved transactions on a shared database file.

Each test opens two sessions on separate connections. One of them reads its
rows first, the other commits a change, then the first carries on with the
rows it already holds, as two overlapping requests would.
"""

from __future__ import annotations

import pytest
from sqlalchemy import func, select

from launch_deck.core.errors import ValidationError
from launch_deck.models import BuilderRank, Launch, LaunchVote, PotenAchievement, Post, Station
from launch_deck.services.board import BoardService
from launch_deck.services.builder_ranks import BuilderRankService
from launch_deck.services.provisioning import StationProvisioner
from launch_deck.services.voting import VotingEngine


def _seed_launch(factory, voters=("alpha", "bravo"), voter_tier: int = 4, **fields) -> int:
    with factory() as session:
        for name in voters:
            session.add(BuilderRank(username=name, tier=voter_tier))
        launch = Launch(
            username="owner",
            title="Shared Launch",
            description="",
            demo_url="https://example.com",
            week_number="2026-W03",
            **fields,
        )
        session.add(launch)
        session.commit()
        return launch.id


def _count(factory, model, *criteria) -> int:
    with factory() as session:
        stmt = select(func.count()).select_from(model).where(*criteria)
        return session.execute(stmt).scalar_one()


def test_overlapping_votes_keep_both_contributions(file_session_factory, tiers) -> None:
    launch_id = _seed_launch(file_session_factory)

    with file_session_factory() as first, file_session_factory() as second:
        assert second.get(Launch, launch_id).weighted_score == 0

        VotingEngine(first, tiers).cast_vote(launch_id, "alpha")
        result = VotingEngine(second, tiers).cast_vote(launch_id, "bravo")

    assert result.weight == 3
    with file_session_factory() as check:
        launch = check.get(Launch, launch_id)
        assert launch.vote_count == 2
        assert launch.weighted_score == 6


def test_overlapping_vote_removal_keeps_other_vote(file_session_factory, tiers) -> None:
    launch_id = _seed_launch(file_session_factory)
    with file_session_factory() as setup:
        VotingEngine(setup, tiers).cast_vote(launch_id, "alpha")

    with file_session_factory() as first, file_session_factory() as second:
        assert second.get(Launch, launch_id).vote_count == 1

        VotingEngine(first, tiers).cast_vote(launch_id, "bravo")
        VotingEngine(second, tiers).remove_vote(launch_id, "alpha")

    with file_session_factory() as check:
        launch = check.get(Launch, launch_id)
        assert launch.vote_count == 1
        assert launch.weighted_score == 3


def test_only_one_of_two_crossing_votes_flips_the_latch(file_session_factory, tiers) -> None:
    launch_id = _seed_launch(file_session_factory, weighted_score=7)

    with file_session_factory() as first, file_session_factory() as second:
        assert second.get(Launch, launch_id).is_poten is False

        first_result = VotingEngine(first, tiers).cast_vote(launch_id, "alpha")
        second_result = VotingEngine(second, tiers).cast_vote(launch_id, "bravo")

    assert first_result.crossed_poten is True
    assert second_result.crossed_poten is False
    assert _count(file_session_factory, Station, Station.launch_id == launch_id) == 1
    assert _count(file_session_factory, PotenAchievement) == 1
    with file_session_factory() as check:
        assert check.get(Launch, launch_id).weighted_score == 13


def test_racing_duplicate_vote_reports_already_voted(file_session_factory, tiers, mocker) -> None:
    launch_id = _seed_launch(file_session_factory)
    with file_session_factory() as first:
        VotingEngine(first, tiers).cast_vote(launch_id, "alpha")

    with file_session_factory() as second:
        engine = VotingEngine(second, tiers)
        # The duplicate check ran before the first vote became visible.
        mocker.patch.object(engine, "_find_vote", return_value=None)

        with pytest.raises(ValidationError, match="You've already voted for this launch."):
            engine.cast_vote(launch_id, "alpha")

    assert _count(file_session_factory, LaunchVote) == 1
    with file_session_factory() as check:
        launch = check.get(Launch, launch_id)
        assert launch.vote_count == 1
        assert launch.weighted_score == 3
        rank = check.execute(
            select(BuilderRank).where(BuilderRank.username == "alpha")
        ).scalar_one()
        assert rank.promotion_points == 1


def test_losing_station_race_returns_winners_station(file_session_factory, mocker) -> None:
    launch_id = _seed_launch(file_session_factory, voters=(), is_poten=True)
    with file_session_factory() as winner:
        station = StationProvisioner(winner).create_station_from_poten(launch_id)
        winner.commit()
        winning_id = station.id

    with file_session_factory() as loser:
        provisioner = StationProvisioner(loser)
        real_lookup = provisioner.get_station_for_launch
        lookup = mocker.patch.object(provisioner, "get_station_for_launch")

        def miss_first_lookup(launch_id: int):
            # The pre-check runs before the winner has committed.
            return None if lookup.call_count == 1 else real_lookup(launch_id)

        lookup.side_effect = miss_first_lookup

        station = provisioner.create_station_from_poten(launch_id)
        loser.commit()

    assert station.id == winning_id
    assert lookup.call_count == 2
    assert _count(file_session_factory, Station) == 1


def test_overlapping_post_votes_keep_both(file_session_factory) -> None:
    with file_session_factory() as setup:
        post_id = BoardService(setup).create_post("author", "launch_week", "Recap", "Shipped.").id

    with file_session_factory() as first, file_session_factory() as second:
        assert second.get(Post, post_id).upvotes == 0

        BoardService(first).upvote_post(post_id, "alpha")
        outcome = BoardService(second).upvote_post(post_id, "bravo")

    assert outcome.upvotes == 2
    with file_session_factory() as check:
        assert check.get(Post, post_id).upvotes == 2


def test_overlapping_promotion_grants_accumulate(file_session_factory, tiers) -> None:
    _seed_launch(file_session_factory, voters=("alpha",))

    with file_session_factory() as first, file_session_factory() as second:
        second_service = BuilderRankService(second, tiers)
        assert second_service.get("alpha").promotion_points == 0

        BuilderRankService(first, tiers).add_promotion_points("alpha", 5)
        first.commit()
        grant = second_service.add_promotion_points("alpha", 10)
        second.commit()

    assert grant.promotion_points == 15
    with file_session_factory() as check:
        rank = check.execute(
            select(BuilderRank).where(BuilderRank.username == "alpha")
        ).scalar_one()
        assert rank.community_karma == 15
