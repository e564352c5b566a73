"""Tests for board posts and up/down voting."""

from __future__ import annotations

import pytest
from sqlalchemy import select

from launch_deck.core.errors import NotFoundError, PermissionDeniedError, ValidationError
from launch_deck.core.tiers import TierModel
from launch_deck.models import PostVote, PotenAchievement
from launch_deck.services.board import BoardService


@pytest.fixture()
def board(db_session) -> BoardService:
    return BoardService(db_session, TierModel(post_poten_threshold=2))


@pytest.fixture()
def post(board):
    return board.create_post("author", "launch_week", "  Shipping log  ", "  Day one.  ")


def test_create_post_trims_fields(post) -> None:
    assert post.title == "Shipping log"
    assert post.content == "Day one."
    assert post.upvotes == 0
    assert post.is_poten is False


def test_create_post_validations(board) -> None:
    with pytest.raises(ValidationError, match="Invalid board type: gossip"):
        board.create_post("author", "gossip", "t", "c")
    with pytest.raises(ValidationError, match="Title cannot be empty."):
        board.create_post("author", "launch_week", "   ", "c")
    with pytest.raises(ValidationError, match="Content cannot be empty."):
        board.create_post("author", "launch_week", "t", "")
    with pytest.raises(ValidationError, match="Title cannot exceed 200 characters."):
        board.create_post("author", "launch_week", "t" * 201, "c")


def test_board_tier_gate(board, make_builder) -> None:
    with pytest.raises(ValidationError, match="You need tier 2 or higher"):
        board.create_post("nobody", "discussion", "t", "c")

    make_builder("pilot", tier=2)
    assert board.create_post("pilot", "discussion", "t", "c").board_type == "discussion"


def test_upvote_toggle_cycle(board, post) -> None:
    first = board.upvote_post(post.id, "fan")
    assert (first.action, first.upvotes, first.downvotes) == ("upvoted", 1, 0)
    assert board.get_my_vote(post.id, "fan") == "up"

    changed = board.downvote_post(post.id, "fan")
    assert (changed.action, changed.upvotes, changed.downvotes) == ("changed", 0, 1)
    assert board.get_my_vote(post.id, "fan") == "down"

    removed = board.downvote_post(post.id, "fan")
    assert (removed.action, removed.upvotes, removed.downvotes) == ("removed", 0, 0)
    assert board.get_my_vote(post.id, "fan") is None


def test_net_upvotes_latch_poten(board, post, db_session) -> None:
    board.downvote_post(post.id, "critic")
    board.upvote_post(post.id, "a")
    board.upvote_post(post.id, "b")
    assert board.get_post(post.id).is_poten is False

    outcome = board.upvote_post(post.id, "c")
    assert outcome.is_poten is True

    # Removing support never clears the latch.
    board.upvote_post(post.id, "c")
    board.upvote_post(post.id, "b")
    refreshed = board.get_post(post.id)
    assert refreshed.is_poten is True
    assert refreshed.poten_at is not None
    achievements = db_session.execute(select(PotenAchievement)).scalars().all()
    assert len(achievements) == 1
    assert achievements[0].score_at_crossing == 2


def test_poten_posts_listing(board, post) -> None:
    other = board.create_post("author", "launch_week", "Other", "Body")
    board.upvote_post(post.id, "a")
    board.upvote_post(post.id, "b")

    assert [item.id for item in board.get_poten_posts()] == [post.id]
    assert {item.id for item in board.get_board_posts("launch_week")} == {post.id, other.id}
    assert len(board.get_posts_by_author("author")) == 2


def test_vote_on_missing_post(board) -> None:
    with pytest.raises(NotFoundError, match="Post not found."):
        board.upvote_post(999, "fan")


def test_only_author_can_delete(board, post, db_session) -> None:
    board.upvote_post(post.id, "fan")

    with pytest.raises(PermissionDeniedError, match="your own posts"):
        board.delete_post(post.id, "fan")

    board.delete_post(post.id, "author")
    with pytest.raises(NotFoundError):
        board.get_post(post.id)
    assert db_session.execute(select(PostVote)).scalars().all() == []
