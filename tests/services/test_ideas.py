"""Tests for idea status transitions."""

from __future__ import annotations

import pytest

from launch_deck.core.errors import NotFoundError, PermissionDeniedError, ValidationError
from launch_deck.schemas.idea import IdeaCreate
from launch_deck.services.ideas import IdeaService


@pytest.fixture()
def idea(db_session):
    return IdeaService(db_session).submit_idea(
        "author", IdeaCreate(title="  Habit tracker  ", problem="Forgetting things")
    )


def test_submitted_idea_is_open(idea) -> None:
    assert idea.status == "open"
    assert idea.title == "Habit tracker"


def test_author_validates_open_idea(db_session, idea) -> None:
    validated = IdeaService(db_session).validate_idea(idea.id, "author")

    assert validated.status == "validated"
    with pytest.raises(ValidationError, match="Only open ideas can be validated"):
        IdeaService(db_session).validate_idea(idea.id, "author")


def test_only_author_changes_status(db_session, idea) -> None:
    with pytest.raises(PermissionDeniedError, match="Only the author can validate their idea"):
        IdeaService(db_session).validate_idea(idea.id, "someone")
    with pytest.raises(PermissionDeniedError, match="Only the author can close their idea"):
        IdeaService(db_session).close_idea(idea.id, "someone")


def test_close_idea(db_session, idea) -> None:
    closed = IdeaService(db_session).close_idea(idea.id, "author")

    assert closed.status == "closed"
    assert [item.id for item in IdeaService(db_session).get_ideas_by_author("author")] == [idea.id]


def test_missing_idea(db_session) -> None:
    with pytest.raises(NotFoundError, match="Idea not found"):
        IdeaService(db_session).get_idea(42)
