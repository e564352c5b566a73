"""Idea submission and status transitions used by launch linking."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from launch_deck.core.errors import NotFoundError, PermissionDeniedError, ValidationError
from launch_deck.db.time import utcnow
from launch_deck.db.transaction import atomic
from launch_deck.models import Idea
from launch_deck.models.idea import IDEA_STATUS_CLOSED, IDEA_STATUS_OPEN, IDEA_STATUS_VALIDATED
from launch_deck.repositories import Repository, eq
from launch_deck.schemas.idea import IdeaCreate

logger = logging.getLogger(__name__)


class IdeaService:
    def __init__(self, db: Session) -> None:
        self.db = db
        self.ideas = Repository(db, Idea)

    def submit_idea(self, author_username: str, data: IdeaCreate) -> Idea:
        with atomic(self.db):
            idea = self.ideas.add(
                Idea(
                    author_username=author_username,
                    title=data.title.strip(),
                    problem=data.problem,
                    solution=data.solution,
                    target_audience=data.target_audience,
                    status=IDEA_STATUS_OPEN,
                    created_at=utcnow(),
                )
            )
        return idea

    def get_idea(self, idea_id: int) -> Idea:
        idea = self.ideas.get(idea_id)
        if idea is None:
            raise NotFoundError("Idea not found")
        return idea

    def get_ideas_by_author(self, username: str) -> list[Idea]:
        return self.ideas.collect(eq(Idea.author_username, username))

    def _owned_idea(self, idea_id: int, username: str, action: str) -> Idea:
        idea = self.get_idea(idea_id)
        if idea.author_username != username:
            raise PermissionDeniedError(f"Only the author can {action} their idea")
        return idea

    def validate_idea(self, idea_id: int, username: str) -> Idea:
        """Mark an open idea as validated so it can be linked to a launch."""
        with atomic(self.db):
            idea = self._owned_idea(idea_id, username, "validate")
            if idea.status != IDEA_STATUS_OPEN:
                raise ValidationError("Only open ideas can be validated")
            idea.status = IDEA_STATUS_VALIDATED
        logger.info("Idea %d validated", idea_id)
        return idea

    def close_idea(self, idea_id: int, username: str) -> Idea:
        with atomic(self.db):
            idea = self._owned_idea(idea_id, username, "close")
            idea.status = IDEA_STATUS_CLOSED
        return idea


__all__ = ["IdeaService"]
