# src/launch_deck/api/v1/endpoints/ideas.py
"""Idea endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

from launch_deck.models import Idea
from launch_deck.schemas.idea import IdeaCreate, IdeaResponse
from launch_deck.services.ideas import IdeaService

from ..dependencies import CurrentUsernameDep, SessionDep, domain_errors

router = APIRouter(prefix="/ideas", tags=["ideas"])


@router.post("/", response_model=IdeaResponse, status_code=status.HTTP_201_CREATED)
async def submit_idea(idea_data: IdeaCreate, username: CurrentUsernameDep, db: SessionDep) -> Idea:
    return IdeaService(db).submit_idea(username, idea_data)


@router.get("/{idea_id}", response_model=IdeaResponse)
async def get_idea(idea_id: int, db: SessionDep) -> Idea:
    with domain_errors():
        return IdeaService(db).get_idea(idea_id)


@router.post("/{idea_id}/validate", response_model=IdeaResponse)
async def validate_idea(idea_id: int, username: CurrentUsernameDep, db: SessionDep) -> Idea:
    with domain_errors():
        return IdeaService(db).validate_idea(idea_id, username)


@router.post("/{idea_id}/close", response_model=IdeaResponse)
async def close_idea(idea_id: int, username: CurrentUsernameDep, db: SessionDep) -> Idea:
    with domain_errors():
        return IdeaService(db).close_idea(idea_id, username)
