# src/launch_deck/api/v1/endpoints/launches.py
"""Launch submission and listing endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Query, status

from launch_deck.models import Launch
from launch_deck.schemas.launch import LaunchCreate, LaunchResponse, LaunchSubmitted
from launch_deck.services.competition import CompetitionService

from ..dependencies import CurrentUsernameDep, SessionDep, domain_errors

router = APIRouter(prefix="/launches", tags=["launches"])


@router.post("/", response_model=LaunchSubmitted, status_code=status.HTTP_201_CREATED)
async def submit_launch(
    launch_data: LaunchCreate,
    username: CurrentUsernameDep,
    db: SessionDep,
) -> LaunchSubmitted:
    """Submit a launch to a weekly competition (the current week by default)."""
    with domain_errors():
        launch = CompetitionService(db).submit_launch(username, launch_data)
    return LaunchSubmitted(launch_id=launch.id, week_number=launch.week_number)


@router.get("/current", response_model=list[LaunchResponse])
async def current_week_launches(db: SessionDep) -> list[Launch]:
    return CompetitionService(db).get_current_week_launches()


@router.get("/week/{week_number}", response_model=list[LaunchResponse])
async def weekly_launches(week_number: str, db: SessionDep) -> list[Launch]:
    """List a week's launches ordered by weighted score."""
    return CompetitionService(db).get_weekly_launches(week_number)


@router.get("/poten", response_model=list[LaunchResponse])
async def poten_launches(
    db: SessionDep,
    limit: int = Query(20, ge=1, le=100),
) -> list[Launch]:
    return CompetitionService(db).get_poten_launches(limit)


@router.get("/user/{username}", response_model=list[LaunchResponse])
async def launches_by_user(username: str, db: SessionDep) -> list[Launch]:
    return CompetitionService(db).get_launches_by_username(username)


@router.get("/{launch_id}", response_model=LaunchResponse)
async def get_launch(launch_id: int, db: SessionDep) -> Launch:
    with domain_errors():
        return CompetitionService(db).get_launch(launch_id)
