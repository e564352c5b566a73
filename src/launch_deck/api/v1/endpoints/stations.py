# src/launch_deck/api/v1/endpoints/stations.py
"""Station endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Response, status

from launch_deck.db.transaction import atomic
from launch_deck.models import Station, StationCrew, StationRole
from launch_deck.schemas.station import CrewMemberResponse, StationResponse, StationRoleResponse
from launch_deck.services.stations import StationService

from ..dependencies import CurrentUsernameDep, SessionDep, domain_errors

router = APIRouter(prefix="/stations", tags=["stations"])


@router.get("/{slug}", response_model=StationResponse)
async def get_station(slug: str, db: SessionDep) -> Station:
    with domain_errors():
        return StationService(db).get_by_slug(slug)


@router.get("/{slug}/crew", response_model=list[CrewMemberResponse])
async def list_crew(slug: str, db: SessionDep) -> list[StationCrew]:
    service = StationService(db)
    with domain_errors():
        station = service.get_by_slug(slug)
    return service.list_crew(station)


@router.get("/{slug}/roles", response_model=list[StationRoleResponse])
async def list_roles(slug: str, db: SessionDep) -> list[StationRole]:
    service = StationService(db)
    with domain_errors():
        station = service.get_by_slug(slug)
    return service.list_roles(station)


@router.post("/{slug}/join", response_model=CrewMemberResponse, status_code=status.HTTP_201_CREATED)
async def join_station(slug: str, username: CurrentUsernameDep, db: SessionDep) -> StationCrew:
    """Join a station with its default role."""
    service = StationService(db)
    with domain_errors(), atomic(db):
        station = service.get_by_slug(slug)
        member = service.join(station, username)
    return member


@router.delete("/{slug}/leave", status_code=status.HTTP_204_NO_CONTENT)
async def leave_station(slug: str, username: CurrentUsernameDep, db: SessionDep) -> Response:
    service = StationService(db)
    with domain_errors(), atomic(db):
        station = service.get_by_slug(slug)
        service.leave(station, username)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
