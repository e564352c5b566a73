# src/launch_deck/api/v1/endpoints/competition.py
"""Weekly competition endpoints: finalization and the hall of fame."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException, Query, status

from launch_deck.models import WeeklyResult
from launch_deck.schemas.launch import FinalizeResult, WeekInfo, WeeklyResultResponse
from launch_deck.services.competition import (
    CompetitionService,
    FinalizeOutcome,
    get_current_week_number,
    get_previous_week_number,
)

from ..dependencies import CurrentUsernameDep, SessionDep

router = APIRouter(prefix="/competition", tags=["competition"])


def _to_result(outcome: FinalizeOutcome) -> FinalizeResult:
    return FinalizeResult.model_validate(
        {
            "success": outcome.success,
            "reason": outcome.reason,
            "week_number": outcome.week_number,
            "winners": outcome.winners if outcome.success else None,
        }
    )


@router.post("/finalize/{week_number}", response_model=FinalizeResult)
async def finalize_week(
    week_number: str,
    _username: CurrentUsernameDep,
    db: SessionDep,
) -> FinalizeResult:
    """Finalize a competition week; declines instead of failing when not applicable."""
    return _to_result(CompetitionService(db).finalize_week(week_number))


@router.post("/finalize-current", response_model=FinalizeResult)
async def finalize_current_week(
    _username: CurrentUsernameDep,
    db: SessionDep,
) -> FinalizeResult:
    return _to_result(CompetitionService(db).finalize_current_week())


@router.get("/week", response_model=WeekInfo)
async def week_info() -> WeekInfo:
    return WeekInfo(
        current_week=get_current_week_number(),
        previous_week=get_previous_week_number(),
    )


@router.get("/results", response_model=list[WeeklyResultResponse])
async def weekly_results(
    db: SessionDep,
    year: int | None = Query(None, ge=2000, le=9999),
    limit: int = Query(52, ge=1, le=520),
) -> list[WeeklyResult]:
    return CompetitionService(db).get_weekly_results(year, limit)


@router.get("/results/{week_number}", response_model=WeeklyResultResponse)
async def week_result(week_number: str, db: SessionDep) -> WeeklyResult:
    result = CompetitionService(db).get_week_result(week_number)
    if result is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Week not finalized")
    return result


@router.get("/champions", response_model=WeeklyResultResponse | None)
async def last_week_champions(db: SessionDep) -> dict[str, Any] | None:
    return CompetitionService(db).get_last_week_champions()


@router.get("/years", response_model=list[int])
async def available_years(db: SessionDep) -> list[int]:
    return CompetitionService(db).get_available_years()
