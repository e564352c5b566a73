# src/launch_deck/api/v1/endpoints/leaderboard.py
"""Leaderboard endpoints."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query, status

from launch_deck.models import Analysis, LeaderboardSnapshot
from launch_deck.schemas.leaderboard import (
    AnalysisCreate,
    LeaderboardSnapshotResponse,
    UserRankResponse,
)
from launch_deck.services.leaderboard import LeaderboardAggregator

from ..dependencies import CurrentUsernameDep, SessionDep

router = APIRouter(prefix="/leaderboard", tags=["leaderboard"])


@router.get("/snapshot", response_model=LeaderboardSnapshotResponse | None)
async def get_snapshot(db: SessionDep) -> LeaderboardSnapshot | None:
    """Return the pre-aggregated leaderboard, or null before the first rebuild."""
    return LeaderboardAggregator(db).get_snapshot()


@router.get("/rank", response_model=UserRankResponse)
async def get_user_rank(
    db: SessionDep,
    rating: float = Query(..., ge=0, le=100),
) -> UserRankResponse:
    rank = LeaderboardAggregator(db).get_user_rank(rating)
    return UserRankResponse(rank=rank.rank, total=rank.total, percentile=rank.percentile)


@router.post("/analyses", status_code=status.HTTP_201_CREATED)
async def save_analysis(
    analysis_data: AnalysisCreate,
    _username: CurrentUsernameDep,
    db: SessionDep,
) -> dict[str, int | str]:
    analysis: Analysis = LeaderboardAggregator(db).save_analysis(analysis_data)
    return {"id": analysis.id, "username": analysis.username}


@router.post("/rebuild", response_model=LeaderboardSnapshotResponse)
async def rebuild_snapshot(
    _username: CurrentUsernameDep,
    db: SessionDep,
) -> LeaderboardSnapshot:
    snapshot = LeaderboardAggregator(db).rebuild_snapshot()
    if snapshot is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No analyses yet")
    return snapshot
