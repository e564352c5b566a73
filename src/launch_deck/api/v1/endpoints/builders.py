# src/launch_deck/api/v1/endpoints/builders.py
"""Builder rank endpoints."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query, status

from launch_deck.db.transaction import atomic
from launch_deck.models import BuilderRank
from launch_deck.schemas.leaderboard import (
    BuilderRankResponse,
    TierCount,
    TierDistributionResponse,
)
from launch_deck.services.builder_ranks import BuilderRankService, tier_name

from ..dependencies import CurrentUsernameDep, SessionDep

router = APIRouter(prefix="/builders", tags=["builders"])


def _to_response(rank: BuilderRank) -> BuilderRankResponse:
    return BuilderRankResponse(
        username=rank.username,
        tier=rank.tier,
        tier_name=tier_name(rank.tier),
        shipping_points=rank.shipping_points,
        community_karma=rank.community_karma,
        trust_score=rank.trust_score,
        tier_score=rank.tier_score,
        promotion_points=rank.promotion_points,
        weekly_wins=rank.weekly_wins,
        monthly_wins=rank.monthly_wins,
        poten_count=rank.poten_count,
    )


@router.get("/top", response_model=list[BuilderRankResponse])
async def top_builders(
    db: SessionDep,
    limit: int = Query(20, ge=1, le=100),
) -> list[BuilderRankResponse]:
    return [_to_response(rank) for rank in BuilderRankService(db).top_builders(limit)]


@router.get("/distribution", response_model=TierDistributionResponse)
async def tier_distribution(db: SessionDep) -> TierDistributionResponse:
    counts = BuilderRankService(db).tier_distribution()
    return TierDistributionResponse(
        distribution=[TierCount(tier=tier, count=count) for tier, count in counts.items()],
        total=sum(counts.values()),
    )


@router.get("/{username}", response_model=BuilderRankResponse)
async def get_builder(username: str, db: SessionDep) -> BuilderRankResponse:
    rank = BuilderRankService(db).get(username)
    if rank is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Builder not found")
    return _to_response(rank)


@router.post("/me/initialize", response_model=BuilderRankResponse)
async def initialize_builder(username: CurrentUsernameDep, db: SessionDep) -> BuilderRankResponse:
    """Create the caller's rank at Ground Control if it does not exist yet."""
    with atomic(db):
        rank = BuilderRankService(db).initialize(username)
    return _to_response(rank)
