# src/launch_deck/api/v1/endpoints/votes.py
"""Vote endpoints for launches."""

from __future__ import annotations

from fastapi import APIRouter, status

from launch_deck.schemas.vote import (
    CastVoteResponse,
    HasVotedResponse,
    LaunchVoteCreate,
    RemoveVoteResponse,
    VoteCountResponse,
)
from launch_deck.services.voting import VotingEngine

from ..dependencies import CurrentUsernameDep, SessionDep, domain_errors

router = APIRouter(prefix="/launches/{launch_id}/votes", tags=["votes"])


@router.post("", response_model=CastVoteResponse, status_code=status.HTTP_201_CREATED)
async def cast_vote(
    launch_id: int,
    vote_data: LaunchVoteCreate,
    username: CurrentUsernameDep,
    db: SessionDep,
) -> CastVoteResponse:
    """Cast a tier-weighted vote on a launch."""
    with domain_errors():
        result = VotingEngine(db).cast_vote(
            launch_id,
            username,
            feedback_text=vote_data.feedback_text,
            product_type_vote=vote_data.product_type_vote,
            visited_at=vote_data.visited_at,
            returned_at=vote_data.returned_at,
        )
    return CastVoteResponse(
        weight=result.weight,
        multiplier=result.multiplier,
        promotion_points=result.promotion_points,
    )


@router.delete("", response_model=RemoveVoteResponse)
async def remove_vote(
    launch_id: int,
    username: CurrentUsernameDep,
    db: SessionDep,
) -> RemoveVoteResponse:
    with domain_errors():
        VotingEngine(db).remove_vote(launch_id, username)
    return RemoveVoteResponse()


@router.get("/me", response_model=HasVotedResponse)
async def has_voted(
    launch_id: int,
    username: CurrentUsernameDep,
    db: SessionDep,
) -> HasVotedResponse:
    return HasVotedResponse(has_voted=VotingEngine(db).has_voted(launch_id, username))


@router.get("/count", response_model=VoteCountResponse)
async def vote_count(launch_id: int, db: SessionDep) -> VoteCountResponse:
    count = VotingEngine(db).get_vote_count(launch_id)
    return VoteCountResponse(count=count.count, weighted_score=count.weighted_score)
