"""Vote-related Pydantic schemas."""

from typing import Literal

from pydantic import BaseModel, Field


class LaunchVoteCreate(BaseModel):
    """Schema for casting a weighted vote on a launch."""

    feedback_text: str | None = Field(None, max_length=5000)
    product_type_vote: Literal["vitamin", "painkiller", "candy"] | None = None
    visited_at: int | None = Field(None, ge=0, description="Epoch ms when the demo was opened")
    returned_at: int | None = Field(None, ge=0, description="Epoch ms when the voter came back")


class CastVoteResponse(BaseModel):
    success: bool = True
    weight: int
    multiplier: int
    promotion_points: int


class RemoveVoteResponse(BaseModel):
    success: bool = True


class VoteCountResponse(BaseModel):
    count: int
    weighted_score: int


class HasVotedResponse(BaseModel):
    has_voted: bool


class PostVoteResponse(BaseModel):
    """Result of an up/down toggle on a board post."""

    action: Literal["upvoted", "downvoted", "removed", "changed"]
    upvotes: int
    downvotes: int
    is_poten: bool


class MyPostVoteResponse(BaseModel):
    vote_type: Literal["up", "down"] | None
