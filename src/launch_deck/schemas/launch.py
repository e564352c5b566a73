"""Launch-related Pydantic schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class LaunchCreate(BaseModel):
    """Schema for submitting a new launch."""

    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1, max_length=5000)
    demo_url: str = Field(..., min_length=1)
    github_url: str | None = None
    week_number: str | None = Field(
        None,
        pattern=r"^\d{4}-W\d{2}$",
        description="ISO week key; defaults to the current week",
    )
    screenshot: str | None = None
    target_audience: str | None = None
    problem_solved: str | None = None
    og_image: str | None = None
    favicon: str | None = None
    site_name: str | None = None
    linked_idea_id: int | None = None


class LaunchResponse(BaseModel):
    """Schema for launch information returned by the API."""

    id: int
    username: str
    title: str
    description: str
    demo_url: str
    github_url: str | None
    screenshot: str | None
    og_image: str | None
    week_number: str
    vote_count: int
    weighted_score: int
    is_poten: bool
    poten_at: datetime | None
    rank: int | None
    status: str
    vitamin_votes: int
    painkiller_votes: int
    candy_votes: int
    verified_feedback_count: int
    linked_idea_id: int | None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class LaunchSubmitted(BaseModel):
    launch_id: int
    week_number: str


class WinnerEntry(BaseModel):
    """A ranked launch frozen into a weekly result."""

    rank: int
    launch_id: int
    username: str
    title: str
    weighted_score: int
    og_image: str | None = None
    screenshot: str | None = None
    demo_url: str | None = None


class FinalizeResult(BaseModel):
    """Outcome of a finalization attempt.

    A declined attempt (already finalized, no launches) is reported with
    `success=False` and a `reason` rather than raised.
    """

    success: bool
    reason: str | None = None
    week_number: str | None = None
    winners: list[WinnerEntry] | None = None


class WeeklyResultResponse(BaseModel):
    week_number: str
    winners: list[WinnerEntry]
    total_launches: int
    total_votes: int
    finalized_at: datetime

    model_config = ConfigDict(from_attributes=True)


class WeekInfo(BaseModel):
    current_week: str
    previous_week: str


def winners_from_json(raw: list[dict[str, Any]]) -> list[WinnerEntry]:
    return [WinnerEntry.model_validate(item) for item in raw]
