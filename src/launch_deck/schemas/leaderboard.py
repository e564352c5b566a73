"""Leaderboard and builder-rank Pydantic schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class AnalysisCreate(BaseModel):
    """Schema for storing a profile analysis result."""

    username: str = Field(..., min_length=1)
    avatar_url: str = ""
    name: str | None = None
    grit: float = Field(0, ge=0, le=100)
    focus: float = Field(0, ge=0, le=100)
    craft: float = Field(0, ge=0, le=100)
    impact: float = Field(0, ge=0, le=100)
    voice: float = Field(0, ge=0, le=100)
    reach: float = Field(0, ge=0, le=100)
    overall_rating: float = Field(..., ge=0, le=100)
    tier: str
    archetype_id: str
    total_stars: int | None = None
    followers: int | None = None
    top_language: str | None = None
    analyzed_at: datetime | None = None


class TopUser(BaseModel):
    username: str
    avatar_url: str
    overall_rating: float
    tier: str
    archetype_id: str
    total_stars: int | None = None
    followers: int | None = None
    top_language: str | None = None


class DistributionBucket(BaseModel):
    bucket: str
    count: int


class LeaderboardSnapshotResponse(BaseModel):
    top_users: list[TopUser]
    distribution: list[DistributionBucket]
    total_users: int
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class UserRankResponse(BaseModel):
    rank: int | None
    total: int
    percentile: int | None


class BuilderRankResponse(BaseModel):
    username: str
    tier: int
    tier_name: str
    shipping_points: int
    community_karma: int
    trust_score: int
    tier_score: int
    promotion_points: int
    weekly_wins: int
    monthly_wins: int
    poten_count: int


class TierCount(BaseModel):
    tier: int
    count: int


class TierDistributionResponse(BaseModel):
    distribution: list[TierCount]
    total: int
