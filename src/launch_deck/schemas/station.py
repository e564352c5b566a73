"""Station-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class StationResponse(BaseModel):
    """Schema for station information returned by the API."""

    id: int
    slug: str
    name: str
    description: str | None
    owner_username: str
    launch_id: int
    logo_url: str | None
    member_count: int
    post_count: int
    status: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class StationRoleResponse(BaseModel):
    name: str
    slug: str
    color: str | None
    permissions: list[str]
    priority: int
    is_default: bool
    is_system: bool

    model_config = ConfigDict(from_attributes=True)


class CrewMemberResponse(BaseModel):
    username: str
    role: str
    karma_earned_here: int
    joined_at: datetime

    model_config = ConfigDict(from_attributes=True)
