"""Idea Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class IdeaCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    problem: str = ""
    solution: str = ""
    target_audience: str = ""


class IdeaResponse(BaseModel):
    id: int
    author_username: str
    title: str
    status: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
