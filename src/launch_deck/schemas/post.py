"""Board post Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class PostCreate(BaseModel):
    """Schema for creating a new board post.

    Length limits are re-checked after trimming by the board service.
    """

    board_type: str
    title: str = Field(..., max_length=400)
    content: str = Field(..., max_length=20000)


class PostResponse(BaseModel):
    id: int
    author_username: str
    board_type: str
    title: str
    content: str
    upvotes: int
    downvotes: int
    comment_count: int
    is_poten: bool
    poten_at: datetime | None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
