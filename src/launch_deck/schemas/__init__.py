# src/launch_deck/schemas/__init__.py
"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .idea import IdeaCreate, IdeaResponse
from .launch import FinalizeResult, LaunchCreate, LaunchResponse, WeeklyResultResponse, WinnerEntry
from .leaderboard import (
    AnalysisCreate,
    BuilderRankResponse,
    LeaderboardSnapshotResponse,
    UserRankResponse,
)
from .post import PostCreate, PostResponse
from .station import CrewMemberResponse, StationResponse, StationRoleResponse
from .vote import CastVoteResponse, LaunchVoteCreate, PostVoteResponse, RemoveVoteResponse

__all__ = [
    "IdeaCreate", "IdeaResponse",
    "FinalizeResult", "LaunchCreate", "LaunchResponse", "WeeklyResultResponse", "WinnerEntry",
    "AnalysisCreate", "BuilderRankResponse", "LeaderboardSnapshotResponse", "UserRankResponse",
    "PostCreate", "PostResponse",
    "CrewMemberResponse", "StationResponse", "StationRoleResponse",
    "CastVoteResponse", "LaunchVoteCreate", "PostVoteResponse", "RemoveVoteResponse",
]
