# src/launch_deck/models/__init__.py
"""SQLAlchemy models for the Launch Deck application."""

from .achievement import PotenAchievement
from .analysis import Analysis, LeaderboardSnapshot
from .idea import Idea
from .launch import Launch, LaunchVote, WeeklyResult
from .post import Post
from .station import Station, StationCrew, StationRole
from .user import BuilderRank, User
from .vote import PostVote

__all__ = [
    "PotenAchievement",
    "Analysis", "LeaderboardSnapshot",
    "Idea",
    "Launch", "LaunchVote", "WeeklyResult",
    "Post",
    "Station", "StationCrew", "StationRole",
    "BuilderRank", "User",
    "PostVote",
]
