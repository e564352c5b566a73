# src/launch_deck/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .builders import router as builders_router
from .competition import router as competition_router
from .ideas import router as ideas_router
from .launches import router as launches_router
from .leaderboard import router as leaderboard_router
from .posts import router as posts_router
from .stations import router as stations_router
from .system import router as system_router
from .votes import router as votes_router

__all__ = [
    "builders_router",
    "competition_router",
    "ideas_router",
    "launches_router",
    "leaderboard_router",
    "posts_router",
    "stations_router",
    "system_router",
    "votes_router",
]
