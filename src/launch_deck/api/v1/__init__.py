# src/launch_deck/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import (
    builders_router,
    competition_router,
    ideas_router,
    launches_router,
    leaderboard_router,
    posts_router,
    stations_router,
    system_router,
    votes_router,
)

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
