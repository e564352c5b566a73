# src/launch_deck/api/v1/endpoints/system.py
"""System endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from launch_deck.core.settings import settings

router = APIRouter(prefix="/system", tags=["system"])


@router.get("/config")
async def get_config() -> dict[str, object]:
    """Expose the public competition rules."""
    return {
        "launch_poten_threshold": settings.launch_poten_threshold,
        "post_poten_threshold": settings.post_poten_threshold,
        "max_launches_per_week": settings.max_launches_per_week,
        "leaderboard_top_limit": settings.leaderboard_top_limit,
    }
