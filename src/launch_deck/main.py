# src/launch_deck/main.py
"""Main entry point for the Launch Deck application."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from launch_deck.api.v1 import (
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
from launch_deck.core.settings import settings
from launch_deck.services.worker import CompetitionWorker

logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title=f"{settings.app_name} API",
    description="Weekly launch competition with tier-weighted voting",
    version=settings.app_version,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

# Include API routers
app.include_router(launches_router, prefix="/api/v1")
app.include_router(votes_router, prefix="/api/v1")
app.include_router(competition_router, prefix="/api/v1")
app.include_router(posts_router, prefix="/api/v1")
app.include_router(stations_router, prefix="/api/v1")
app.include_router(leaderboard_router, prefix="/api/v1")
app.include_router(builders_router, prefix="/api/v1")
app.include_router(ideas_router, prefix="/api/v1")
app.include_router(system_router, prefix="/api/v1")


@app.on_event("startup")
async def on_startup() -> None:
    if settings.scheduler_enabled:
        worker = CompetitionWorker()
        await worker.start()
        app.state.competition_worker = worker
        logger.info("Competition worker started")
    else:
        app.state.competition_worker = None


@app.on_event("shutdown")
async def on_shutdown() -> None:
    worker: CompetitionWorker | None = getattr(app.state, "competition_worker", None)
    if worker:
        await worker.stop()


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": f"{settings.app_name} API",
        "version": settings.app_version,
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("launch_deck.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
