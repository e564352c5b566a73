"""Background scheduling for the leaderboard snapshot and weekly finalization.

`CompetitionWorker` is an in-process stand-in for an external cron. It rebuilds
the leaderboard snapshot every `SNAPSHOT_INTERVAL_SECONDS` and, on Saturdays
(UTC), finalizes the previous competition week. Finalization is idempotent, so
the repeated checks during a Saturday are harmless.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from launch_deck.core.errors import LaunchDeckError
from launch_deck.core.settings import settings
from launch_deck.db.session import SessionLocal
from launch_deck.db.time import utcnow

from .competition import CompetitionService, FinalizeOutcome
from .leaderboard import LeaderboardAggregator

logger = logging.getLogger(__name__)

SATURDAY = 5


class CompetitionWorker:
    """Periodically runs the scheduled competition jobs."""

    def __init__(
        self,
        session_factory: Callable[[], Session] | None = None,
        *,
        snapshot_interval: float | None = None,
        finalize_interval: float | None = None,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        """Initialize the worker.

        Args:
            session_factory: Creates a fresh session per job run. Defaults to
                the application's `SessionLocal`.
            snapshot_interval: Seconds between snapshot rebuilds.
            finalize_interval: Seconds between finalization checks.
            clock: Returns the current UTC time; replaced in tests.
        """
        self.session_factory = session_factory or SessionLocal
        self.snapshot_interval = max(
            0.1, float(snapshot_interval or settings.snapshot_interval_seconds)
        )
        self.finalize_interval = max(
            0.1, float(finalize_interval or settings.finalize_check_interval_seconds)
        )
        self.clock = clock
        self._task: asyncio.Task[None] | None = None
        self._stopping = asyncio.Event()

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self) -> None:
        """Start the background loop."""
        if not self.running:
            self._stopping.clear()
            self._task = asyncio.create_task(self._run())

    async def stop(self) -> None:
        """Stop the background loop and wait for the current job to finish."""
        if self._task is None:
            return

        self._stopping.set()
        await self._task
        self._task = None

    async def _run(self) -> None:
        loop = asyncio.get_running_loop()
        next_snapshot = loop.time()
        next_finalize = loop.time()

        while not self._stopping.is_set():
            now = loop.time()
            if now >= next_snapshot:
                await asyncio.to_thread(self.rebuild_snapshot)
                next_snapshot = now + self.snapshot_interval
            if now >= next_finalize:
                await asyncio.to_thread(self.finalize_if_due)
                next_finalize = now + self.finalize_interval

            delay = max(0.0, min(next_snapshot, next_finalize) - loop.time())
            try:
                await asyncio.wait_for(self._stopping.wait(), timeout=delay)
            except TimeoutError:
                continue

    def rebuild_snapshot(self) -> None:
        with self.session_factory() as db:
            try:
                LeaderboardAggregator(db).rebuild_snapshot()
            except SQLAlchemyError as e:
                logger.error("CompetitionWorker failed to rebuild snapshot: %s", e, exc_info=True)

    def finalize_if_due(self) -> FinalizeOutcome | None:
        """Finalize the previous week when today is Saturday (UTC)."""
        now = self.clock()
        if now.weekday() != SATURDAY:
            return None

        with self.session_factory() as db:
            try:
                return CompetitionService(db).finalize_current_week(now)
            except SQLAlchemyError as e:
                logger.error("CompetitionWorker failed to finalize week: %s", e, exc_info=True)
            except LaunchDeckError as e:
                logger.warning("CompetitionWorker finalization rejected: %s", e)
        return None


__all__ = ["CompetitionWorker"]
