# src/launch_deck/scripts/cron.py
"""
Entry point for an external scheduler.

Run it from cron instead of enabling the in-process worker:

    */5 * * * *   python -m launch_deck.scripts.cron snapshot
    0 0 * * 6     python -m launch_deck.scripts.cron finalize
"""

from __future__ import annotations

import argparse
import logging

from sqlalchemy.orm import Session

from launch_deck.db.session import SessionLocal
from launch_deck.services.competition import CompetitionService
from launch_deck.services.leaderboard import LeaderboardAggregator

logger = logging.getLogger(__name__)


def rebuild_leaderboard(db: Session) -> None:
    """Rebuild the leaderboard snapshot from stored analyses."""
    snapshot = LeaderboardAggregator(db).rebuild_snapshot()
    if snapshot is None:
        print("No analyses stored; snapshot unchanged")
    else:
        print(f"Rebuilt leaderboard snapshot over {snapshot.total_users} analyses")


def finalize_week(db: Session, week_number: str | None = None) -> None:
    """Finalize `week_number`, or the previous week when omitted."""
    service = CompetitionService(db)
    outcome = (
        service.finalize_week(week_number) if week_number else service.finalize_current_week()
    )
    if outcome.success:
        print(f"Finalized {outcome.week_number} with {len(outcome.winners)} winner(s)")
    else:
        print(f"Nothing finalized: {outcome.reason}")


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Run scheduled competition jobs.")
    subparsers = parser.add_subparsers(dest="job", required=True)
    subparsers.add_parser("snapshot", help="Rebuild the leaderboard snapshot")
    finalize = subparsers.add_parser("finalize", help="Finalize a competition week")
    finalize.add_argument("--week", help="ISO week key such as 2026-W07")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)
    db = SessionLocal()
    try:
        if args.job == "snapshot":
            rebuild_leaderboard(db)
        else:
            finalize_week(db, args.week)
    finally:
        db.close()


if __name__ == "__main__":
    main()
