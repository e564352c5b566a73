# src/launch_deck/services/__init__.py
"""Business logic services for the Launch Deck application."""

from .board import BoardService
from .builder_ranks import BuilderRankService
from .competition import CompetitionService
from .ideas import IdeaService
from .leaderboard import LeaderboardAggregator
from .provisioning import StationProvisioner
from .stations import StationService
from .voting import VotingEngine

__all__ = [
    "BoardService",
    "BuilderRankService",
    "CompetitionService",
    "IdeaService",
    "LeaderboardAggregator",
    "StationProvisioner",
    "StationService",
    "VotingEngine",
]
