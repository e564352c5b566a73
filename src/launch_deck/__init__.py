"""Launch Deck: weekly launch competition, weighted voting and leaderboards."""

__version__ = "0.1.0"
