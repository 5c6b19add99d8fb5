"""Derived-state engine for table-tennis match analytics."""

from domain.common import MatchRecord, Player, RatingHistoryEntry, SetScore
from domain.engine import (
    compute_achievements,
    compute_h2h,
    compute_stats,
    get_leaderboard,
    run_replay,
)

__all__ = [
    "MatchRecord",
    "Player",
    "RatingHistoryEntry",
    "SetScore",
    "compute_achievements",
    "compute_h2h",
    "compute_stats",
    "get_leaderboard",
    "run_replay",
]
