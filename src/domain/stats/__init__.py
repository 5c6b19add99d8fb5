"""Player-facing analytics derived from the match log."""

from domain.stats.achievements import ACHIEVEMENT_DEFINITIONS, Achievement, compute_achievements
from domain.stats.aggregator import PlayerStats, compute_stats
from domain.stats.head_to_head import HeadToHead, compute_h2h
from domain.stats.leaderboard import LeaderboardEntry, get_leaderboard
from domain.stats.results import SetTally, count_set_wins, determine_winner
from domain.stats.trends import (
    WinRatePoint,
    compute_win_rate_over_time,
    filter_matches_by_date_range,
)

__all__ = [
    "ACHIEVEMENT_DEFINITIONS",
    "Achievement",
    "HeadToHead",
    "LeaderboardEntry",
    "PlayerStats",
    "SetTally",
    "WinRatePoint",
    "compute_achievements",
    "compute_h2h",
    "compute_stats",
    "compute_win_rate_over_time",
    "count_set_wins",
    "determine_winner",
    "filter_matches_by_date_range",
    "get_leaderboard",
]
