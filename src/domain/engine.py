"""Entry points used by the API layer.

Every analytic is recomputed from the snapshot it is given; nothing here is
cached. Rating replays are queued and the caller does not wait for them.
"""

from __future__ import annotations

from collections.abc import Sequence
from concurrent.futures import Future

from domain.common import MatchRecord, Player
from domain.ratings.replay import ReplayScheduler, ReplaySummary
from domain.stats.achievements import Achievement
from domain.stats.achievements import compute_achievements as _compute_achievements
from domain.stats.aggregator import PlayerStats
from domain.stats.aggregator import compute_stats as _compute_stats
from domain.stats.head_to_head import HeadToHead
from domain.stats.head_to_head import compute_h2h as _compute_h2h
from domain.stats.leaderboard import LeaderboardEntry
from domain.stats.leaderboard import get_leaderboard as _get_leaderboard


def compute_stats(player_id: str, matches: Sequence[MatchRecord]) -> PlayerStats:
    return _compute_stats(player_id, matches)


def get_leaderboard(
    players: Sequence[Player],
    matches: Sequence[MatchRecord],
) -> list[LeaderboardEntry]:
    return _get_leaderboard(players, matches)


def compute_h2h(player_id: str, other_id: str, matches: Sequence[MatchRecord]) -> HeadToHead:
    return _compute_h2h(player_id, other_id, matches)


def compute_achievements(
    player_id: str,
    stats: PlayerStats,
    elo_rating: int,
    all_matches: Sequence[MatchRecord],
    all_players: Sequence[Player],
) -> list[Achievement]:
    return _compute_achievements(player_id, stats, elo_rating, all_matches, all_players)


def run_replay(scheduler: ReplayScheduler) -> Future[ReplaySummary | None]:
    """Queue a full rating replay after a structural match-log mutation."""
    return scheduler.request_replay()


__all__ = [
    "compute_achievements",
    "compute_h2h",
    "compute_stats",
    "get_leaderboard",
    "run_replay",
]
