"""Leaderboard ordering."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from domain.common import DEFAULT_RATING, MatchRecord, Player
from domain.stats.aggregator import PlayerStats, compute_stats


@dataclass(frozen=True)
class LeaderboardEntry:
    player: Player
    stats: PlayerStats


def _sort_key(entry: LeaderboardEntry) -> tuple[int, int, int]:
    rating = entry.player.elo_rating or DEFAULT_RATING
    return (rating, entry.stats.win_rate, entry.stats.wins)


def get_leaderboard(
    players: Iterable[Player],
    matches: Sequence[MatchRecord],
) -> list[LeaderboardEntry]:
    """Rank players by rating, then win rate, then wins. Ties keep input order."""
    entries = [
        LeaderboardEntry(player=player, stats=compute_stats(player.id, matches))
        for player in players
    ]
    # sorted() is stable, and reverse=True keeps equal keys in input order.
    return sorted(entries, key=_sort_key, reverse=True)
