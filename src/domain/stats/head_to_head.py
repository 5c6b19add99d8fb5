"""Pairwise head-to-head records."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from domain.common import MatchRecord, is_on_first_side, is_player_in_match


@dataclass(frozen=True)
class HeadToHead:
    wins: int
    other_wins: int
    total: int


def compute_h2h(player_id: str, other_id: str, matches: Iterable[MatchRecord]) -> HeadToHead:
    """Count wins for each player across matches where both took part.

    Wins are attributed by side: a player is credited when they sit on the
    side led by ``winner_id``, so partners in doubles are credited together.
    Draws only count toward ``total``.
    """
    shared = [
        match
        for match in matches
        if is_player_in_match(match, player_id) and is_player_in_match(match, other_id)
    ]

    wins = 0
    other_wins = 0
    for match in shared:
        if not match.winner_id:
            continue
        winner_first_side = match.winner_id == match.player1_id
        if is_on_first_side(match, player_id) == winner_first_side:
            wins += 1
        if is_on_first_side(match, other_id) == winner_first_side:
            other_wins += 1

    return HeadToHead(wins=wins, other_wins=other_wins, total=len(shared))
