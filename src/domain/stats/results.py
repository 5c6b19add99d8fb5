"""Set counting and winner determination."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from domain.common import SetScore, coerce_score


@dataclass(frozen=True)
class SetTally:
    p1: int
    p2: int


def count_set_wins(sets: Iterable[SetScore] | None) -> SetTally:
    """Count sets won by each lead side. Tied sets count for nobody."""
    p1_sets = 0
    p2_sets = 0
    for score in sets or ():
        p1 = coerce_score(score.p1)
        p2 = coerce_score(score.p2)
        if p1 > p2:
            p1_sets += 1
        elif p2 > p1:
            p2_sets += 1
    return SetTally(p1=p1_sets, p2=p2_sets)


def determine_winner(
    sets: Iterable[SetScore] | None,
    player1_id: str,
    player2_id: str,
) -> str | None:
    """Return the lead id of the side with more set wins, or None for a draw."""
    tally = count_set_wins(sets)
    if tally.p1 > tally.p2:
        return player1_id
    if tally.p2 > tally.p1:
        return player2_id
    return None


__all__ = ["SetTally", "count_set_wins", "determine_winner"]
