"""Per-player summary statistics."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from domain.common import (
    MatchRecord,
    is_on_first_side,
    is_player_in_match,
    match_sets,
    player_won_match,
    score_for_side,
)
from domain.ratings.elo.calculator import round_half_away_from_zero

RECENT_FORM_LENGTH = 5

WIN = "W"
LOSS = "L"
DRAW = "D"


@dataclass(frozen=True)
class PlayerStats:
    player_id: str
    wins: int = 0
    losses: int = 0
    draws: int = 0
    total_matches: int = 0
    win_rate: int = 0
    sets_won: int = 0
    sets_lost: int = 0
    points_won: float = 0
    points_lost: float = 0
    streak: int = 0
    recent_form: list[str] = field(default_factory=list)


def match_result_for(match: MatchRecord, player_id: str) -> str:
    if not match.winner_id:
        return DRAW
    return WIN if player_won_match(match, player_id) else LOSS


def compute_streak(results: list[str]) -> int:
    """Signed length of the leading run of identical results; draws break it."""
    if not results or results[0] == DRAW:
        return 0
    direction = results[0]
    step = 1 if direction == WIN else -1
    streak = 0
    for result in results:
        if result != direction:
            break
        streak += step
    return streak


def compute_stats(player_id: str, matches: Iterable[MatchRecord]) -> PlayerStats:
    """Aggregate a player's record.

    ``matches`` are expected most-recent-first; the order is kept as given, so
    ``recent_form`` and ``streak`` describe the head of the sequence.
    """
    player_matches = [match for match in matches if is_player_in_match(match, player_id)]

    wins = losses = draws = 0
    sets_won = sets_lost = 0
    points_won = points_lost = 0.0
    results: list[str] = []

    for match in player_matches:
        result = match_result_for(match, player_id)
        if result == DRAW:
            draws += 1
        elif result == WIN:
            wins += 1
        else:
            losses += 1
        results.append(result)

        first_side = is_on_first_side(match, player_id)
        for score in match_sets(match):
            mine, theirs = score_for_side(score, first_side)
            if mine > theirs:
                sets_won += 1
            elif theirs > mine:
                sets_lost += 1
            points_won += mine
            points_lost += theirs

    total = wins + losses + draws
    win_rate = round_half_away_from_zero(100.0 * wins / total) if total > 0 else 0

    return PlayerStats(
        player_id=player_id,
        wins=wins,
        losses=losses,
        draws=draws,
        total_matches=len(player_matches),
        win_rate=win_rate,
        sets_won=sets_won,
        sets_lost=sets_lost,
        points_won=_as_number(points_won),
        points_lost=_as_number(points_lost),
        streak=compute_streak(results),
        recent_form=results[:RECENT_FORM_LENGTH],
    )


def _as_number(value: float) -> float:
    return int(value) if value.is_integer() else value
