"""Shared types and seat helpers for match analytics."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from math import isfinite
from typing import Any

DEFAULT_RATING = 1200


@dataclass(frozen=True)
class Player:
    id: str
    name: str
    elo_rating: int = DEFAULT_RATING


@dataclass(frozen=True)
class SetScore:
    """One set as stored. Values may be malformed in historical rows."""

    p1: Any
    p2: Any


@dataclass(frozen=True)
class MatchRecord:
    """Canonical match payload used by ratings and analytics.

    Seats 1 and 3 form the first side, seats 2 and 4 the second. In doubles
    ``player1_id``/``player2_id`` are the team leads and ``winner_id`` is one
    of them, or None for a draw.
    """

    id: str
    date: datetime
    player1_id: str
    player2_id: str
    sets: tuple[SetScore, ...] = ()
    winner_id: str | None = None
    is_doubles: bool = False
    player3_id: str | None = None
    player4_id: str | None = None
    note: str = ""

    @property
    def participant_ids(self) -> tuple[str, ...]:
        seats = (self.player1_id, self.player2_id, self.player3_id, self.player4_id)
        return tuple(player_id for player_id in seats if player_id)


@dataclass(frozen=True)
class RatingChange:
    player_id: str
    rating_before: int
    rating_after: int

    @property
    def delta(self) -> int:
        return self.rating_after - self.rating_before


@dataclass(frozen=True)
class RatingHistoryEntry:
    player_id: str
    match_id: str
    rating_before: int
    rating_after: int
    created_at: datetime


def coerce_score(value: Any) -> float:
    """Convert a stored set value to a number; anything unusable counts as 0."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if isfinite(number) else 0.0


def match_sets(match: MatchRecord) -> Sequence[SetScore]:
    return match.sets or ()


def is_player_in_match(match: MatchRecord, player_id: str) -> bool:
    return player_id in (match.player1_id, match.player2_id, match.player3_id, match.player4_id)


def is_on_first_side(match: MatchRecord, player_id: str) -> bool:
    return match.player1_id == player_id or match.player3_id == player_id


def player_won_match(match: MatchRecord, player_id: str) -> bool:
    """Whether the player's side won. Draws are never a win."""
    if not match.winner_id:
        return False
    if not match.is_doubles:
        return match.winner_id == player_id
    first_side = is_on_first_side(match, player_id)
    return first_side if match.winner_id == match.player1_id else not first_side


def score_for_side(score: SetScore, first_side: bool) -> tuple[float, float]:
    """Return ``(mine, theirs)`` for one set from the given side's perspective."""
    p1 = coerce_score(score.p1)
    p2 = coerce_score(score.p2)
    return (p1, p2) if first_side else (p2, p1)


__all__ = [
    "DEFAULT_RATING",
    "MatchRecord",
    "Player",
    "RatingChange",
    "RatingHistoryEntry",
    "SetScore",
    "coerce_score",
    "is_on_first_side",
    "is_player_in_match",
    "match_sets",
    "player_won_match",
    "score_for_side",
]
