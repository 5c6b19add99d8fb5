"""Date-range filtering and win-rate trends."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from domain.common import MatchRecord, is_player_in_match, player_won_match
from domain.ratings.elo.calculator import round_half_away_from_zero

DATE_RANGE_PRESETS: dict[str, timedelta] = {
    "30d": timedelta(days=30),
    "3m": timedelta(days=90),
    "year": timedelta(days=365),
}


@dataclass(frozen=True)
class WinRatePoint:
    date: datetime
    win_rate: int


def filter_matches_by_date_range(
    matches: Sequence[MatchRecord] | None,
    preset: str | None,
    *,
    now: datetime | None = None,
) -> list[MatchRecord]:
    """Keep matches on or after the preset's cutoff.

    ``all``, empty and unknown presets return every match.
    """
    if not matches:
        return []
    window = DATE_RANGE_PRESETS.get(preset or "all")
    if window is None:
        return list(matches)
    reference = now or datetime.now(UTC).replace(tzinfo=None)
    cutoff = reference - window
    return [match for match in matches if match.date >= cutoff]


def compute_win_rate_over_time(
    player_id: str,
    matches: Sequence[MatchRecord] | None,
) -> list[WinRatePoint]:
    """Cumulative win rate after each of the player's matches, oldest first."""
    if not player_id or not matches:
        return []
    player_matches = sorted(
        (match for match in matches if is_player_in_match(match, player_id)),
        key=lambda match: match.date,
    )

    points: list[WinRatePoint] = []
    wins = 0
    for total, match in enumerate(player_matches, start=1):
        if player_won_match(match, player_id):
            wins += 1
        points.append(
            WinRatePoint(
                date=match.date,
                win_rate=round_half_away_from_zero(100.0 * wins / total),
            )
        )
    return points
