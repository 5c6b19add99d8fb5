"""Match-level Elo logic for singles and doubles."""

from __future__ import annotations

from dataclasses import dataclass
from math import floor

from domain.common import DEFAULT_RATING, MatchRecord, RatingChange


@dataclass(frozen=True)
class EloParameters:
    initial_elo: int = DEFAULT_RATING
    k_factor: float = 32.0
    scale_factor: float = 400.0
    shared_doubles_delta: bool = True


def round_half_away_from_zero(value: float) -> int:
    if value >= 0.0:
        return int(floor(value + 0.5))
    return -int(floor(-value + 0.5))


def calculate_expected_score(
    rating: float,
    opponent_rating: float,
    scale_factor: float = 400.0,
) -> float:
    """Compute the Elo expected score for one side."""
    return 1.0 / (1.0 + 10.0 ** ((opponent_rating - rating) / scale_factor))


def calculate_rating_change(
    rating: float,
    opponent_rating: float,
    actual_score: float,
    k_factor: float = 32.0,
    scale_factor: float = 400.0,
) -> int:
    """Return the new (rounded) rating after one decisive result."""
    expected = calculate_expected_score(rating, opponent_rating, scale_factor)
    return round_half_away_from_zero(rating + k_factor * (actual_score - expected))


class MatchEloCalculator:
    """Stateful match-by-match Elo calculator keyed by player id."""

    def __init__(self, params: EloParameters | None = None) -> None:
        self.params = params or EloParameters()
        self._ratings: dict[str, int] = {}

    def get_rating(self, player_id: str) -> int:
        return self._ratings.get(player_id, self.params.initial_elo)

    def tracked_entity_count(self) -> int:
        return len(self._ratings)

    def ratings(self) -> dict[str, int]:
        """Return a snapshot of current player ratings."""
        return dict(self._ratings)

    def process_match(self, match: MatchRecord) -> list[RatingChange]:
        changes = self.calculate(match, self._ratings)
        for change in changes:
            self._ratings[change.player_id] = change.rating_after
        return changes

    def calculate(self, match: MatchRecord, ratings: dict[str, int]) -> list[RatingChange]:
        """Compute rating changes for one decisive match without mutating ``ratings``."""
        if not match.winner_id:
            raise ValueError(f"match_id={match.id} is a draw and cannot be rated")

        def lookup(player_id: str) -> int:
            return ratings.get(player_id, self.params.initial_elo)

        side1_actual = 1.0 if match.winner_id == match.player1_id else 0.0
        side2_actual = 1.0 - side1_actual

        if not match.is_doubles:
            rating1 = lookup(match.player1_id)
            rating2 = lookup(match.player2_id)
            return [
                RatingChange(
                    player_id=match.player1_id,
                    rating_before=rating1,
                    rating_after=self._change(rating1, rating2, side1_actual),
                ),
                RatingChange(
                    player_id=match.player2_id,
                    rating_before=rating2,
                    rating_after=self._change(rating2, rating1, side2_actual),
                ),
            ]

        if not match.player3_id or not match.player4_id:
            raise ValueError(f"match_id={match.id} is doubles but is missing partner seats")

        team1 = (match.player1_id, match.player3_id)
        team2 = (match.player2_id, match.player4_id)
        team1_pre = {player_id: lookup(player_id) for player_id in team1}
        team2_pre = {player_id: lookup(player_id) for player_id in team2}
        team1_rating = sum(team1_pre.values()) / 2.0
        team2_rating = sum(team2_pre.values()) / 2.0

        changes: list[RatingChange] = []
        for pre_ratings, team_rating, opponent_rating, actual in (
            (team1_pre, team1_rating, team2_rating, side1_actual),
            (team2_pre, team2_rating, team1_rating, side2_actual),
        ):
            team_delta = self._team_delta(team_rating, opponent_rating, actual)
            for player_id, rating_before in pre_ratings.items():
                if self.params.shared_doubles_delta:
                    rating_after = rating_before + team_delta
                else:
                    rating_after = self._change(rating_before, opponent_rating, actual)
                changes.append(
                    RatingChange(
                        player_id=player_id,
                        rating_before=rating_before,
                        rating_after=rating_after,
                    )
                )
        return changes

    def _change(self, rating: float, opponent_rating: float, actual: float) -> int:
        return calculate_rating_change(
            rating,
            opponent_rating,
            actual,
            k_factor=self.params.k_factor,
            scale_factor=self.params.scale_factor,
        )

    def _team_delta(self, team_rating: float, opponent_rating: float, actual: float) -> int:
        expected = calculate_expected_score(team_rating, opponent_rating, self.params.scale_factor)
        return round_half_away_from_zero(self.params.k_factor * (actual - expected))
