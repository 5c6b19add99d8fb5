"""Elo rating modules."""

from domain.ratings.elo.calculator import (
    EloParameters,
    MatchEloCalculator,
    calculate_expected_score,
    calculate_rating_change,
    round_half_away_from_zero,
)
from domain.ratings.elo.config import EloSystemConfig, load_elo_system_configs

__all__ = [
    "EloParameters",
    "EloSystemConfig",
    "MatchEloCalculator",
    "calculate_expected_score",
    "calculate_rating_change",
    "load_elo_system_configs",
    "round_half_away_from_zero",
]
