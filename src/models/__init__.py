"""ORM models."""

from models.base import Base
from models.match import MatchRow
from models.player import PlayerRow
from models.rating_history import EloHistoryRow

__all__ = [
    "Base",
    "EloHistoryRow",
    "MatchRow",
    "PlayerRow",
]
