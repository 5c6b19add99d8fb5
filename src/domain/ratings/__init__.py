"""Rating-system domain modules."""

from domain.ratings.replay import (
    RatingReplayCoordinator,
    RatingStore,
    ReplayError,
    ReplayScheduler,
    ReplaySummary,
    replay_ratings,
)

__all__ = [
    "RatingReplayCoordinator",
    "RatingStore",
    "ReplayError",
    "ReplayScheduler",
    "ReplaySummary",
    "replay_ratings",
]
