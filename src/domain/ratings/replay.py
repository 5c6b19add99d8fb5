"""Full-history rating replay.

Player ratings and the rating-history log are derived state. After any
structural change to the match log they are rebuilt from scratch: every rating
starts at the initial value, history is discarded, and all decisive matches are
replayed in chronological order. Draws are skipped entirely.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable, Sequence
from concurrent.futures import Future, ThreadPoolExecutor
from contextlib import AbstractContextManager
from dataclasses import dataclass
from typing import Protocol

from domain.common import MatchRecord, Player, RatingHistoryEntry
from domain.ratings.elo.calculator import EloParameters, MatchEloCalculator

logger = logging.getLogger(__name__)


class ReplayError(RuntimeError):
    """Raised when a replay pass cannot be completed against storage."""


class RatingStore(Protocol):
    """Persistence surface used by the replay coordinator."""

    def list_players(self) -> list[Player]: ...

    def list_matches(self) -> list[MatchRecord]: ...

    def reset_all_ratings(self, initial_rating: int) -> None: ...

    def delete_all_rating_history(self) -> None: ...

    def write_rating_history_entries(self, entries: Sequence[RatingHistoryEntry]) -> None: ...

    def update_player_rating(self, player_id: str, rating: int) -> None: ...

    def commit(self) -> None: ...

    def rollback(self) -> None: ...


StoreFactory = Callable[[], AbstractContextManager[RatingStore]]


@dataclass(frozen=True)
class ReplayResult:
    ratings: dict[str, int]
    history: list[RatingHistoryEntry]
    processed_matches: int
    skipped_draws: int
    skipped_invalid: int


@dataclass(frozen=True)
class ReplaySummary:
    processed_matches: int
    skipped_draws: int
    skipped_invalid: int
    inserted_entries: int
    updated_players: int
    dry_run: bool


def sort_matches_for_replay(matches: Iterable[MatchRecord]) -> list[MatchRecord]:
    """Order matches oldest first; equal dates fall back to match id."""
    return sorted(matches, key=lambda match: (match.date, match.id))


def is_ratable(match: MatchRecord) -> bool:
    """Whether a decisive match has a complete seat layout with no repeated player."""
    seats = [match.player1_id, match.player2_id]
    if match.is_doubles:
        seats += [match.player3_id, match.player4_id]
    if not all(seats):
        return False
    return len(set(seats)) == len(seats)


def replay_ratings(
    matches: Iterable[MatchRecord],
    params: EloParameters | None = None,
) -> ReplayResult:
    """Recompute ratings and history for a match log without touching storage.

    Malformed rows (missing seats, or one player on both sides) are logged and
    left out so that the rest of the log still replays.
    """
    calculator = MatchEloCalculator(params)
    history: list[RatingHistoryEntry] = []
    processed = 0
    skipped = 0
    invalid = 0

    for match in sort_matches_for_replay(matches):
        if not match.winner_id:
            skipped += 1
            continue
        if not is_ratable(match):
            logger.warning("Skipping malformed match_id=%s during replay", match.id)
            invalid += 1
            continue
        for change in calculator.process_match(match):
            history.append(
                RatingHistoryEntry(
                    player_id=change.player_id,
                    match_id=match.id,
                    rating_before=change.rating_before,
                    rating_after=change.rating_after,
                    created_at=match.date,
                )
            )
        processed += 1

    return ReplayResult(
        ratings=calculator.ratings(),
        history=history,
        processed_matches=processed,
        skipped_draws=skipped,
        skipped_invalid=invalid,
    )


class RatingReplayCoordinator:
    """Rebuilds stored ratings and history from the complete match log."""

    def __init__(
        self,
        store_factory: StoreFactory,
        params: EloParameters | None = None,
        *,
        batch_size: int = 5000,
    ) -> None:
        if batch_size <= 0:
            raise ValueError("batch_size must be greater than 0")
        self.store_factory = store_factory
        self.params = params or EloParameters()
        self.batch_size = batch_size

    def run_replay(
        self,
        *,
        dry_run: bool = False,
        should_apply: Callable[[], bool] | None = None,
    ) -> ReplaySummary | None:
        """Run one full replay pass.

        ``should_apply`` is checked after the computation and before any write;
        returning False abandons the pass and yields None.
        """
        try:
            with self.store_factory() as store:
                return self._replay_into(store, dry_run=dry_run, should_apply=should_apply)
        except Exception as exc:
            logger.exception("Rating replay failed")
            raise ReplayError("rating replay failed") from exc

    def _replay_into(
        self,
        store: RatingStore,
        *,
        dry_run: bool,
        should_apply: Callable[[], bool] | None,
    ) -> ReplaySummary | None:
        players = store.list_players()
        result = replay_ratings(store.list_matches(), self.params)

        if dry_run:
            logger.info(
                "[dry-run] processed_matches=%s skipped_draws=%s skipped_invalid=%s "
                "history_entries=%s",
                result.processed_matches,
                result.skipped_draws,
                result.skipped_invalid,
                len(result.history),
            )
            return ReplaySummary(
                processed_matches=result.processed_matches,
                skipped_draws=result.skipped_draws,
                skipped_invalid=result.skipped_invalid,
                inserted_entries=0,
                updated_players=0,
                dry_run=True,
            )

        if should_apply is not None and not should_apply():
            logger.info("Discarding stale replay result")
            return None

        try:
            store.reset_all_ratings(self.params.initial_elo)
            store.delete_all_rating_history()

            inserted = 0
            for start in range(0, len(result.history), self.batch_size):
                batch = result.history[start : start + self.batch_size]
                store.write_rating_history_entries(batch)
                inserted += len(batch)

            updated = 0
            for player in players:
                rating = result.ratings.get(player.id, self.params.initial_elo)
                store.update_player_rating(player.id, rating)
                updated += 1

            store.commit()
        except Exception:
            store.rollback()
            raise

        logger.info(
            "Rating replay completed processed_matches=%s skipped_draws=%s skipped_invalid=%s "
            "inserted_entries=%s updated_players=%s",
            result.processed_matches,
            result.skipped_draws,
            result.skipped_invalid,
            inserted,
            updated,
        )
        return ReplaySummary(
            processed_matches=result.processed_matches,
            skipped_draws=result.skipped_draws,
            skipped_invalid=result.skipped_invalid,
            inserted_entries=inserted,
            updated_players=updated,
            dry_run=False,
        )


class ReplayScheduler:
    """Serializes fire-and-forget replay requests through a single worker.

    Each request bumps a generation counter. A queued pass only writes if no
    newer request arrived before it finished computing, so the stored snapshot
    always reflects the latest mutation.
    """

    def __init__(self, coordinator: RatingReplayCoordinator) -> None:
        self.coordinator = coordinator
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="rating-replay")
        self._lock = threading.Lock()
        self._generation = 0

    @property
    def generation(self) -> int:
        with self._lock:
            return self._generation

    def request_replay(self) -> Future[ReplaySummary | None]:
        """Queue a replay and return immediately."""
        with self._lock:
            self._generation += 1
            generation = self._generation
        return self._executor.submit(self._run, generation)

    def _run(self, generation: int) -> ReplaySummary | None:
        if generation != self.generation:
            logger.debug("Skipping superseded replay generation=%s", generation)
            return None
        try:
            return self.coordinator.run_replay(
                should_apply=lambda: generation == self.generation,
            )
        except ReplayError:
            logger.error("Replay generation=%s failed; next mutation will retry", generation)
            return None

    def shutdown(self, *, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    def __enter__(self) -> ReplayScheduler:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.shutdown()


__all__ = [
    "RatingReplayCoordinator",
    "RatingStore",
    "ReplayError",
    "ReplayResult",
    "ReplayScheduler",
    "ReplaySummary",
    "is_ratable",
    "replay_ratings",
    "sort_matches_for_replay",
]
