"""Persistence helpers for players, matches and rating history using SQLAlchemy."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Sequence
from contextlib import AbstractContextManager, contextmanager
from typing import Any

from sqlalchemy import delete, insert, or_, select, update
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from domain.common import MatchRecord, Player, RatingHistoryEntry, SetScore
from models import Base, EloHistoryRow, MatchRow, PlayerRow

logger = logging.getLogger(__name__)


def ensure_schema(engine: Engine) -> None:
    """Create players, matches and elo_history tables if they do not exist."""
    Base.metadata.create_all(
        bind=engine,
        tables=[PlayerRow.__table__, MatchRow.__table__, EloHistoryRow.__table__],
    )


def row_to_player(row: PlayerRow) -> Player:
    return Player(id=row.id, name=row.name, elo_rating=row.elo_rating or 1200)


def row_to_match(row: MatchRow) -> MatchRecord:
    return MatchRecord(
        id=row.id,
        date=row.date,
        player1_id=row.player1_id,
        player2_id=row.player2_id,
        player3_id=row.player3_id or None,
        player4_id=row.player4_id or None,
        is_doubles=bool(row.is_doubles),
        sets=tuple(_to_set_score(raw) for raw in (row.sets or [])),
        winner_id=row.winner_id or None,
        note=row.note or "",
    )


def match_to_row_values(match: MatchRecord) -> dict[str, Any]:
    return {
        "id": match.id,
        "date": match.date,
        "player1_id": match.player1_id,
        "player2_id": match.player2_id,
        "player3_id": match.player3_id,
        "player4_id": match.player4_id,
        "is_doubles": match.is_doubles,
        "sets": [{"p1": score.p1, "p2": score.p2} for score in match.sets],
        "winner_id": match.winner_id,
        "note": match.note,
    }


def _to_set_score(raw: Any) -> SetScore:
    if isinstance(raw, dict):
        return SetScore(p1=raw.get("p1"), p2=raw.get("p2"))
    return SetScore(p1=None, p2=None)


def fetch_players(session: Session) -> list[Player]:
    rows = session.execute(select(PlayerRow).order_by(PlayerRow.name)).scalars().all()
    return [row_to_player(row) for row in rows]


def fetch_matches(session: Session, *, player_id: str | None = None) -> list[MatchRecord]:
    """Fetch matches most-recent-first, optionally only those a player took part in."""
    statement = select(MatchRow).order_by(MatchRow.date.desc(), MatchRow.id.desc())
    if player_id is not None:
        statement = statement.where(
            or_(
                MatchRow.player1_id == player_id,
                MatchRow.player2_id == player_id,
                MatchRow.player3_id == player_id,
                MatchRow.player4_id == player_id,
            )
        )
    rows = session.execute(statement).scalars().all()
    return [row_to_match(row) for row in rows]


def fetch_rating_history(session: Session, player_id: str) -> list[RatingHistoryEntry]:
    statement = (
        select(EloHistoryRow)
        .where(EloHistoryRow.player_id == player_id)
        .order_by(EloHistoryRow.created_at, EloHistoryRow.id)
    )
    rows = session.execute(statement).scalars().all()
    return [
        RatingHistoryEntry(
            player_id=row.player_id,
            match_id=row.match_id,
            rating_before=row.rating_before,
            rating_after=row.rating_after,
            created_at=row.created_at,
        )
        for row in rows
    ]


def insert_player(session: Session, player: Player) -> None:
    session.execute(
        insert(PlayerRow),
        [{"id": player.id, "name": player.name, "elo_rating": player.elo_rating}],
    )


def upsert_match(session: Session, match: MatchRecord) -> None:
    """Insert a match or overwrite every column of an existing one."""
    values = match_to_row_values(match)
    existing = session.get(MatchRow, match.id)
    if existing is None:
        session.execute(insert(MatchRow), [values])
        return
    values.pop("id")
    session.execute(update(MatchRow).where(MatchRow.id == match.id).values(**values))


def delete_match(session: Session, match_id: str) -> None:
    session.execute(delete(EloHistoryRow).where(EloHistoryRow.match_id == match_id))
    session.execute(delete(MatchRow).where(MatchRow.id == match_id))


def delete_player(session: Session, player_id: str) -> int:
    """Delete a player together with every match they appear in.

    Returns the number of matches removed.
    """
    seat_filter = or_(
        MatchRow.player1_id == player_id,
        MatchRow.player2_id == player_id,
        MatchRow.player3_id == player_id,
        MatchRow.player4_id == player_id,
    )
    match_ids = session.execute(select(MatchRow.id).where(seat_filter)).scalars().all()
    if match_ids:
        session.execute(delete(EloHistoryRow).where(EloHistoryRow.match_id.in_(match_ids)))
        session.execute(delete(MatchRow).where(MatchRow.id.in_(match_ids)))
    session.execute(delete(EloHistoryRow).where(EloHistoryRow.player_id == player_id))
    session.execute(delete(PlayerRow).where(PlayerRow.id == player_id))
    logger.info("Deleted player_id=%s with cascaded_matches=%s", player_id, len(match_ids))
    return len(match_ids)


class SqlRatingStore:
    """Rating replay write surface backed by one SQLAlchemy session."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_players(self) -> list[Player]:
        return fetch_players(self.session)

    def list_matches(self) -> list[MatchRecord]:
        return fetch_matches(self.session)

    def reset_all_ratings(self, initial_rating: int) -> None:
        self.session.execute(update(PlayerRow).values(elo_rating=initial_rating))

    def delete_all_rating_history(self) -> None:
        self.session.execute(delete(EloHistoryRow))

    def write_rating_history_entries(self, entries: Sequence[RatingHistoryEntry]) -> None:
        """Bulk insert rating history rows."""
        if not entries:
            return
        payload = [
            {
                "player_id": entry.player_id,
                "match_id": entry.match_id,
                "rating_before": entry.rating_before,
                "rating_after": entry.rating_after,
                "created_at": entry.created_at,
            }
            for entry in entries
        ]
        self.session.execute(insert(EloHistoryRow), payload)

    def update_player_rating(self, player_id: str, rating: int) -> None:
        self.session.execute(
            update(PlayerRow).where(PlayerRow.id == player_id).values(elo_rating=rating)
        )

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()


def sql_store_factory(
    session_factory: sessionmaker[Session],
) -> Callable[[], AbstractContextManager[SqlRatingStore]]:
    """Build a store factory that opens a fresh session per replay pass."""

    @contextmanager
    def open_store() -> Iterator[SqlRatingStore]:
        with session_factory() as session:
            yield SqlRatingStore(session)

    return open_store


__all__ = [
    "SqlRatingStore",
    "delete_match",
    "delete_player",
    "ensure_schema",
    "fetch_matches",
    "fetch_players",
    "fetch_rating_history",
    "insert_player",
    "row_to_match",
    "row_to_player",
    "sql_store_factory",
    "upsert_match",
]
