"""Database repository helpers."""

from repositories.rating_repository import (
    SqlRatingStore,
    delete_match,
    delete_player,
    ensure_schema,
    fetch_matches,
    fetch_players,
    fetch_rating_history,
    insert_player,
    sql_store_factory,
    upsert_match,
)

__all__ = [
    "SqlRatingStore",
    "delete_match",
    "delete_player",
    "ensure_schema",
    "fetch_matches",
    "fetch_players",
    "fetch_rating_history",
    "insert_player",
    "sql_store_factory",
    "upsert_match",
]
