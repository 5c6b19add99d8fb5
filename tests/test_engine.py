"""End-to-end checks of the exposed engine functions."""

from __future__ import annotations

from datetime import datetime, timedelta

from db import create_db_engine, create_session_factory
from domain import (
    MatchRecord,
    Player,
    SetScore,
    compute_achievements,
    compute_h2h,
    compute_stats,
    get_leaderboard,
    run_replay,
)
from domain.ratings.replay import RatingReplayCoordinator, ReplayScheduler
from repositories.rating_repository import (
    ensure_schema,
    fetch_matches,
    fetch_players,
    insert_player,
    sql_store_factory,
    upsert_match,
)

BASE_TIME = datetime(2026, 4, 1, 19, 0, 0)


def test_mutation_then_replay_then_read_analytics() -> None:
    engine = create_db_engine("sqlite://")
    ensure_schema(engine)
    session_factory = create_session_factory(engine)

    with session_factory() as session:
        insert_player(session, Player("p1", "Alice"))
        insert_player(session, Player("p2", "Bob"))
        for index in range(10):
            upsert_match(
                session,
                MatchRecord(
                    id=f"m{index:02d}",
                    date=BASE_TIME + timedelta(days=index),
                    player1_id="p1",
                    player2_id="p2",
                    sets=(SetScore(11, 0), SetScore(11, 0), SetScore(11, 0)),
                    winner_id="p1",
                ),
            )
        session.commit()

    with ReplayScheduler(RatingReplayCoordinator(sql_store_factory(session_factory))) as scheduler:
        summary = run_replay(scheduler).result(timeout=10)
    assert summary is not None and summary.inserted_entries == 20

    with session_factory() as session:
        players = fetch_players(session)
        matches = fetch_matches(session)

    leaderboard = get_leaderboard(players, matches)
    alice = leaderboard[0].player
    assert alice.id == "p1" and alice.elo_rating > 1300
    assert leaderboard[1].player.elo_rating < 1200

    stats = compute_stats("p1", matches)
    assert stats.wins == 10 and stats.streak == 10 and stats.recent_form == ["W"] * 5

    record = compute_h2h("p1", "p2", matches)
    assert (record.wins, record.other_wins, record.total) == (10, 0, 10)

    unlocked = {
        achievement.id
        for achievement in compute_achievements("p1", stats, alice.elo_rating, matches, players)
        if achievement.unlocked
    }
    assert {"first_win", "getting_started", "on_fire", "unstoppable", "rising_star", "clean_sweep", "rival"} <= unlocked
    assert "elite" not in unlocked
    engine.dispose()
