"""Unit tests for head-to-head records."""

from __future__ import annotations

from datetime import datetime

from domain.common import MatchRecord, SetScore
from domain.stats.head_to_head import compute_h2h


def _singles(match_id: str, winner_id: str | None, player2_id: str = "p2") -> MatchRecord:
    return MatchRecord(
        id=match_id,
        date=datetime(2026, 1, 1),
        player1_id="p1",
        player2_id=player2_id,
        sets=(SetScore(11, 9),),
        winner_id=winner_id,
    )


def _doubles(match_id: str, winner_id: str) -> MatchRecord:
    # p1 partners lead "a" on the first side; p2 is the second-side lead.
    return MatchRecord(
        id=match_id,
        date=datetime(2026, 1, 1),
        player1_id="a",
        player2_id="p2",
        player3_id="p1",
        player4_id="b",
        is_doubles=True,
        sets=(SetScore(11, 9), SetScore(11, 9)),
        winner_id=winner_id,
    )


def test_counts_only_shared_matches() -> None:
    matches = [
        _singles("1", "p1"),
        _singles("2", "p1"),
        _singles("3", "p2"),
        _singles("4", None),
        _singles("5", "p1", player2_id="p3"),
    ]
    record = compute_h2h("p1", "p2", matches)
    assert (record.wins, record.other_wins, record.total) == (2, 1, 4)


def test_doubles_wins_attributed_by_side() -> None:
    record = compute_h2h("p1", "p2", [_doubles("d1", "a"), _doubles("d2", "p2")])
    assert (record.wins, record.other_wins, record.total) == (1, 1, 2)


def test_partners_are_credited_together() -> None:
    record = compute_h2h("p1", "a", [_doubles("d1", "a"), _doubles("d2", "p2")])
    assert (record.wins, record.other_wins, record.total) == (1, 1, 2)


def test_no_shared_matches() -> None:
    record = compute_h2h("p1", "zz", [_singles("1", "p1")])
    assert (record.wins, record.other_wins, record.total) == (0, 0, 0)


def test_unknown_winner_is_credited_to_second_side() -> None:
    singles = compute_h2h("p1", "p2", [_singles("1", "ghost")])
    assert (singles.wins, singles.other_wins, singles.total) == (0, 1, 1)

    doubles = compute_h2h("p1", "p2", [_doubles("d1", "ghost")])
    assert (doubles.wins, doubles.other_wins, doubles.total) == (0, 1, 1)
