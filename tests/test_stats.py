"""Unit tests for per-player statistics."""

from __future__ import annotations

from datetime import datetime, timedelta

from domain.common import MatchRecord, SetScore
from domain.stats.aggregator import compute_stats, compute_streak

BASE_TIME = datetime(2026, 2, 1, 12, 0, 0)


def _singles(
    index: int,
    winner_id: str | None,
    *,
    sets: tuple[SetScore, ...] = (SetScore(11, 7),),
    opponent: str = "p2",
) -> MatchRecord:
    return MatchRecord(
        id=f"m{index}",
        date=BASE_TIME - timedelta(days=index),
        player1_id="p1",
        player2_id=opponent,
        sets=sets,
        winner_id=winner_id,
    )


def _results_log(results: str) -> list[MatchRecord]:
    """Build a most-recent-first log for p1 from a string like 'WLD'."""
    winners = {"W": "p1", "L": "p2", "D": None}
    return [_singles(index, winners[result]) for index, result in enumerate(results)]


def test_no_matches_yields_empty_stats() -> None:
    stats = compute_stats("p1", [])
    assert stats.total_matches == 0
    assert stats.win_rate == 0
    assert stats.streak == 0
    assert stats.recent_form == []


def test_win_loss_win_streak_is_one() -> None:
    stats = compute_stats("p1", _results_log("WLW"))
    assert stats.streak == 1
    assert stats.recent_form == ["W", "L", "W"]


def test_loss_streak_is_negative() -> None:
    assert compute_stats("p1", _results_log("LLW")).streak == -2


def test_leading_draw_resets_streak() -> None:
    assert compute_stats("p1", _results_log("DWWW")).streak == 0
    assert compute_streak(["W", "W", "D", "W"]) == 2


def test_recent_form_is_first_five_but_streak_spans_full_history() -> None:
    stats = compute_stats("p1", _results_log("WWWWWWWL"))
    assert stats.recent_form == ["W"] * 5
    assert stats.streak == 7


def test_recent_form_keeps_given_order() -> None:
    log = list(reversed(_results_log("WLL")))
    assert compute_stats("p1", log).recent_form == ["L", "L", "W"]


def test_tally_and_win_rate() -> None:
    stats = compute_stats("p1", _results_log("WWLD") + [_singles(9, "p3", opponent="p3")])
    assert (stats.wins, stats.losses, stats.draws) == (2, 2, 1)
    assert stats.total_matches == 5
    assert stats.win_rate == 40


def test_win_rate_rounds_half_away_from_zero() -> None:
    assert compute_stats("p1", _results_log("WLLLLLLL")).win_rate == 13
    assert compute_stats("p1", _results_log("WWL")).win_rate == 67


def test_other_players_matches_are_ignored() -> None:
    other = MatchRecord(
        id="x",
        date=BASE_TIME,
        player1_id="p7",
        player2_id="p8",
        sets=(SetScore(11, 0),),
        winner_id="p7",
    )
    assert compute_stats("p1", [other]).total_matches == 0


def test_sets_and_points_from_second_seat_perspective() -> None:
    match = MatchRecord(
        id="m",
        date=BASE_TIME,
        player1_id="p2",
        player2_id="p1",
        sets=(SetScore(11, 9), SetScore(4, 11), SetScore(8, 11), SetScore(10, 10)),
        winner_id="p1",
    )
    stats = compute_stats("p1", [match])
    assert stats.wins == 1
    assert (stats.sets_won, stats.sets_lost) == (2, 1)
    assert (stats.points_won, stats.points_lost) == (41, 33)


def test_draw_sets_are_still_aggregated() -> None:
    stats = compute_stats("p1", [_singles(0, None, sets=(SetScore(11, 5), SetScore(5, 11)))])
    assert stats.draws == 1
    assert (stats.sets_won, stats.sets_lost) == (1, 1)
    assert (stats.points_won, stats.points_lost) == (16, 16)


def test_malformed_set_values_are_coerced() -> None:
    sets = (
        SetScore("11", "7"),
        SetScore("abc", None),
        SetScore(float("nan"), 11),
        SetScore(float("inf"), 3),
    )
    stats = compute_stats("p1", [_singles(0, "p1", sets=sets)])
    assert (stats.sets_won, stats.sets_lost) == (1, 2)
    assert (stats.points_won, stats.points_lost) == (11, 21)


def test_empty_sets_do_not_raise() -> None:
    stats = compute_stats("p1", [_singles(0, "p1", sets=())])
    assert stats.wins == 1
    assert stats.sets_won == 0


def test_doubles_partner_seat_is_credited_with_team_result() -> None:
    match = MatchRecord(
        id="d",
        date=BASE_TIME,
        player1_id="lead",
        player2_id="p2",
        player3_id="p1",
        player4_id="p4",
        is_doubles=True,
        sets=(SetScore(11, 3), SetScore(11, 4)),
        winner_id="lead",
    )
    stats = compute_stats("p1", [match])
    assert stats.wins == 1
    assert (stats.sets_won, stats.points_won, stats.points_lost) == (2, 22, 7)
    assert compute_stats("p4", [match]).losses == 1
