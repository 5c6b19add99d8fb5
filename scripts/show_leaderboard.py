#!/usr/bin/env python3
"""Show the leaderboard and per-player analytics computed from stored matches."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Annotated

import typer

ROOT_DIR = Path(__file__).resolve().parents[1]
SRC_DIR = ROOT_DIR / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from db import create_db_engine, create_session_factory
from domain.engine import compute_achievements, compute_h2h, compute_stats, get_leaderboard
from domain.stats.trends import DATE_RANGE_PRESETS, filter_matches_by_date_range
from repositories.rating_repository import fetch_matches, fetch_players

DEFAULT_DB_URL = "sqlite:///pingpong.db"

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="Query leaderboard and player analytics.",
)

DbUrlOption = Annotated[
    str,
    typer.Option(
        "--db-url",
        envvar="PINGPONG_DB_URL",
        help="Database URL. Defaults to a local SQLite file.",
    ),
]


def _validate_range(date_range: str) -> None:
    if date_range != "all" and date_range not in DATE_RANGE_PRESETS:
        choices = ", ".join(["all", *DATE_RANGE_PRESETS])
        raise typer.BadParameter(f"--range must be one of: {choices}")


@app.command()
def top(
    top_n: Annotated[int, typer.Option("--top-n", help="Number of players to return.")] = 20,
    date_range: Annotated[
        str,
        typer.Option("--range", help="Only count matches in this window (all, 30d, 3m, year)."),
    ] = "all",
    db_url: DbUrlOption = DEFAULT_DB_URL,
) -> None:
    """Print players ranked by rating, win rate and wins."""
    if top_n <= 0:
        raise typer.BadParameter("--top-n must be greater than 0")
    _validate_range(date_range)

    session_factory = create_session_factory(create_db_engine(db_url))
    with session_factory() as session:
        players = fetch_players(session)
        matches = filter_matches_by_date_range(fetch_matches(session), date_range)

    leaderboard = get_leaderboard(players, matches)
    if not leaderboard:
        typer.echo("No players found.")
        return

    typer.echo(f"top_n={top_n} range={date_range} players={len(leaderboard)}")
    for index, entry in enumerate(leaderboard[:top_n], start=1):
        stats = entry.stats
        typer.echo(
            f"{index:2d}. {entry.player.name:<20} "
            f"elo={entry.player.elo_rating:5d} "
            f"w/l/d={stats.wins}/{stats.losses}/{stats.draws} "
            f"win_rate={stats.win_rate:3d}% "
            f"streak={stats.streak:+d} "
            f"form={''.join(stats.recent_form) or '-'}"
        )


@app.command()
def player(
    name: Annotated[str, typer.Argument(help="Player name (case-insensitive).")],
    versus: Annotated[
        str | None,
        typer.Option("--versus", help="Optional opponent name for a head-to-head record."),
    ] = None,
    db_url: DbUrlOption = DEFAULT_DB_URL,
) -> None:
    """Print stats, achievements and an optional head-to-head for one player."""
    session_factory = create_session_factory(create_db_engine(db_url))
    with session_factory() as session:
        players = fetch_players(session)
        matches = fetch_matches(session)

    by_name = {candidate.name.casefold(): candidate for candidate in players}
    target = by_name.get(name.casefold())
    if target is None:
        raise typer.BadParameter(f"Unknown player '{name}'", param_hint="NAME")

    stats = compute_stats(target.id, matches)
    typer.echo(
        f"player={target.name} elo={target.elo_rating} "
        f"matches={stats.total_matches} w/l/d={stats.wins}/{stats.losses}/{stats.draws} "
        f"win_rate={stats.win_rate}% sets={stats.sets_won}-{stats.sets_lost} "
        f"points={stats.points_won}-{stats.points_lost} streak={stats.streak:+d}"
    )

    achievements = compute_achievements(target.id, stats, target.elo_rating, matches, players)
    unlocked = [achievement.id for achievement in achievements if achievement.unlocked]
    typer.echo(f"achievements={len(unlocked)}/{len(achievements)} {' '.join(unlocked)}")

    if versus is not None:
        opponent = by_name.get(versus.casefold())
        if opponent is None:
            raise typer.BadParameter(f"Unknown player '{versus}'", param_hint="--versus")
        record = compute_h2h(target.id, opponent.id, matches)
        typer.echo(
            f"h2h {target.name} vs {opponent.name}: "
            f"{record.wins}-{record.other_wins} total={record.total}"
        )


if __name__ == "__main__":
    app()
