#!/usr/bin/env python3
"""Replay the full match log into player ratings and elo_history."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Annotated

import typer

ROOT_DIR = Path(__file__).resolve().parents[1]
SRC_DIR = ROOT_DIR / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from db import create_db_engine, create_session_factory
from domain.ratings.elo.config import DEFAULT_CONFIG_DIR, EloSystemConfig, load_elo_system_configs
from domain.ratings.replay import RatingReplayCoordinator, ReplayError
from repositories.rating_repository import ensure_schema, sql_store_factory

DEFAULT_DB_URL = "sqlite:///pingpong.db"

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="Rating replay jobs.",
)


def _select_config(config_dir: Path, config_name: str | None) -> EloSystemConfig:
    configs = load_elo_system_configs(config_dir)
    if config_name is None:
        return configs[0]
    for config in configs:
        if config.file_path.name == config_name:
            return config
    raise typer.BadParameter(
        f"No config named '{config_name}' found in {config_dir}",
        param_hint="--config-name",
    )


@app.command()
def rebuild(
    db_url: Annotated[
        str,
        typer.Option(
            "--db-url",
            envvar="PINGPONG_DB_URL",
            help="Database URL. Defaults to a local SQLite file.",
        ),
    ] = DEFAULT_DB_URL,
    config_dir: Annotated[
        Path,
        typer.Option("--config-dir", help="Directory of Elo system TOML files."),
    ] = DEFAULT_CONFIG_DIR,
    config_name: Annotated[
        str | None,
        typer.Option(
            "--config-name",
            help="Config filename to use (for example: default.toml). Defaults to the first file.",
        ),
    ] = None,
    batch_size: Annotated[
        int,
        typer.Option("--batch-size", help="Batch size for inserting history rows."),
    ] = 5000,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Compute ratings without writing them."),
    ] = False,
    log_level: Annotated[str, typer.Option("--log-level")] = "INFO",
) -> None:
    """Recompute every player rating from matches in chronological order."""
    logging.basicConfig(level=log_level.upper(), format="%(asctime)s %(levelname)s %(name)s %(message)s")
    if batch_size <= 0:
        raise typer.BadParameter("--batch-size must be greater than 0")

    config = _select_config(config_dir, config_name)
    engine = create_db_engine(db_url)
    ensure_schema(engine)
    coordinator = RatingReplayCoordinator(
        sql_store_factory(create_session_factory(engine)),
        config.parameters,
        batch_size=batch_size,
    )

    try:
        summary = coordinator.run_replay(dry_run=dry_run)
    except ReplayError as exc:
        typer.echo(f"replay failed: {exc.__cause__!r}", err=True)
        raise typer.Exit(code=1) from exc

    if summary is None:
        typer.echo("replay discarded")
        return
    prefix = "[dry-run] " if summary.dry_run else "completed "
    typer.echo(
        f"{prefix}config={config.file_path.name} "
        f"system={config.name} "
        f"processed_matches={summary.processed_matches} "
        f"skipped_draws={summary.skipped_draws} "
        f"skipped_invalid={summary.skipped_invalid} "
        f"inserted_entries={summary.inserted_entries} "
        f"updated_players={summary.updated_players}"
    )


@app.command()
def list_configs(
    config_dir: Annotated[
        Path,
        typer.Option("--config-dir", help="Directory of Elo system TOML files."),
    ] = DEFAULT_CONFIG_DIR,
) -> None:
    """Print every Elo system config found in the config directory."""
    for config in load_elo_system_configs(config_dir):
        typer.echo(f"{config.file_path.name} system={config.name} {config.as_config_json()}")


if __name__ == "__main__":
    app()
