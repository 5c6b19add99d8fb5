"""Load Elo system definitions from TOML files."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any
import tomllib

from domain.ratings.elo.calculator import EloParameters

ROOT_DIR = Path(__file__).resolve().parents[4]
DEFAULT_CONFIG_DIR = ROOT_DIR / "configs" / "ratings"


@dataclass(frozen=True)
class EloSystemConfig:
    """One named Elo replay setup read from ``configs/ratings``."""

    name: str
    description: str | None
    file_path: Path
    parameters: EloParameters

    def as_config_json(self) -> dict[str, Any]:
        return {
            "initial_elo": self.parameters.initial_elo,
            "k_factor": self.parameters.k_factor,
            "scale_factor": self.parameters.scale_factor,
            "shared_doubles_delta": self.parameters.shared_doubles_delta,
        }


def load_elo_system_configs(config_dir: Path = DEFAULT_CONFIG_DIR) -> list[EloSystemConfig]:
    """Parse every ``*.toml`` in ``config_dir``; system names must be unique."""
    if not config_dir.is_dir():
        if config_dir.exists():
            raise NotADirectoryError(f"Config path is not a directory: {config_dir}")
        raise FileNotFoundError(f"Config directory not found: {config_dir}")

    config_files = sorted(config_dir.glob("*.toml"))
    if not config_files:
        raise ValueError(f"No .toml config files found in: {config_dir}")

    systems: list[EloSystemConfig] = []
    seen: set[str] = set()
    for file_path in config_files:
        with file_path.open("rb") as file:
            system = _parse_elo_system_config(tomllib.load(file), file_path)
        if system.name in seen:
            raise ValueError(
                f"Duplicate elo system names found in {config_dir}: {system.name!r} "
                f"repeated in {file_path.name}"
            )
        seen.add(system.name)
        systems.append(system)
    return systems


def _parse_elo_system_config(raw: dict[str, Any], file_path: Path) -> EloSystemConfig:
    system_raw = raw.get("system", {})
    elo_raw = raw.get("elo", {})

    name = str(system_raw.get("name", "")).strip()
    if not name:
        raise ValueError(f"{file_path}: [system].name is required")

    description_value = system_raw.get("description")
    description = None if description_value is None else str(description_value)

    shared_doubles_delta = elo_raw.get("shared_doubles_delta", True)
    if not isinstance(shared_doubles_delta, bool):
        raise ValueError(f"{file_path}: [elo].shared_doubles_delta must be a boolean")

    initial_elo = elo_raw.get("initial_elo", 1200)
    if isinstance(initial_elo, bool) or not isinstance(initial_elo, int):
        raise ValueError(f"{file_path}: [elo].initial_elo must be an integer")

    parameters = EloParameters(
        initial_elo=initial_elo,
        k_factor=float(elo_raw.get("k_factor", 32.0)),
        scale_factor=float(elo_raw.get("scale_factor", 400.0)),
        shared_doubles_delta=shared_doubles_delta,
    )
    _validate_parameters(file_path=file_path, parameters=parameters)

    return EloSystemConfig(
        name=name,
        description=description,
        file_path=file_path,
        parameters=parameters,
    )


def _validate_parameters(*, file_path: Path, parameters: EloParameters) -> None:
    if parameters.initial_elo <= 0:
        raise ValueError(f"{file_path}: [elo].initial_elo must be > 0")
    if parameters.k_factor <= 0.0:
        raise ValueError(f"{file_path}: [elo].k_factor must be > 0")
    if parameters.scale_factor <= 0.0:
        raise ValueError(f"{file_path}: [elo].scale_factor must be > 0")
