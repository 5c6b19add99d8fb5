"""Tests for TOML-based Elo system config loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from domain.ratings.elo.config import DEFAULT_CONFIG_DIR, load_elo_system_configs


def test_load_elo_system_configs_from_directory(tmp_path: Path) -> None:
    config_path = tmp_path / "default.toml"
    config_path.write_text(
        """
[system]
name = "system_a"
description = "A test system"

[elo]
initial_elo = 1000
k_factor = 24.0
scale_factor = 420.0
shared_doubles_delta = false
""".strip()
    )

    configs = load_elo_system_configs(tmp_path)
    assert len(configs) == 1

    system = configs[0]
    assert system.name == "system_a"
    assert system.description == "A test system"
    assert system.parameters.initial_elo == 1000
    assert system.parameters.k_factor == pytest.approx(24.0)
    assert system.parameters.scale_factor == pytest.approx(420.0)
    assert system.parameters.shared_doubles_delta is False
    assert system.as_config_json()["k_factor"] == pytest.approx(24.0)


def test_missing_elo_section_uses_defaults(tmp_path: Path) -> None:
    (tmp_path / "minimal.toml").write_text('[system]\nname = "minimal"\n')

    system = load_elo_system_configs(tmp_path)[0]
    assert system.description is None
    assert system.parameters.initial_elo == 1200
    assert system.parameters.k_factor == pytest.approx(32.0)
    assert system.parameters.shared_doubles_delta is True


def test_bundled_default_config_loads() -> None:
    configs = load_elo_system_configs(DEFAULT_CONFIG_DIR)
    assert [config.name for config in configs] == ["default"]
    assert configs[0].parameters.k_factor == pytest.approx(32.0)


def test_duplicate_names_raise_error(tmp_path: Path) -> None:
    template = """
[system]
name = "dup"

[elo]
k_factor = 32.0
""".strip()
    (tmp_path / "a.toml").write_text(template)
    (tmp_path / "b.toml").write_text(template)

    with pytest.raises(ValueError, match="Duplicate elo system names"):
        load_elo_system_configs(tmp_path)


@pytest.mark.parametrize(
    ("elo_section", "message"),
    [
        ("k_factor = 0.0", "k_factor must be > 0"),
        ("scale_factor = -1.0", "scale_factor must be > 0"),
        ("initial_elo = 1200.5", "initial_elo must be an integer"),
        ('shared_doubles_delta = "yes"', "shared_doubles_delta must be a boolean"),
    ],
)
def test_invalid_parameters_raise_error(tmp_path: Path, elo_section: str, message: str) -> None:
    (tmp_path / "bad.toml").write_text(f'[system]\nname = "bad"\n\n[elo]\n{elo_section}\n')

    with pytest.raises(ValueError, match=message):
        load_elo_system_configs(tmp_path)


def test_missing_name_raises_error(tmp_path: Path) -> None:
    (tmp_path / "nameless.toml").write_text("[elo]\nk_factor = 32.0\n")

    with pytest.raises(ValueError, match=r"\[system\].name is required"):
        load_elo_system_configs(tmp_path)


def test_missing_directory_raises_error(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_elo_system_configs(tmp_path / "absent")


def test_file_path_instead_of_directory_raises_error(tmp_path: Path) -> None:
    config_file = tmp_path / "default.toml"
    config_file.write_text('[system]\nname = "default"\n')

    with pytest.raises(NotADirectoryError):
        load_elo_system_configs(config_file)
