"""Tests for JSON configuration parsing."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from pychip8.system import ConfigError, load_config, parse_config


def write_config(tmp_path: Path, payload) -> Path:
    path = tmp_path / "config.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_upper_case_keys_are_understood(tmp_path: Path) -> None:
    path = write_config(tmp_path, {"SHOW_KEYMAPPING": True, "FILE_PATH": "roms/PONG2.ch8"})
    config = load_config(path)
    assert config.show_keymapping is True
    assert config.file_path == tmp_path / "roms" / "PONG2.ch8"


def test_keys_are_case_insensitive() -> None:
    config = parse_config({"Scale": 4, "instructions_per_second": 500, "PALETTE": "amber"})
    assert config.scale == 4
    assert config.instructions_per_second == 500
    assert config.palette == "amber"
    assert config.fullscreen is None


def test_absolute_file_path_is_kept(tmp_path: Path) -> None:
    target = tmp_path / "game.ch8"
    config = parse_config({"FILE_PATH": str(target)}, base_dir=Path("/elsewhere"))
    assert config.file_path == target


def test_unknown_key() -> None:
    with pytest.raises(ConfigError):
        parse_config({"SPEED": 3})


@pytest.mark.parametrize(
    "payload",
    [
        {"SCALE": "4"},
        {"SCALE": True},
        {"FULLSCREEN": 1},
        {"TIMER_HZ": 0},
        {"INSTRUCTIONS_PER_SECOND": -5},
    ],
)
def test_invalid_values(payload) -> None:
    with pytest.raises(ConfigError):
        parse_config(payload)


def test_numeric_timer_rate_accepts_int_or_float() -> None:
    assert parse_config({"TIMER_HZ": 50}).timer_hz == 50
    assert parse_config({"TIMER_HZ": 59.94}).timer_hz == 59.94


def test_invalid_json(tmp_path: Path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(path)


def test_non_object_json(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        load_config(write_config(tmp_path, [1, 2, 3]))


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        load_config(tmp_path / "missing.json")


def test_palette_names_are_checked(tmp_path: Path) -> None:
    assert parse_config({"PALETTE": "Green"}).palette == "green"
    with pytest.raises(ConfigError, match="unknown palette 'purple'"):
        load_config(write_config(tmp_path, {"PALETTE": "purple"}))
