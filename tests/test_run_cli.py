"""Tests for the command-line entry point."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

import run
from pychip8.system import FileConfig


def test_console_run(tmp_path: Path, capsys) -> None:
    rom = tmp_path / "loop.ch8"
    rom.write_bytes(b"\x12\x00")

    assert run.main(["--rom", str(rom), "--console", "--max-steps", "5"]) == 0


def test_rom_path_from_config_file(tmp_path: Path) -> None:
    rom = tmp_path / "loop.ch8"
    rom.write_bytes(b"\x12\x00")
    config_path = tmp_path / "config.json"
    config_path.write_text(json.dumps({"FILE_PATH": "loop.ch8", "SCALE": 3}), encoding="utf-8")

    args = run.build_arg_parser().parse_args(["--config", str(config_path), "--scale", "6"])
    config = run.merge_config(args, run.load_config(config_path))

    assert config.rom_path == rom
    assert config.scale == 6
    assert config.instructions_per_second == 700


def test_file_values_used_when_flags_absent() -> None:
    args = run.build_arg_parser().parse_args([])
    config = run.merge_config(args, FileConfig(fullscreen=True, palette="amber", wrap_sprites=True))
    assert config.fullscreen is True
    assert config.palette == "amber"
    assert config.wrap_sprites is True
    assert config.rom_path is None


def test_show_keymap_without_rom(capsys) -> None:
    assert run.main(["--show-keymap"]) == 0
    assert "keypad" in capsys.readouterr().out


def test_missing_rom_is_an_error(capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        run.main([])
    assert excinfo.value.code == 2


def test_cpu_fault_exits_with_status_one(tmp_path: Path, capsys) -> None:
    rom = tmp_path / "bad.ch8"
    rom.write_bytes(b"\x00\xEE")
    with pytest.raises(SystemExit) as excinfo:
        run.main(["--rom", str(rom), "--console", "--max-steps", "5"])
    assert excinfo.value.code == 1
    assert "Program halted" in capsys.readouterr().err
