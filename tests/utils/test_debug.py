"""Tests for environment driven debug logging."""

from __future__ import annotations

import pytest

from pychip8.utils import debug_enabled, debug_log, reset_debug_categories


@pytest.fixture(autouse=True)
def _fresh_categories():
    reset_debug_categories()
    yield
    reset_debug_categories()


def test_disabled_without_environment(monkeypatch, capsys) -> None:
    monkeypatch.delenv("CHIP8_DEBUG", raising=False)
    assert not debug_enabled("cpu")
    debug_log("cpu", "pc=%04x", 0x200)
    assert capsys.readouterr().out == ""


def test_selected_categories(monkeypatch, capsys) -> None:
    monkeypatch.setenv("CHIP8_DEBUG", "cpu, Timer")
    assert debug_enabled("cpu")
    assert debug_enabled("timer")
    assert not debug_enabled("input")

    debug_log("cpu", "pc=%04x", 0x200)
    assert capsys.readouterr().out == "[CHIP8][cpu] pc=0200\n"


def test_all_enables_everything(monkeypatch) -> None:
    monkeypatch.setenv("CHIP8_DEBUG", "all")
    assert debug_enabled("anything")


def test_bad_format_arguments_are_appended(monkeypatch, capsys) -> None:
    monkeypatch.setenv("CHIP8_DEBUG", "cpu")
    debug_log("cpu", "value=%d", "x")
    assert "value=%d ('x',)" in capsys.readouterr().out
