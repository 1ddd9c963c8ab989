"""Tests for framebuffer rendering."""

from __future__ import annotations

import pytest

from pychip8.video import PALETTES, Renderer, render_text, resolve_palette, validate_palette
from pychip8.video.font import get_glyph, glyph_rows


def make_cells(*lit: tuple[int, int], width: int = 64, height: int = 32) -> bytes:
    cells = bytearray(width * height)
    for x, y in lit:
        cells[y * width + x] = 1
    return bytes(cells)


def test_render_single_pixel() -> None:
    result = Renderer().render(make_cells((1, 0)))
    assert (result.width, result.height) == (64, 32)
    assert result.get_pixel(1, 0) == (255, 255, 255)
    assert result.get_pixel(0, 0) == (0, 0, 0)


def test_render_scale_factor() -> None:
    result = Renderer().render(make_cells((0, 0)), scale=4)
    assert (result.width, result.height) == (256, 128)
    assert result.get_pixel(3, 3) == (255, 255, 255)
    assert result.get_pixel(4, 0) == (0, 0, 0)
    assert result.get_pixel(0, 4) == (0, 0, 0)


def test_render_with_palette() -> None:
    background, foreground = resolve_palette("green")
    result = Renderer(palette=PALETTES["green"]).render(make_cells((5, 5)))
    assert result.get_pixel(5, 5) == foreground
    assert result.get_pixel(6, 5) == background


def test_render_rejects_bad_input() -> None:
    with pytest.raises(ValueError):
        Renderer().render(bytes(10))
    with pytest.raises(ValueError):
        Renderer().render(make_cells(), scale=0)


def test_palette_validation() -> None:
    with pytest.raises(ValueError):
        validate_palette([(0, 0, 0)])
    with pytest.raises(ValueError):
        resolve_palette("plasma")
    assert validate_palette([(0, 0, 256), (1, 2, 3)]) == ((0, 0, 0), (1, 2, 3))


def test_render_text() -> None:
    text = render_text(make_cells((0, 0), (2, 1), width=4, height=2), 4)
    assert text == "*   \n  * "


def test_glyph_helpers() -> None:
    assert get_glyph(1) == bytes([0x20, 0x60, 0x20, 0x20, 0x70])
    assert list(glyph_rows(0)) == ["####", "#..#", "#..#", "#..#", "####"]
    with pytest.raises(ValueError):
        get_glyph(16)
