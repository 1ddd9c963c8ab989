"""Framebuffer and rendering helpers for the CHIP-8 interpreter."""

from __future__ import annotations

from .font import FONT_START, FONT_TABLE, GLYPH_BYTES, GLYPH_COUNT, glyph_address
from .framebuffer import DISPLAY_HEIGHT, DISPLAY_WIDTH, Framebuffer
from .palette import MONOCHROME, PALETTES, resolve_palette, validate_palette
from .renderer import RenderResult, Renderer, render_text

__all__ = [
    "Framebuffer",
    "Renderer",
    "RenderResult",
    "render_text",
    "MONOCHROME",
    "PALETTES",
    "resolve_palette",
    "validate_palette",
    "DISPLAY_WIDTH",
    "DISPLAY_HEIGHT",
    "FONT_START",
    "FONT_TABLE",
    "GLYPH_BYTES",
    "GLYPH_COUNT",
    "glyph_address",
]
