"""Built-in 4x5 hexadecimal glyph table."""

from __future__ import annotations

from typing import Iterable

FONT_START = 0x000
GLYPH_BYTES = 5
GLYPH_COUNT = 16
FONT_WIDTH = 4
FONT_HEIGHT = GLYPH_BYTES

# One row per byte, high nibble only.
FONT_TABLE: bytes = bytes(
    [
        0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
        0x20, 0x60, 0x20, 0x20, 0x70,  # 1
        0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
        0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
        0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
        0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
        0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
        0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
        0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
        0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
        0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
        0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
        0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
        0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
        0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
        0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
    ]
)


def glyph_address(digit: int) -> int:
    """Return the memory address of the glyph for ``digit``."""

    return FONT_START + digit * GLYPH_BYTES


def get_glyph(digit: int) -> bytes:
    if not 0 <= digit < GLYPH_COUNT:
        raise ValueError(f"glyph index out of range: {digit}")
    offset = digit * GLYPH_BYTES
    return FONT_TABLE[offset : offset + GLYPH_BYTES]


def glyph_rows(digit: int, on: str = "#", off: str = ".") -> Iterable[str]:
    """Yield a printable row per glyph line, mostly useful for debugging."""

    for line in get_glyph(digit):
        yield "".join(on if line & (0x80 >> bit) else off for bit in range(FONT_WIDTH))
