"""Palette definitions for framebuffer rendering."""

from __future__ import annotations

from typing import Mapping, Sequence, Tuple

RGBColor = Tuple[int, int, int]


MONOCHROME: Tuple[RGBColor, RGBColor] = ((0, 0, 0), (0xFF, 0xFF, 0xFF))
PHOSPHOR: Tuple[RGBColor, RGBColor] = ((0x00, 0x10, 0x00), (0x33, 0xFF, 0x33))
AMBER: Tuple[RGBColor, RGBColor] = ((0x10, 0x08, 0x00), (0xFF, 0xB0, 0x00))

PALETTES: Mapping[str, Tuple[RGBColor, RGBColor]] = {
    "mono": MONOCHROME,
    "green": PHOSPHOR,
    "amber": AMBER,
}


def validate_palette(palette: Sequence[RGBColor]) -> Tuple[RGBColor, RGBColor]:
    if len(palette) != 2:
        raise ValueError("palette must contain exactly two colours (background and foreground)")
    if any(len(color) != 3 for color in palette):
        raise ValueError("palette entries must be RGB tuples")
    return tuple(tuple(int(channel) & 0xFF for channel in color) for color in palette)  # type: ignore[return-value]


def resolve_palette(name: str) -> Tuple[RGBColor, RGBColor]:
    try:
        return PALETTES[name.lower()]
    except KeyError:
        known = ", ".join(sorted(PALETTES))
        raise ValueError(f"unknown palette '{name}' (expected one of: {known})") from None
