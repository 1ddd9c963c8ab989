"""Convert framebuffer snapshots into RGB images or text frames."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .framebuffer import DISPLAY_HEIGHT, DISPLAY_WIDTH
from .palette import MONOCHROME, RGBColor, validate_palette


@dataclass
class RenderResult:
    """Packed RGB image produced by :class:`Renderer`."""

    width: int
    height: int
    pixels: bytearray

    def get_pixel(self, x: int, y: int) -> RGBColor:
        offset = (y * self.width + x) * 3
        return (self.pixels[offset], self.pixels[offset + 1], self.pixels[offset + 2])

    def to_surface(self):
        try:
            import pygame  # type: ignore
        except Exception as exc:  # pragma: no cover - optional dependency
            raise RuntimeError("pygame is required to build surfaces") from exc
        return pygame.image.frombuffer(bytes(self.pixels), (self.width, self.height), "RGB")


class Renderer:
    """Scale a row-major on/off snapshot into an RGB buffer."""

    def __init__(
        self,
        width: int = DISPLAY_WIDTH,
        height: int = DISPLAY_HEIGHT,
        palette: Sequence[RGBColor] = MONOCHROME,
    ) -> None:
        self._width = width
        self._height = height
        self._background, self._foreground = validate_palette(palette)

    def render(self, cells: bytes, *, scale: int = 1) -> RenderResult:
        if scale <= 0:
            raise ValueError("scale must be positive")
        if len(cells) != self._width * self._height:
            raise ValueError(
                f"snapshot has {len(cells)} cells, expected {self._width * self._height}"
            )

        out_width = self._width * scale
        out_height = self._height * scale
        pixels = bytearray(out_width * out_height * 3)
        on = bytes(self._foreground) * scale
        off = bytes(self._background) * scale
        stride = out_width * 3

        for y in range(self._height):
            row = cells[y * self._width : (y + 1) * self._width]
            line = b"".join(on if cell else off for cell in row)
            for repeat in range(scale):
                start = (y * scale + repeat) * stride
                pixels[start : start + stride] = line

        return RenderResult(out_width, out_height, pixels)


def render_text(
    cells: bytes,
    width: int = DISPLAY_WIDTH,
    *,
    on: str = "*",
    off: str = " ",
) -> str:
    """Render a snapshot as one text line per framebuffer row."""

    if width <= 0 or len(cells) % width:
        raise ValueError("snapshot length must be a multiple of the row width")
    lines = []
    for start in range(0, len(cells), width):
        lines.append("".join(on if cell else off for cell in cells[start : start + width]))
    return "\n".join(lines)
