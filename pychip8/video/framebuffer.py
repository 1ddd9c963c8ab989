"""Monochrome framebuffer mutated by the clear and draw instructions."""

from __future__ import annotations

from typing import Callable, Iterable, List

DISPLAY_WIDTH = 64
DISPLAY_HEIGHT = 32

DrawListener = Callable[[bytes], None]


class Framebuffer:
    """Flat grid of on/off cells, row-major.

    Sprite pixels falling outside the grid are clipped unless ``wrap`` is set,
    in which case coordinates are taken modulo the grid dimensions.
    """

    def __init__(
        self,
        width: int = DISPLAY_WIDTH,
        height: int = DISPLAY_HEIGHT,
        *,
        wrap: bool = False,
    ) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("framebuffer dimensions must be positive")
        self.width = width
        self.height = height
        self.wrap = wrap
        self._cells = bytearray(width * height)
        self._revision = 0
        self._listeners: List[DrawListener] = []

    @property
    def revision(self) -> int:
        """Counter that advances every time the grid contents may have changed."""

        return self._revision

    def clear(self) -> None:
        self._cells[:] = bytes(len(self._cells))
        self._touch()

    def get_pixel(self, x: int, y: int) -> bool:
        return bool(self._cells[self._index(x, y)])

    def set_pixel(self, x: int, y: int, on: bool) -> None:
        self._cells[self._index(x, y)] = 1 if on else 0
        self._revision += 1

    def draw_sprite(self, x: int, y: int, rows: Iterable[int]) -> bool:
        """XOR an 8-pixel-wide sprite at ``(x, y)`` and report a collision."""

        collision = False
        width = self.width
        height = self.height
        cells = self._cells
        for row, bits in enumerate(rows):
            py = y + row
            if self.wrap:
                py %= height
            elif py >= height:
                continue
            for col in range(8):
                if not bits & (0x80 >> col):
                    continue
                px = x + col
                if self.wrap:
                    px %= width
                elif px >= width:
                    continue
                index = py * width + px
                if cells[index]:
                    collision = True
                cells[index] ^= 1
        self._touch()
        return collision

    def snapshot(self) -> bytes:
        return bytes(self._cells)

    def lit_count(self) -> int:
        return sum(self._cells)

    def add_listener(self, listener: DrawListener) -> None:
        self._listeners.append(listener)

    def _index(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} framebuffer")
        return y * self.width + x

    def _touch(self) -> None:
        self._revision += 1
        if not self._listeners:
            return
        snapshot = self.snapshot()
        for listener in tuple(self._listeners):
            listener(snapshot)
