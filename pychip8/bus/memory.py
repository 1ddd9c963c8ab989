"""Flat RAM for the CHIP-8 interpreter.

The low region holds the built-in hexadecimal glyphs and programs are copied
to a fixed offset (0x200 on the reference machine). Every access is bounds
checked; addresses are never wrapped or clamped.
"""

from __future__ import annotations

from typing import Iterable

from pychip8.video.font import FONT_START, FONT_TABLE

DEFAULT_MEMORY_SIZE = 0x1000
DEFAULT_PROGRAM_START = 0x200


class MemoryAccessError(Exception):
    """Raised when an address falls outside the addressable range."""

    def __init__(self, address: int, size: int) -> None:
        super().__init__(f"address {address:#06x} outside memory 0x0000-{size - 1:#06x}")
        self.address = address


class ProgramTooLargeError(Exception):
    """Raised when a program does not fit between the load offset and the end of RAM."""


class Memory:
    """Byte-addressable RAM pre-seeded with the glyph table."""

    def __init__(
        self,
        size: int = DEFAULT_MEMORY_SIZE,
        program_start: int = DEFAULT_PROGRAM_START,
    ) -> None:
        if size <= 0 or size > 0x10000:
            raise ValueError(f"memory size {size} out of range (1-65536)")
        if not FONT_START + len(FONT_TABLE) <= program_start < size:
            raise ValueError(f"program start {program_start:#06x} overlaps the font or exceeds memory")
        self.size = size
        self.program_start = program_start
        self._data = bytearray(size)
        self.initialize()

    @property
    def program_capacity(self) -> int:
        return self.size - self.program_start

    def initialize(self) -> None:
        """Zero RAM and install the glyph table."""

        self._data[:] = bytes(self.size)
        self._data[FONT_START : FONT_START + len(FONT_TABLE)] = FONT_TABLE

    def load_program(self, program: bytes) -> int:
        """Copy ``program`` to the program region and return its entry point."""

        if len(program) > self.program_capacity:
            raise ProgramTooLargeError(
                f"program is {len(program)} bytes but only {self.program_capacity} fit "
                f"at {self.program_start:#06x}"
            )
        start = self.program_start
        self._data[start : start + len(program)] = program
        return start

    def load8(self, address: int) -> int:
        return self._data[self._check(address)]

    def store8(self, address: int, value: int) -> None:
        self._data[self._check(address)] = value & 0xFF

    def load16(self, address: int) -> int:
        high = self.load8(address)
        low = self.load8(address + 1)
        return (high << 8) | low

    def read_block(self, address: int, length: int) -> bytes:
        if length <= 0:
            return b""
        self._check(address)
        self._check(address + length - 1)
        return bytes(self._data[address : address + length])

    def write_block(self, address: int, values: Iterable[int]) -> None:
        payload = bytes(value & 0xFF for value in values)
        if not payload:
            return
        self._check(address)
        self._check(address + len(payload) - 1)
        self._data[address : address + len(payload)] = payload

    def snapshot(self) -> bytes:
        return bytes(self._data)

    def _check(self, address: int) -> int:
        if not 0 <= address < self.size:
            raise MemoryAccessError(address, self.size)
        return address
