"""Loader for raw CHIP-8 ROM images (``.ch8``)."""

from __future__ import annotations

from pathlib import Path
from typing import BinaryIO

from pychip8.bus import DEFAULT_MEMORY_SIZE, DEFAULT_PROGRAM_START
from pychip8.utils import debug_enabled, debug_log

from .program import RomImage

MAX_ROM_SIZE = DEFAULT_MEMORY_SIZE - DEFAULT_PROGRAM_START


class RomFormatError(RuntimeError):
    """Raised when a ROM image cannot be used as a program."""


def load_rom(stream: BinaryIO, *, max_size: int = MAX_ROM_SIZE, name: str = "") -> RomImage:
    """Read a ROM image from ``stream`` and validate its size."""

    # One byte past the limit is enough to detect oversize images.
    data = stream.read(max_size + 1)
    if not data:
        raise RomFormatError("ROM image is empty")
    if len(data) > max_size:
        raise RomFormatError(f"ROM image exceeds {max_size} bytes")
    if debug_enabled("loader"):
        debug_log("loader", "rom name=%s bytes=%d", name or "<stream>", len(data))
    return RomImage(bytes(data), name)


def load_rom_from_path(path: Path, *, max_size: int = MAX_ROM_SIZE) -> RomImage:
    """Load a ROM image from the filesystem."""

    with path.open("rb") as handle:
        return load_rom(handle, max_size=max_size, name=path.name)
