"""CHIP-8 interpreter.

The virtual CPU lives in :mod:`pychip8.cpu`; the remaining packages provide
the memory bus, framebuffer, keypad, audio, loaders and frontends around it.
"""

from __future__ import annotations

from . import audio, bus, cpu, io, loader, system, ui, utils, video

__version__ = "0.1.0"

__all__: list[str] = [
    "cpu",
    "bus",
    "video",
    "audio",
    "io",
    "loader",
    "system",
    "ui",
    "utils",
]
