"""Memory bus for the CHIP-8 interpreter."""

from .memory import (
    DEFAULT_MEMORY_SIZE,
    DEFAULT_PROGRAM_START,
    Memory,
    MemoryAccessError,
    ProgramTooLargeError,
)

__all__ = [
    "DEFAULT_MEMORY_SIZE",
    "DEFAULT_PROGRAM_START",
    "Memory",
    "MemoryAccessError",
    "ProgramTooLargeError",
]
