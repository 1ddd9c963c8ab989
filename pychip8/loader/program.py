"""Program image metadata for CHIP-8 loaders."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class RomImage:
    """Raw program bytes together with where they came from."""

    data: bytes
    name: str = ""

    @property
    def size(self) -> int:
        return len(self.data)

    def instruction_count(self) -> int:
        return len(self.data) // 2
