"""16-key hexadecimal keypad latch and host keyboard layout."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Mapping

from pychip8.utils import debug_enabled, debug_log

KEY_COUNT = 16

# Host keys arranged like the 4x4 hex pad:
#   1 2 3 C        1 2 3 4
#   4 5 6 D   <=   q w e r
#   7 8 9 E        a s d f
#   A 0 B F        z x c v
KEY_LAYOUT: Mapping[str, int] = {
    "1": 0x1,
    "2": 0x2,
    "3": 0x3,
    "4": 0xC,
    "q": 0x4,
    "w": 0x5,
    "e": 0x6,
    "r": 0xD,
    "a": 0x7,
    "s": 0x8,
    "d": 0x9,
    "f": 0xE,
    "z": 0xA,
    "x": 0x0,
    "c": 0xB,
    "v": 0xF,
}

_PAD_ROWS = (
    (0x1, 0x2, 0x3, 0xC),
    (0x4, 0x5, 0x6, 0xD),
    (0x7, 0x8, 0x9, 0xE),
    (0xA, 0x0, 0xB, 0xF),
)


def key_index(key_name: str, layout: Mapping[str, int] = KEY_LAYOUT) -> int | None:
    """Translate a host key name into a keypad index, or ``None`` if unmapped."""

    return layout.get(key_name.lower())


def format_keymap(layout: Mapping[str, int] = KEY_LAYOUT) -> str:
    """Render the keypad next to the host keys that drive it."""

    reverse: Dict[int, str] = {index: name for name, index in layout.items()}
    lines = ["keypad      host"]
    for row in _PAD_ROWS:
        pad = " ".join(f"{index:X}" for index in row)
        host = " ".join(reverse.get(index, "?").upper() for index in row)
        lines.append(f"{pad}     {host}")
    return "\n".join(lines)


def _check_key(key: int) -> int:
    if not 0 <= key < KEY_COUNT:
        raise ValueError(f"key index out of range: {key}")
    return key


@dataclass
class Keypad:
    """Bitmask of the keys currently held, one bit per key."""

    _mask: int = 0
    _listeners: list[Callable[[int, bool], None]] = field(default_factory=list)

    def press(self, key: int) -> None:
        bit = 1 << _check_key(key)
        before = self._mask
        self._mask |= bit
        if debug_enabled("input"):
            debug_log("input", "key_down=%X mask=%04x", key, self._mask)
        if self._mask != before:
            self._notify_listeners(key, True)

    def release(self, key: int) -> None:
        bit = 1 << _check_key(key)
        before = self._mask
        self._mask &= ~bit & 0xFFFF
        if debug_enabled("input"):
            debug_log("input", "key_up=%X mask=%04x", key, self._mask)
        if self._mask != before:
            self._notify_listeners(key, False)

    def is_pressed(self, key: int) -> bool:
        return bool((self._mask >> key) & 0x01)

    def reset(self) -> None:
        self._mask = 0

    def snapshot(self) -> int:
        return self._mask

    def add_listener(self, listener: Callable[[int, bool], None]) -> None:
        self._listeners.append(listener)

    def _notify_listeners(self, key: int, pressed: bool) -> None:
        for listener in tuple(self._listeners):
            listener(key, pressed)
