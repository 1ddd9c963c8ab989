"""Input devices for the CHIP-8 interpreter."""

from .keypad import KEY_COUNT, KEY_LAYOUT, Keypad, format_keymap, key_index

__all__ = [
    "KEY_COUNT",
    "KEY_LAYOUT",
    "Keypad",
    "format_keymap",
    "key_index",
]
