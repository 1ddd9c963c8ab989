"""Utility helpers for the CHIP-8 interpreter."""

from .debug import debug_enabled, debug_log, reset_debug_categories
from .trace import TraceRecorder

__all__ = [
    "debug_enabled",
    "debug_log",
    "reset_debug_categories",
    "TraceRecorder",
]
