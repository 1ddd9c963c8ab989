"""Delay and sound countdown timers driven by wall-clock time."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Callable

from pychip8.utils import debug_enabled, debug_log

DEFAULT_TIMER_HZ = 60


@dataclass
class TimerUnit:
    """Two 8-bit counters that decay once per fixed interval.

    :meth:`service` is polled by the CPU on every step. The first poll starts
    the interval; afterwards each poll that finds at least one interval
    elapsed decrements both counters by one and restarts the interval. Long
    pauses never produce more than one decrement.
    """

    frequency: float = DEFAULT_TIMER_HZ
    clock: Callable[[], float] = field(default=time.monotonic)
    delay: int = 0
    sound: int = 0
    _last_tick: float | None = None
    ticks: int = 0

    def __post_init__(self) -> None:
        if self.frequency <= 0:
            raise ValueError("timer frequency must be positive")

    @property
    def interval(self) -> float:
        return 1.0 / self.frequency

    @property
    def sound_active(self) -> bool:
        return self.sound > 0

    def set_delay(self, value: int) -> None:
        self.delay = value & 0xFF

    def set_sound(self, value: int) -> None:
        self.sound = value & 0xFF

    def service(self) -> bool:
        """Decrement the timers if an interval has elapsed; return whether it did."""

        now = self.clock()
        if self._last_tick is None:
            self._last_tick = now
            return False
        if now - self._last_tick < self.interval:
            return False
        self._last_tick = now
        self.tick()
        return True

    def tick(self) -> None:
        if self.delay > 0:
            self.delay -= 1
        if self.sound > 0:
            self.sound -= 1
        self.ticks += 1
        if debug_enabled("timer"):
            debug_log("timer", "tick=%d delay=%02x sound=%02x", self.ticks, self.delay, self.sound)

    def reset(self) -> None:
        self.delay = 0
        self.sound = 0
        self._last_tick = None
        self.ticks = 0
