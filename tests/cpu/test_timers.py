"""Tests for the wall-clock driven delay/sound timers."""

from __future__ import annotations

import pytest

from pychip8.cpu import TimerUnit


class FakeClock:
    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now


def make_timers(delay: int = 0, sound: int = 0) -> tuple[TimerUnit, FakeClock]:
    clock = FakeClock()
    # 64 Hz keeps the interval exact in binary floating point.
    timers = TimerUnit(frequency=64, clock=clock)
    timers.set_delay(delay)
    timers.set_sound(sound)
    timers.service()  # starts the interval
    return timers, clock


def test_first_service_only_starts_the_interval() -> None:
    timers, _ = make_timers(delay=3)
    assert timers.delay == 3
    assert timers.ticks == 0


def test_decrements_once_per_interval_regardless_of_polls() -> None:
    timers, clock = make_timers(delay=10, sound=10)

    for _ in range(50):
        clock.now += timers.interval / 50
        timers.service()
    clock.now += timers.interval / 10
    timers.service()

    assert timers.delay == 9
    assert timers.sound == 9


def test_long_pause_does_not_catch_up() -> None:
    timers, clock = make_timers(delay=10)
    clock.now += 5.0
    assert timers.service() is True
    assert timers.delay == 9
    assert timers.service() is False
    assert timers.delay == 9


def test_never_decrements_below_zero() -> None:
    timers, clock = make_timers(delay=1, sound=0)
    for _ in range(5):
        clock.now += timers.interval
        timers.service()
    assert timers.delay == 0
    assert timers.sound == 0
    assert timers.ticks == 5


def test_sound_active_follows_sound_timer() -> None:
    timers, clock = make_timers(sound=1)
    assert timers.sound_active
    clock.now += timers.interval
    timers.service()
    assert not timers.sound_active


def test_configurable_frequency() -> None:
    clock = FakeClock()
    timers = TimerUnit(frequency=8, clock=clock)
    timers.set_delay(5)
    timers.service()
    clock.now += 0.0625
    timers.service()
    assert timers.delay == 5
    clock.now += 0.0625
    timers.service()
    assert timers.delay == 4


def test_values_are_masked_to_eight_bits() -> None:
    timers = TimerUnit()
    timers.set_delay(0x1FF)
    assert timers.delay == 0xFF


def test_rejects_non_positive_frequency() -> None:
    with pytest.raises(ValueError):
        TimerUnit(frequency=0)


def test_reset_restarts_interval() -> None:
    timers, clock = make_timers(delay=4)
    timers.reset()
    assert timers.delay == 0
    clock.now += 1.0
    assert timers.service() is False
