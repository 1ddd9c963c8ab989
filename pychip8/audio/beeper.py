"""Square-wave tone that follows the sound timer."""

from __future__ import annotations

from array import array
import math
from typing import Optional

from pychip8.utils import debug_enabled, debug_log

DEFAULT_FREQUENCY = 440.0


def build_square_wave(sample_rate: int, frequency: float, *, amplitude: int = 12_000) -> array:
    """Return one band-limited period of a square wave as signed 16-bit samples."""

    if frequency <= 0.0:
        raise ValueError("frequency must be positive")
    period_samples = max(32, int(round(sample_rate / frequency)))
    rank = int(((sample_rate / (2.0 * frequency)) + 1.0) / 2.0)
    rank = max(1, min(30, rank))

    buffer = array("h")
    scale = (4.0 / math.pi) * amplitude
    for index in range(period_samples):
        phase = (2.0 * math.pi * index) / period_samples
        total = 0.0
        for harmonic in range(rank):
            k = 2 * harmonic + 1
            total += math.sin(k * phase) / k
        value = max(-amplitude, min(amplitude, total * scale))
        buffer.append(int(value))
    return buffer


class SquareWaveBeeper:
    """Loop a single square-wave tone on a pygame mixer channel."""

    def __init__(
        self,
        *,
        sample_rate: int = 44_100,
        frequency: float = DEFAULT_FREQUENCY,
        volume: float = 0.35,
    ) -> None:
        try:
            import pygame  # type: ignore
        except Exception as exc:  # pragma: no cover - optional dependency
            raise RuntimeError("pygame is required for audio output") from exc

        if pygame.mixer.get_init() is None:
            raise RuntimeError("pygame mixer must be initialised before creating SquareWaveBeeper")

        self._pygame = pygame
        self._volume = max(0.0, min(1.0, volume))
        samples = build_square_wave(max(1, sample_rate), frequency)
        self._sound = pygame.mixer.Sound(buffer=samples.tobytes())
        self._channel: Optional["pygame.mixer.Channel"] = None
        self._active = False

    @property
    def active(self) -> bool:
        return self._active

    def set_active(self, active: bool) -> None:
        """Start or stop the tone; repeated calls with the same value are cheap."""

        if active == self._active:
            return
        self._active = active
        if debug_enabled("audio"):
            debug_log("audio", "tone active=%s", active)
        if not active:
            if self._channel is not None:
                self._channel.stop()
            return
        channel = self._channel
        if channel is None:
            channel = self._pygame.mixer.find_channel(True)
            if channel is None:
                return
            self._channel = channel
        channel.play(self._sound, loops=-1)
        channel.set_volume(self._volume)

    def shutdown(self) -> None:
        self.set_active(False)
        self._channel = None


__all__ = ["SquareWaveBeeper", "build_square_wave", "DEFAULT_FREQUENCY"]
