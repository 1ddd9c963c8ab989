"""Pygame frontend for the CHIP-8 interpreter."""

from __future__ import annotations

import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from pychip8.audio import DEFAULT_FREQUENCY, SquareWaveBeeper
from pychip8.bus import ProgramTooLargeError
from pychip8.cpu import CPUError, DEFAULT_TIMER_HZ
from pychip8.io import format_keymap, key_index
from pychip8.loader import RomFormatError, load_rom_from_path
from pychip8.system import Machine, MachineConfig, create_machine
from pychip8.utils import debug_enabled, debug_log
from pychip8.video import Renderer, resolve_palette

FRAME_RATE = 60
DEFAULT_INSTRUCTIONS_PER_SECOND = 700
TRACE_CAPACITY = 512


@dataclass
class AppConfig:
    """Frontend configuration shared by the window and console runners."""

    rom_path: Optional[Path] = None
    scale: int = 10
    fullscreen: bool = False
    instructions_per_second: int = DEFAULT_INSTRUCTIONS_PER_SECOND
    palette: str = "mono"
    show_keymap: bool = False
    sound_frequency: float = DEFAULT_FREQUENCY
    timer_hz: float = DEFAULT_TIMER_HZ
    wrap_sprites: bool = False
    max_steps: Optional[int] = None

    @property
    def steps_per_frame(self) -> int:
        return max(1, self.instructions_per_second // FRAME_RATE)


def build_machine(config: AppConfig) -> Machine:
    """Load the configured ROM into a fresh machine."""

    if not config.rom_path:
        raise RuntimeError("ROM image is required; pass --rom <path>")
    rom_path = config.rom_path
    try:
        rom = load_rom_from_path(rom_path)
    except FileNotFoundError as exc:
        raise RuntimeError(f"ROM file not found: {rom_path}") from exc
    except RomFormatError as exc:
        raise RuntimeError(f"Failed to load ROM {rom_path}: {exc}") from exc

    trace_capacity = TRACE_CAPACITY if debug_enabled("trace") else 0
    try:
        return create_machine(
            MachineConfig(
                timer_hz=config.timer_hz,
                wrap_sprites=config.wrap_sprites,
                rom_image=rom.data,
                trace_capacity=trace_capacity,
            )
        )
    except ProgramTooLargeError as exc:
        raise RuntimeError(f"Failed to load ROM {rom_path}: {exc}") from exc


def run_steps(machine: Machine, count: int) -> int:
    """Step the CPU ``count`` times, converting fatal CPU errors for the caller."""

    cpu = machine.cpu
    executed = 0
    try:
        for _ in range(count):
            if cpu.step() is not None:
                executed += 1
    except CPUError as exc:
        if debug_enabled("trace") and cpu.trace is not None:
            cpu.trace.dump("trace", limit=64)
        debug_log("cpu", "halted: %s", exc)
        raise RuntimeError(f"Program halted: {exc}") from exc
    return executed


class Chip8App:
    """Window frontend driving a machine from the pygame event loop."""

    def __init__(self, config: AppConfig) -> None:
        self._config = config
        self._running = False
        self._machine: Machine | None = None
        self._beeper: SquareWaveBeeper | None = None
        self._perf_enabled = debug_enabled("perf")
        self._frame_counter = 0
        self._last_revision = -1

    def run(self) -> None:
        try:
            import pygame  # type: ignore
        except Exception as exc:  # pragma: no cover - optional dependency
            raise RuntimeError("pygame is required to run the UI") from exc

        machine = build_machine(self._config)
        self._machine = machine
        if self._config.show_keymap:
            print(format_keymap())

        pygame.mixer.pre_init(44_100, -16, 1, 512)
        pygame.init()
        pygame.display.set_caption("CHIP-8")
        self._initialise_audio(pygame)

        palette = resolve_palette(self._config.palette)
        framebuffer = machine.framebuffer
        renderer = Renderer(framebuffer.width, framebuffer.height, palette)
        scale = self._config.scale
        flags = pygame.FULLSCREEN if self._config.fullscreen else 0
        screen = pygame.display.set_mode((framebuffer.width * scale, framebuffer.height * scale), flags)

        clock = pygame.time.Clock()
        self._running = True
        try:
            while self._running:
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        self._running = False
                    elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                        self._running = False
                    elif event.type == pygame.KEYDOWN:
                        self._handle_key_event(pygame.key.name(event.key), pressed=True)
                    elif event.type == pygame.KEYUP:
                        self._handle_key_event(pygame.key.name(event.key), pressed=False)

                frame_start = time.perf_counter()
                executed = self._step_cpu(machine)

                if framebuffer.revision != self._last_revision:
                    self._last_revision = framebuffer.revision
                    frame = renderer.render(framebuffer.snapshot(), scale=scale)
                    screen.blit(frame.to_surface(), (0, 0))
                    pygame.display.flip()

                if self._beeper is not None:
                    self._beeper.set_active(machine.cpu.sound_active)

                if self._perf_enabled:
                    duration = time.perf_counter() - frame_start
                    debug_log(
                        "perf",
                        "frame=%d executed=%d frame_ms=%.3f",
                        self._frame_counter,
                        executed,
                        duration * 1000.0,
                    )

                clock.tick(FRAME_RATE)
                self._frame_counter += 1
        finally:
            if self._beeper is not None:
                self._beeper.shutdown()
            pygame.quit()

    def _initialise_audio(self, pygame) -> None:
        if pygame.mixer.get_init() is None:
            try:
                pygame.mixer.init(44_100, -16, 1)
            except pygame.error as exc:  # pragma: no cover - hardware dependent
                if debug_enabled("audio"):
                    debug_log("audio", "mixer_init_failed=%s", exc)
                return
        mixer_state = pygame.mixer.get_init()
        if mixer_state is None:
            if debug_enabled("audio"):
                debug_log("audio", "mixer_unavailable")
            return
        try:
            self._beeper = SquareWaveBeeper(
                sample_rate=mixer_state[0],
                frequency=self._config.sound_frequency,
            )
        except RuntimeError as exc:
            self._beeper = None
            if debug_enabled("audio"):
                debug_log("audio", "beeper_init_failed=%s", exc)

    def _handle_key_event(self, key_name: str, *, pressed: bool) -> None:
        machine = self._machine
        if machine is None:
            return
        index = key_index(key_name)
        if debug_enabled("input"):
            debug_log("input", "event=%s key=%s pressed=%s", key_name, index, pressed)
        if index is None:
            return
        if pressed:
            machine.cpu.key_down(index)
        else:
            machine.cpu.key_up(index)

    def _step_cpu(self, machine: Machine) -> int:
        try:
            return run_steps(machine, self._config.steps_per_frame)
        except RuntimeError:
            self._running = False
            raise
