"""CHIP-8 machine assembly."""

from __future__ import annotations

import random
import time
from dataclasses import dataclass, field
from typing import Callable, Optional

from pychip8.bus import DEFAULT_MEMORY_SIZE, DEFAULT_PROGRAM_START, Memory
from pychip8.cpu import Chip8CPU, DEFAULT_TIMER_HZ, Instruction, TimerUnit
from pychip8.cpu.core import DEFAULT_STACK_DEPTH
from pychip8.io import Keypad
from pychip8.utils import TraceRecorder
from pychip8.video import DISPLAY_HEIGHT, DISPLAY_WIDTH, Framebuffer


@dataclass
class MachineConfig:
    """Runtime configuration for a CHIP-8 machine."""

    memory_size: int = DEFAULT_MEMORY_SIZE
    program_start: int = DEFAULT_PROGRAM_START
    stack_depth: int = DEFAULT_STACK_DEPTH
    timer_hz: float = DEFAULT_TIMER_HZ
    display_width: int = DISPLAY_WIDTH
    display_height: int = DISPLAY_HEIGHT
    wrap_sprites: bool = False
    seed: Optional[int] = None
    rom_image: Optional[bytes] = None
    trace_capacity: int = 0
    clock: Callable[[], float] = field(default=time.monotonic)


@dataclass
class Machine:
    """Aggregates the components of a running CHIP-8 program."""

    memory: Memory
    cpu: Chip8CPU
    framebuffer: Framebuffer
    keypad: Keypad
    timers: TimerUnit

    def load_program(self, program: bytes) -> None:
        self.cpu.load_program(program)

    def step(self) -> Instruction | None:
        return self.cpu.step()

    def run(self, steps: int) -> int:
        """Execute up to ``steps`` steps and return how many instructions ran."""

        executed = 0
        for _ in range(steps):
            if self.cpu.halted:
                break
            if self.cpu.step() is not None:
                executed += 1
        return executed


def create_machine(config: MachineConfig | None = None) -> Machine:
    """Instantiate a machine, loading ``config.rom_image`` when present."""

    config = config or MachineConfig()

    memory = Memory(config.memory_size, config.program_start)
    framebuffer = Framebuffer(
        config.display_width,
        config.display_height,
        wrap=config.wrap_sprites,
    )
    keypad = Keypad()
    timers = TimerUnit(frequency=config.timer_hz, clock=config.clock)
    trace = TraceRecorder(config.trace_capacity) if config.trace_capacity > 0 else None

    cpu = Chip8CPU(
        memory,
        framebuffer,
        keypad=keypad,
        timers=timers,
        rng=random.Random(config.seed),
        stack_depth=config.stack_depth,
        trace=trace,
    )
    if config.rom_image is not None:
        cpu.load_program(config.rom_image)

    return Machine(
        memory=memory,
        cpu=cpu,
        framebuffer=framebuffer,
        keypad=keypad,
        timers=timers,
    )
