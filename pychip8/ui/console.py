"""Text frontend that prints the framebuffer to a terminal.

There is no keyboard input or sound in this mode.
"""

from __future__ import annotations

import sys
import time
from typing import Callable, TextIO

from pychip8.io import format_keymap
from pychip8.system import Machine
from pychip8.video import render_text

from .app import FRAME_RATE, AppConfig, build_machine, run_steps

CLEAR_SCREEN = "\x1b[H\x1b[2J"


class ConsoleApp:
    """Run a machine headless, redrawing the text frame after each change."""

    def __init__(
        self,
        config: AppConfig,
        *,
        output: TextIO | None = None,
        sleep: Callable[[float], None] = time.sleep,
        clear_screen: bool = True,
    ) -> None:
        self._config = config
        self._output = output or sys.stdout
        self._sleep = sleep
        self._clear_screen = clear_screen
        self._machine: Machine | None = None
        self.frames_drawn = 0

    @property
    def machine(self) -> Machine | None:
        return self._machine

    def run(self) -> int:
        """Run until the step budget is spent; return the instructions executed."""

        machine = build_machine(self._config)
        self._machine = machine
        if self._config.show_keymap:
            self._output.write(format_keymap() + "\n")

        framebuffer = machine.framebuffer
        budget = self._config.max_steps
        per_frame = self._config.steps_per_frame
        last_revision = framebuffer.revision
        executed = 0
        steps = 0

        while budget is None or steps < budget:
            count = per_frame if budget is None else min(per_frame, budget - steps)
            executed += run_steps(machine, count)
            steps += count
            if framebuffer.revision != last_revision:
                last_revision = framebuffer.revision
                self._draw(framebuffer.snapshot(), framebuffer.width)
            self._sleep(1.0 / FRAME_RATE)

        return executed

    def _draw(self, cells: bytes, width: int) -> None:
        if self._clear_screen:
            self._output.write(CLEAR_SCREEN)
        self._output.write(render_text(cells, width) + "\n")
        self._output.flush()
        self.frames_drawn += 1
