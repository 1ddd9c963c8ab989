"""Frontends for the CHIP-8 interpreter."""

from .app import AppConfig, Chip8App, build_machine, run_steps
from .console import ConsoleApp

__all__ = ["AppConfig", "Chip8App", "ConsoleApp", "build_machine", "run_steps"]
