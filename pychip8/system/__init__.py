"""CHIP-8 system assembly helpers."""

from __future__ import annotations

from .config import ConfigError, FileConfig, load_config, parse_config
from .machine import Machine, MachineConfig, create_machine

__all__ = [
    "MachineConfig",
    "Machine",
    "create_machine",
    "ConfigError",
    "FileConfig",
    "load_config",
    "parse_config",
]
