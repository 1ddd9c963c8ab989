"""CPU package for the CHIP-8 interpreter."""

from .core import (
    FLAG_REGISTER,
    AwaitingKey,
    Chip8CPU,
    CPUState,
    ExecutionState,
    Running,
    RUNNING,
)
from .errors import (
    CPUError,
    InvalidVariantError,
    MemoryOutOfRangeError,
    StackOverflowError,
    StackUnderflowError,
    UnimplementedInstructionError,
)
from .instructions import Instruction, InstructionKind, decode, disassemble
from .timers import DEFAULT_TIMER_HZ, TimerUnit
from . import instructions

__all__ = [
    "Chip8CPU",
    "CPUState",
    "ExecutionState",
    "Running",
    "AwaitingKey",
    "RUNNING",
    "FLAG_REGISTER",
    "CPUError",
    "UnimplementedInstructionError",
    "InvalidVariantError",
    "StackUnderflowError",
    "StackOverflowError",
    "MemoryOutOfRangeError",
    "Instruction",
    "InstructionKind",
    "decode",
    "disassemble",
    "TimerUnit",
    "DEFAULT_TIMER_HZ",
    "instructions",
]
