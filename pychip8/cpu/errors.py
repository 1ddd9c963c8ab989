"""Error hierarchy surfaced by :meth:`Chip8CPU.step`."""

from __future__ import annotations


class CPUError(Exception):
    """Base error for fatal interpreter conditions.

    ``opcode`` is the offending instruction word when one was fetched and
    ``pc`` the address it was fetched from.
    """

    def __init__(self, message: str, *, opcode: int | None = None, pc: int | None = None) -> None:
        super().__init__(message)
        self.opcode = opcode
        self.pc = pc

    def __str__(self) -> str:
        message = super().__str__()
        details = []
        if self.opcode is not None:
            details.append(f"opcode={self.opcode:04X}")
        if self.pc is not None:
            details.append(f"pc={self.pc:04X}")
        if details:
            return f"{message} ({' '.join(details)})"
        return message


class UnimplementedInstructionError(CPUError):
    """The instruction word belongs to no opcode this interpreter defines."""


class InvalidVariantError(CPUError):
    """The instruction class is known but its operand combination is not allowed."""


class StackUnderflowError(CPUError):
    """Return executed with an empty call stack."""


class StackOverflowError(CPUError):
    """Call executed with a full call stack."""


class MemoryOutOfRangeError(CPUError):
    """The program counter or a computed address left the addressable region."""
