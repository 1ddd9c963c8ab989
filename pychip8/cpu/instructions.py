"""Instruction decoding for the CHIP-8 instruction set.

Every 16-bit word decodes into an :class:`Instruction` whose ``kind`` is a
member of the closed :class:`InstructionKind` enumeration, with its operand
fields already extracted. Words that no opcode accepts raise before anything
is executed.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Final, Mapping

from .errors import InvalidVariantError, UnimplementedInstructionError


class InstructionKind(Enum):
    """Every operation understood by the interpreter."""

    CLS = auto()
    RET = auto()
    JP = auto()
    CALL = auto()
    SE_IMM = auto()
    SNE_IMM = auto()
    SE_REG = auto()
    LD_IMM = auto()
    ADD_IMM = auto()
    LD_REG = auto()
    OR = auto()
    AND = auto()
    XOR = auto()
    ADD_REG = auto()
    SUB = auto()
    SHR = auto()
    SUBN = auto()
    SHL = auto()
    SNE_REG = auto()
    LD_I = auto()
    JP_V0 = auto()
    RND = auto()
    DRW = auto()
    SKP = auto()
    SKNP = auto()
    LD_VX_DT = auto()
    LD_VX_K = auto()
    LD_DT_VX = auto()
    LD_ST_VX = auto()
    ADD_I = auto()
    LD_F = auto()
    LD_B = auto()
    LD_MEM_VX = auto()
    LD_VX_MEM = auto()


K = InstructionKind

# Disassembly templates; fields come from :class:`Instruction`.
_FORMATS: Final[Mapping[InstructionKind, str]] = {
    K.CLS: "CLS",
    K.RET: "RET",
    K.JP: "JP {nnn:#05x}",
    K.CALL: "CALL {nnn:#05x}",
    K.SE_IMM: "SE V{x:X}, {kk:#04x}",
    K.SNE_IMM: "SNE V{x:X}, {kk:#04x}",
    K.SE_REG: "SE V{x:X}, V{y:X}",
    K.LD_IMM: "LD V{x:X}, {kk:#04x}",
    K.ADD_IMM: "ADD V{x:X}, {kk:#04x}",
    K.LD_REG: "LD V{x:X}, V{y:X}",
    K.OR: "OR V{x:X}, V{y:X}",
    K.AND: "AND V{x:X}, V{y:X}",
    K.XOR: "XOR V{x:X}, V{y:X}",
    K.ADD_REG: "ADD V{x:X}, V{y:X}",
    K.SUB: "SUB V{x:X}, V{y:X}",
    K.SHR: "SHR V{x:X}",
    K.SUBN: "SUBN V{x:X}, V{y:X}",
    K.SHL: "SHL V{x:X}",
    K.SNE_REG: "SNE V{x:X}, V{y:X}",
    K.LD_I: "LD I, {nnn:#05x}",
    K.JP_V0: "JP V0, {nnn:#05x}",
    K.RND: "RND V{x:X}, {kk:#04x}",
    K.DRW: "DRW V{x:X}, V{y:X}, {n}",
    K.SKP: "SKP V{x:X}",
    K.SKNP: "SKNP V{x:X}",
    K.LD_VX_DT: "LD V{x:X}, DT",
    K.LD_VX_K: "LD V{x:X}, K",
    K.LD_DT_VX: "LD DT, V{x:X}",
    K.LD_ST_VX: "LD ST, V{x:X}",
    K.ADD_I: "ADD I, V{x:X}",
    K.LD_F: "LD F, V{x:X}",
    K.LD_B: "LD B, V{x:X}",
    K.LD_MEM_VX: "LD [I], V{x:X}",
    K.LD_VX_MEM: "LD V{x:X}, [I]",
}

# Classes whose kind depends only on the high nibble.
_FIXED_CLASSES: Final[Mapping[int, InstructionKind]] = {
    0x1: K.JP,
    0x2: K.CALL,
    0x3: K.SE_IMM,
    0x4: K.SNE_IMM,
    0x6: K.LD_IMM,
    0x7: K.ADD_IMM,
    0xA: K.LD_I,
    0xB: K.JP_V0,
    0xC: K.RND,
    0xD: K.DRW,
}

# 8xyN, keyed by the low nibble.
_ALU_VARIANTS: Final[Mapping[int, InstructionKind]] = {
    0x0: K.LD_REG,
    0x1: K.OR,
    0x2: K.AND,
    0x3: K.XOR,
    0x4: K.ADD_REG,
    0x5: K.SUB,
    0x6: K.SHR,
    0x7: K.SUBN,
    0xE: K.SHL,
}

# ExKK, keyed by the low byte.
_KEY_VARIANTS: Final[Mapping[int, InstructionKind]] = {
    0x9E: K.SKP,
    0xA1: K.SKNP,
}

# FxKK, keyed by the low byte.
_MISC_VARIANTS: Final[Mapping[int, InstructionKind]] = {
    0x07: K.LD_VX_DT,
    0x0A: K.LD_VX_K,
    0x15: K.LD_DT_VX,
    0x18: K.LD_ST_VX,
    0x1E: K.ADD_I,
    0x29: K.LD_F,
    0x33: K.LD_B,
    0x55: K.LD_MEM_VX,
    0x65: K.LD_VX_MEM,
}


@dataclass(frozen=True)
class Instruction:
    """A decoded instruction word with its operand fields."""

    word: int
    kind: InstructionKind
    x: int
    y: int
    n: int
    kk: int
    nnn: int

    @property
    def mnemonic(self) -> str:
        return _FORMATS[self.kind].split(" ", 1)[0]

    def format(self) -> str:
        return _FORMATS[self.kind].format(x=self.x, y=self.y, n=self.n, kk=self.kk, nnn=self.nnn)

    def __str__(self) -> str:
        return f"{self.word:04X} {self.format()}"


def decode(word: int) -> Instruction:
    """Decode ``word`` or raise if it names no valid operation."""

    if not 0 <= word <= 0xFFFF:
        raise ValueError(f"instruction word out of range: {word:#x}")
    kind = _classify(word)
    return Instruction(
        word=word,
        kind=kind,
        x=(word >> 8) & 0x0F,
        y=(word >> 4) & 0x0F,
        n=word & 0x000F,
        kk=word & 0x00FF,
        nnn=word & 0x0FFF,
    )


def disassemble(program: bytes, origin: int = 0x200) -> list[str]:
    """Return one listing line per instruction word in ``program``."""

    lines: list[str] = []
    for offset in range(0, len(program) - 1, 2):
        word = (program[offset] << 8) | program[offset + 1]
        try:
            text = decode(word).format()
        except (UnimplementedInstructionError, InvalidVariantError):
            text = f"DW {word:#06x}"
        lines.append(f"{origin + offset:04X}: {word:04X}  {text}")
    return lines


def _classify(word: int) -> InstructionKind:
    group = word >> 12
    kind = _FIXED_CLASSES.get(group)
    if kind is not None:
        return kind

    if group == 0x0:
        if word == 0x00E0:
            return K.CLS
        if word == 0x00EE:
            return K.RET
        raise UnimplementedInstructionError("machine code routine calls are not supported", opcode=word)

    if group in (0x5, 0x9):
        if word & 0x000F:
            raise InvalidVariantError("register comparison requires a zero low nibble", opcode=word)
        return K.SE_REG if group == 0x5 else K.SNE_REG

    if group == 0x8:
        variants: Mapping[int, InstructionKind] = _ALU_VARIANTS
        selector = word & 0x000F
    elif group == 0xE:
        variants = _KEY_VARIANTS
        selector = word & 0x00FF
    else:
        variants = _MISC_VARIANTS
        selector = word & 0x00FF

    kind = variants.get(selector)
    if kind is None:
        raise InvalidVariantError(f"unknown variant {selector:#x} for class {group:X}", opcode=word)
    return kind
