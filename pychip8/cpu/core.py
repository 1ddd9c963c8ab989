"""CHIP-8 virtual CPU: register file, call stack and the execute loop."""

from __future__ import annotations

import random
import threading
from dataclasses import dataclass, field
from typing import Final, Mapping, Union

from pychip8.bus import Memory, MemoryAccessError
from pychip8.io import Keypad
from pychip8.utils import TraceRecorder, debug_enabled, debug_log
from pychip8.video import Framebuffer, glyph_address

from .errors import CPUError, MemoryOutOfRangeError, StackOverflowError, StackUnderflowError
from .instructions import Instruction, InstructionKind, decode
from .timers import TimerUnit

REGISTER_COUNT = 16
FLAG_REGISTER = 0xF
DEFAULT_STACK_DEPTH = 24
INSTRUCTION_BYTES = 2


@dataclass(frozen=True)
class Running:
    """Instructions are fetched and executed normally."""


@dataclass(frozen=True)
class AwaitingKey:
    """Dispatch is suspended until a key-down writes its index into ``register``."""

    register: int


ExecutionState = Union[Running, AwaitingKey]

RUNNING: Final[Running] = Running()


@dataclass
class CPUState:
    """Snapshot of the register file and call stack."""

    v: bytearray = field(default_factory=lambda: bytearray(REGISTER_COUNT))
    i: int = 0x0000
    pc: int = 0x0000
    stack: list[int] = field(default_factory=list)

    def clone(self) -> "CPUState":
        return CPUState(bytearray(self.v), self.i, self.pc, list(self.stack))


K = InstructionKind

_HANDLERS: Final[Mapping[InstructionKind, str]] = {
    K.CLS: "op_cls",
    K.RET: "op_ret",
    K.JP: "op_jp",
    K.CALL: "op_call",
    K.SE_IMM: "op_se_imm",
    K.SNE_IMM: "op_sne_imm",
    K.SE_REG: "op_se_reg",
    K.LD_IMM: "op_ld_imm",
    K.ADD_IMM: "op_add_imm",
    K.LD_REG: "op_ld_reg",
    K.OR: "op_or",
    K.AND: "op_and",
    K.XOR: "op_xor",
    K.ADD_REG: "op_add_reg",
    K.SUB: "op_sub",
    K.SHR: "op_shr",
    K.SUBN: "op_subn",
    K.SHL: "op_shl",
    K.SNE_REG: "op_sne_reg",
    K.LD_I: "op_ld_i",
    K.JP_V0: "op_jp_v0",
    K.RND: "op_rnd",
    K.DRW: "op_drw",
    K.SKP: "op_skp",
    K.SKNP: "op_sknp",
    K.LD_VX_DT: "op_ld_vx_dt",
    K.LD_VX_K: "op_ld_vx_k",
    K.LD_DT_VX: "op_ld_dt_vx",
    K.LD_ST_VX: "op_ld_st_vx",
    K.ADD_I: "op_add_i",
    K.LD_F: "op_ld_f",
    K.LD_B: "op_ld_b",
    K.LD_MEM_VX: "op_ld_mem_vx",
    K.LD_VX_MEM: "op_ld_vx_mem",
}

_unhandled = set(InstructionKind) - set(_HANDLERS)
if _unhandled:  # pragma: no cover - guards edits to the opcode tables
    raise RuntimeError(f"instruction kinds without handlers: {sorted(k.name for k in _unhandled)}")


@dataclass
class Chip8CPU:
    """Fetch/decode/execute loop over a shared memory, framebuffer and keypad.

    ``step`` and the key event methods serialise on one lock so a frontend may
    deliver input from another thread.
    """

    memory: Memory
    framebuffer: Framebuffer
    keypad: Keypad = field(default_factory=Keypad)
    timers: TimerUnit = field(default_factory=TimerUnit)
    rng: random.Random = field(default_factory=random.Random)
    stack_depth: int = DEFAULT_STACK_DEPTH
    trace: TraceRecorder | None = None

    state: CPUState = field(default_factory=CPUState)
    execution: ExecutionState = RUNNING
    halted: bool = False
    instruction_count: int = 0
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.stack_depth <= 0:
            raise ValueError("stack depth must be positive")
        self.state.pc = self.memory.program_start

    def reset(self) -> None:
        """Clear registers, stack, timers and the wait state; PC returns to the program start."""

        with self._lock:
            self.state = CPUState(pc=self.memory.program_start)
            self.execution = RUNNING
            self.halted = False
            self.instruction_count = 0
            self.timers.reset()

    def load_program(self, program: bytes) -> None:
        """Reinitialise memory, copy ``program`` in and point PC at its entry."""

        with self._lock:
            self.memory.initialize()
            entry = self.memory.load_program(program)
            self.reset()
            self.state.pc = entry
            if debug_enabled("loader"):
                debug_log("loader", "program bytes=%d entry=%04x", len(program), entry)

    # ------------------------------------------------------------------
    # External interface

    @property
    def waiting(self) -> bool:
        return isinstance(self.execution, AwaitingKey)

    @property
    def sound_active(self) -> bool:
        return self.timers.sound_active

    def key_down(self, key: int) -> None:
        """Latch ``key`` and resolve a pending key wait."""

        with self._lock:
            self.keypad.press(key)
            execution = self.execution
            if isinstance(execution, AwaitingKey):
                self.state.v[execution.register] = key
                self.execution = RUNNING
                if debug_enabled("input"):
                    debug_log("input", "key_wait resolved V%X=%X", execution.register, key)

    def key_up(self, key: int) -> None:
        with self._lock:
            self.keypad.release(key)

    def step(self) -> Instruction | None:
        """Execute one instruction; return it, or ``None`` if nothing ran."""

        with self._lock:
            if self.halted:
                return None

            self.timers.service()

            if isinstance(self.execution, AwaitingKey):
                return None

            pc = self.state.pc
            try:
                word = self.memory.load16(pc)
            except MemoryAccessError as exc:
                self.halted = True
                raise MemoryOutOfRangeError("instruction fetch outside memory", pc=pc) from exc

            state_before = self.state.clone() if self.trace is not None else None
            self.state.pc = (pc + INSTRUCTION_BYTES) & 0xFFFF

            try:
                instruction = decode(word)
                handler = getattr(self, _HANDLERS[instruction.kind])
                handler(instruction)
            except CPUError as exc:
                self.halted = True
                if exc.opcode is None:
                    exc.opcode = word
                if exc.pc is None:
                    exc.pc = pc
                self._record(state_before, word, "", note="fault")
                raise
            except MemoryAccessError as exc:
                self.halted = True
                self._record(state_before, word, "", note="fault")
                raise MemoryOutOfRangeError(str(exc), opcode=word, pc=pc) from exc

            self.instruction_count += 1
            self._record(state_before, word, instruction.mnemonic)
            if debug_enabled("cpu"):
                debug_log("cpu", "pc=%04x %s", pc, instruction)
            return instruction

    # ------------------------------------------------------------------
    # Instruction handlers

    def op_cls(self, _: Instruction) -> None:
        self.framebuffer.clear()

    def op_ret(self, _: Instruction) -> None:
        if not self.state.stack:
            raise StackUnderflowError("return with an empty call stack")
        self.state.pc = self.state.stack.pop()

    def op_jp(self, instruction: Instruction) -> None:
        self.state.pc = instruction.nnn

    def op_call(self, instruction: Instruction) -> None:
        if len(self.state.stack) >= self.stack_depth:
            raise StackOverflowError(f"call nesting exceeds {self.stack_depth} levels")
        self.state.stack.append(self.state.pc)
        self.state.pc = instruction.nnn

    def op_se_imm(self, instruction: Instruction) -> None:
        self._skip_if(self.state.v[instruction.x] == instruction.kk)

    def op_sne_imm(self, instruction: Instruction) -> None:
        self._skip_if(self.state.v[instruction.x] != instruction.kk)

    def op_se_reg(self, instruction: Instruction) -> None:
        v = self.state.v
        self._skip_if(v[instruction.x] == v[instruction.y])

    def op_sne_reg(self, instruction: Instruction) -> None:
        v = self.state.v
        self._skip_if(v[instruction.x] != v[instruction.y])

    def op_ld_imm(self, instruction: Instruction) -> None:
        self.state.v[instruction.x] = instruction.kk

    def op_add_imm(self, instruction: Instruction) -> None:
        v = self.state.v
        v[instruction.x] = (v[instruction.x] + instruction.kk) & 0xFF

    def op_ld_reg(self, instruction: Instruction) -> None:
        v = self.state.v
        v[instruction.x] = v[instruction.y]

    def op_or(self, instruction: Instruction) -> None:
        v = self.state.v
        v[instruction.x] = v[instruction.x] | v[instruction.y]

    def op_and(self, instruction: Instruction) -> None:
        v = self.state.v
        v[instruction.x] = v[instruction.x] & v[instruction.y]

    def op_xor(self, instruction: Instruction) -> None:
        v = self.state.v
        v[instruction.x] = v[instruction.x] ^ v[instruction.y]

    def op_add_reg(self, instruction: Instruction) -> None:
        a, b = self._operands(instruction)
        total = a + b
        self._write_with_flag(instruction.x, total, total > 0xFF)

    def op_sub(self, instruction: Instruction) -> None:
        a, b = self._operands(instruction)
        self._write_with_flag(instruction.x, a - b, a >= b)

    def op_shr(self, instruction: Instruction) -> None:
        a, _ = self._operands(instruction)
        self._write_with_flag(instruction.x, a >> 1, a & 0x01)

    def op_subn(self, instruction: Instruction) -> None:
        a, b = self._operands(instruction)
        self._write_with_flag(instruction.x, b - a, b >= a)

    def op_shl(self, instruction: Instruction) -> None:
        a, _ = self._operands(instruction)
        self._write_with_flag(instruction.x, a << 1, a >> 7)

    def op_ld_i(self, instruction: Instruction) -> None:
        self.state.i = instruction.nnn

    def op_jp_v0(self, instruction: Instruction) -> None:
        self.state.pc = instruction.nnn + self.state.v[0]

    def op_rnd(self, instruction: Instruction) -> None:
        self.state.v[instruction.x] = self.rng.randrange(0x100) & instruction.kk

    def op_drw(self, instruction: Instruction) -> None:
        v = self.state.v
        x, y = v[instruction.x], v[instruction.y]
        rows = self.memory.read_block(self.state.i, instruction.n)
        v[FLAG_REGISTER] = 0
        collision = self.framebuffer.draw_sprite(x, y, rows)
        v[FLAG_REGISTER] = 1 if collision else 0
        if debug_enabled("video"):
            debug_log(
                "video",
                "draw x=%d y=%d rows=%d collision=%s",
                x,
                y,
                instruction.n,
                collision,
            )

    def op_skp(self, instruction: Instruction) -> None:
        self._skip_if(self.keypad.is_pressed(self.state.v[instruction.x]))

    def op_sknp(self, instruction: Instruction) -> None:
        self._skip_if(not self.keypad.is_pressed(self.state.v[instruction.x]))

    def op_ld_vx_dt(self, instruction: Instruction) -> None:
        self.state.v[instruction.x] = self.timers.delay

    def op_ld_vx_k(self, instruction: Instruction) -> None:
        self.execution = AwaitingKey(instruction.x)
        if debug_enabled("input"):
            debug_log("input", "key_wait V%X", instruction.x)

    def op_ld_dt_vx(self, instruction: Instruction) -> None:
        self.timers.set_delay(self.state.v[instruction.x])

    def op_ld_st_vx(self, instruction: Instruction) -> None:
        self.timers.set_sound(self.state.v[instruction.x])

    def op_add_i(self, instruction: Instruction) -> None:
        self.state.i = (self.state.i + self.state.v[instruction.x]) & 0xFFFF

    def op_ld_f(self, instruction: Instruction) -> None:
        self.state.i = glyph_address(self.state.v[instruction.x])

    def op_ld_b(self, instruction: Instruction) -> None:
        value = self.state.v[instruction.x]
        self.memory.write_block(self.state.i, (value // 100, (value // 10) % 10, value % 10))

    def op_ld_mem_vx(self, instruction: Instruction) -> None:
        self.memory.write_block(self.state.i, self.state.v[: instruction.x + 1])

    def op_ld_vx_mem(self, instruction: Instruction) -> None:
        count = instruction.x + 1
        self.state.v[:count] = self.memory.read_block(self.state.i, count)

    # ------------------------------------------------------------------
    # Helpers

    def _operands(self, instruction: Instruction) -> tuple[int, int]:
        v = self.state.v
        return v[instruction.x], v[instruction.y]

    def _write_with_flag(self, register: int, result: int, flag: int | bool) -> None:
        # Result first, flag second: VF as destination ends up holding the flag.
        v = self.state.v
        v[register] = result & 0xFF
        v[FLAG_REGISTER] = 1 if flag else 0

    def _skip_if(self, condition: bool) -> None:
        if condition:
            self.state.pc = (self.state.pc + INSTRUCTION_BYTES) & 0xFFFF

    def _record(self, state_before: CPUState | None, word: int, mnemonic: str, note: str = "") -> None:
        if self.trace is None or state_before is None:
            return
        self.trace.record_step(
            state_before,
            word,
            delay=self.timers.delay,
            sound=self.timers.sound,
            waiting=self.waiting,
            halted=self.halted,
            mnemonic=mnemonic,
            note=note,
        )
