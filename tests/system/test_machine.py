"""Tests for machine assembly."""

from __future__ import annotations

import pytest

from pychip8.bus import ProgramTooLargeError
from pychip8.cpu import Instruction, InstructionKind, StackUnderflowError
from pychip8.system import MachineConfig, create_machine


def test_create_machine_loads_rom_image() -> None:
    machine = create_machine(MachineConfig(rom_image=b"\x60\x05\x61\x02"))
    assert machine.cpu.state.pc == 0x200
    assert machine.run(2) == 2
    assert machine.cpu.state.v[0] == 5
    assert machine.cpu.state.v[1] == 2


def test_components_are_shared() -> None:
    machine = create_machine()
    assert machine.cpu.memory is machine.memory
    assert machine.cpu.framebuffer is machine.framebuffer
    assert machine.cpu.keypad is machine.keypad
    assert machine.cpu.timers is machine.timers


def test_config_options_are_applied() -> None:
    machine = create_machine(
        MachineConfig(stack_depth=2, timer_hz=30, wrap_sprites=True, trace_capacity=4)
    )
    assert machine.cpu.stack_depth == 2
    assert machine.timers.frequency == 30
    assert machine.framebuffer.wrap
    assert machine.cpu.trace is not None


def test_oversized_rom_is_reported() -> None:
    with pytest.raises(ProgramTooLargeError):
        create_machine(MachineConfig(rom_image=bytes(0xE01)))


def test_reload_program_resets_state() -> None:
    machine = create_machine(MachineConfig(rom_image=b"\x60\x05"))
    machine.step()
    machine.load_program(b"\x61\x07")
    assert machine.cpu.state.v[0] == 0
    assert machine.cpu.state.pc == 0x200
    machine.step()
    assert machine.cpu.state.v[1] == 7


def test_run_counts_executed_instructions() -> None:
    machine = create_machine(MachineConfig(rom_image=b"\x12\x00"))
    assert machine.run(10) == 10


def test_run_does_nothing_after_fatal_error() -> None:
    machine = create_machine(MachineConfig(rom_image=b"\x00\xEE"))
    with pytest.raises(StackUnderflowError):
        machine.run(5)
    assert machine.cpu.halted
    assert machine.run(5) == 0


def test_step_returns_instruction_until_halted() -> None:
    machine = create_machine(MachineConfig(rom_image=b"\x60\x05\x00\xEE"))
    instruction = machine.step()
    assert isinstance(instruction, Instruction)
    assert instruction.kind is InstructionKind.LD_IMM
    with pytest.raises(StackUnderflowError):
        machine.step()
    assert machine.step() is None
