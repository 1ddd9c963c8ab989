"""Tests for RAM layout, glyph seeding and bounds checks."""

from __future__ import annotations

import pytest

from pychip8.bus import Memory, MemoryAccessError, ProgramTooLargeError
from pychip8.video.font import FONT_START, FONT_TABLE, GLYPH_BYTES, glyph_address


def test_font_installed_at_low_offset() -> None:
    memory = Memory()
    assert memory.read_block(FONT_START, len(FONT_TABLE)) == FONT_TABLE
    assert memory.read_block(glyph_address(0xF), GLYPH_BYTES) == bytes([0xF0, 0x80, 0xF0, 0x80, 0x80])


def test_rest_of_memory_is_zero() -> None:
    memory = Memory()
    snapshot = memory.snapshot()
    assert len(snapshot) == 0x1000
    assert not any(snapshot[len(FONT_TABLE):])


def test_load_program_at_program_start() -> None:
    memory = Memory()
    entry = memory.load_program(b"\x60\x05\x61\x02")
    assert entry == 0x200
    assert memory.load16(0x200) == 0x6005
    assert memory.load16(0x202) == 0x6102


def test_program_filling_memory_exactly_is_accepted() -> None:
    memory = Memory()
    memory.load_program(bytes([0xAB]) * memory.program_capacity)
    assert memory.load8(0xFFF) == 0xAB


def test_oversized_program_is_rejected_without_writing() -> None:
    memory = Memory()
    with pytest.raises(ProgramTooLargeError):
        memory.load_program(bytes([0xAB]) * (memory.program_capacity + 1))
    assert memory.load8(0x200) == 0


def test_initialize_clears_previous_program() -> None:
    memory = Memory()
    memory.load_program(b"\x12\x34")
    memory.initialize()
    assert memory.load16(0x200) == 0
    assert memory.load8(FONT_START) == FONT_TABLE[0]


@pytest.mark.parametrize("address", [-1, 0x1000, 0xFFFF])
def test_out_of_range_access_raises(address: int) -> None:
    memory = Memory()
    with pytest.raises(MemoryAccessError):
        memory.load8(address)
    with pytest.raises(MemoryAccessError):
        memory.store8(address, 0)


def test_block_access_checks_both_ends() -> None:
    memory = Memory()
    with pytest.raises(MemoryAccessError):
        memory.read_block(0xFFE, 3)
    with pytest.raises(MemoryAccessError):
        memory.write_block(0xFFF, [1, 2])
    assert memory.load8(0xFFF) == 0


def test_store_masks_to_byte() -> None:
    memory = Memory()
    memory.store8(0x300, 0x1FF)
    assert memory.load8(0x300) == 0xFF


def test_invalid_layout() -> None:
    with pytest.raises(ValueError):
        Memory(size=0)
    with pytest.raises(ValueError):
        Memory(size=0x1000, program_start=0x10)
