"""Unit tests for the CHIP-8 memory."""

from __future__ import annotations

import pytest

from pychip8.bus import MEMORY_SIZE, Memory, MemoryError


def test_default_size_and_zero_fill():
    memory = Memory()

    assert memory.get_start_address() == 0x000
    assert memory.get_end_address() == MEMORY_SIZE - 1
    assert memory.snapshot() == bytes(MEMORY_SIZE)


def test_words_are_big_endian():
    memory = Memory()

    memory.store16(10, 0xAABB)

    assert memory.load8(10) == 0xAA
    assert memory.load8(11) == 0xBB
    assert memory.load16(10) == 0xAABB


def test_store8_truncates_to_byte():
    memory = Memory()

    memory.store8(0x200, 0x1FF)

    assert memory.load8(0x200) == 0xFF


def test_out_of_range_access_raises():
    memory = Memory()

    with pytest.raises(MemoryError):
        memory.load8(MEMORY_SIZE)
    with pytest.raises(MemoryError):
        memory.store8(-1, 0)
    with pytest.raises(MemoryError):
        memory.load16(MEMORY_SIZE - 1)


def test_contains_covers_whole_region():
    memory = Memory()

    assert memory.contains(0)
    assert memory.contains(MEMORY_SIZE - 1)
    assert not memory.contains(MEMORY_SIZE)
    assert not memory.contains(-1)


def test_block_copy_and_bounds():
    memory = Memory()

    memory.load_block(0x200, b"\x12\x34\x56")

    assert memory.read_block(0x200, 3) == b"\x12\x34\x56"
    with pytest.raises(MemoryError):
        memory.load_block(MEMORY_SIZE - 2, b"\x00\x00\x00")


def test_clear():
    memory = Memory()
    memory.store8(0x300, 0x42)

    memory.clear()

    assert memory.load8(0x300) == 0


def test_invalid_region():
    with pytest.raises(MemoryError):
        Memory(0, 0)
