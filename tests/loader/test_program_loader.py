"""Tests for the program image loader."""

from __future__ import annotations

import io
from pathlib import Path

import pytest

from pychip8.bus import Memory
from pychip8.cpu import Chip8CPU, PROGRAM_START
from pychip8.loader import (
    MAX_PROGRAM_LENGTH,
    ProgramFormatError,
    load_program,
    load_program_from_path,
)
from pychip8.video import FONT_SPRITES, FONT_START


def make_cpu() -> Chip8CPU:
    cpu = Chip8CPU(Memory())
    cpu.reset()
    return cpu


def test_load_copies_image_at_program_start():
    cpu = make_cpu()

    program = load_program(io.BytesIO(b"\x60\x2A\x12\x00"), cpu, name="demo")

    assert cpu.memory.read_block(PROGRAM_START, 4) == b"\x60\x2A\x12\x00"
    assert program.name == "demo"
    assert program.start == PROGRAM_START
    assert program.length == 4
    assert program.end == PROGRAM_START + 3


def test_load_installs_font():
    cpu = make_cpu()

    load_program(io.BytesIO(b"\x00\xE0"), cpu)

    assert cpu.memory.read_block(FONT_START, len(FONT_SPRITES)) == FONT_SPRITES


def test_load_resets_machine_state():
    cpu = make_cpu()
    cpu.state.v[3] = 9
    cpu.state.pc = 0x400
    cpu.memory.store8(0x800, 0x55)

    load_program(io.BytesIO(b"\x00\xE0"), cpu)

    assert cpu.state.v[3] == 0
    assert cpu.state.pc == PROGRAM_START
    assert cpu.memory.load8(0x800) == 0


def test_loaded_program_runs():
    cpu = make_cpu()
    load_program(io.BytesIO(b"\x60\x2A\x70\x01"), cpu)

    cpu.step()
    cpu.step()

    assert cpu.state.v[0] == 0x2B


def test_empty_image_rejected():
    with pytest.raises(ProgramFormatError):
        load_program(io.BytesIO(b""), make_cpu())


def test_oversized_image_rejected():
    cpu = make_cpu()
    data = bytes(MAX_PROGRAM_LENGTH + 1)

    with pytest.raises(ProgramFormatError):
        load_program(io.BytesIO(data), cpu)


def test_largest_image_fits():
    cpu = make_cpu()
    data = bytes([0xAB]) * MAX_PROGRAM_LENGTH

    program = load_program(io.BytesIO(data), cpu)

    assert program.end == cpu.memory.get_end_address()
    assert cpu.memory.load8(cpu.memory.get_end_address()) == 0xAB


def test_load_from_path(tmp_path: Path):
    path = tmp_path / "maze.ch8"
    path.write_bytes(b"\xA2\x1E")
    cpu = make_cpu()

    program = load_program_from_path(path, cpu)

    assert program.name == "maze.ch8"
    assert cpu.memory.load16(PROGRAM_START) == 0xA21E
