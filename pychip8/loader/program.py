"""Raw CHIP-8 program image loader.

CHIP-8 programs are headerless binaries copied byte-for-byte to 0x200. The
loader resets the machine first and installs the hexadecimal font into the
reserved low region so LD F, Vx has sprites to point at.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO

from pychip8.bus import MEMORY_SIZE
from pychip8.cpu import PROGRAM_START, Chip8CPU
from pychip8.utils import debug_enabled, debug_log
from pychip8.video import install_font


class ProgramFormatError(RuntimeError):
    """Raised when a program image cannot be placed in memory."""


MAX_PROGRAM_LENGTH = MEMORY_SIZE - PROGRAM_START


@dataclass
class ProgramImage:
    """Metadata describing a loaded program."""

    name: str = ""
    start: int = PROGRAM_START
    length: int = 0

    @property
    def end(self) -> int:
        return self.start + self.length - 1


def load_program(stream: BinaryIO, cpu: Chip8CPU, *, name: str = "") -> ProgramImage:
    """Reset ``cpu`` and load the image read from ``stream`` at 0x200."""

    data = stream.read(MAX_PROGRAM_LENGTH + 1)
    return load_program_bytes(data, cpu, name=name)


def load_program_from_path(path: Path, cpu: Chip8CPU) -> ProgramImage:
    """Load a program image from the filesystem."""

    with path.open("rb") as handle:
        return load_program(handle, cpu, name=path.name)


def load_program_bytes(data: bytes, cpu: Chip8CPU, *, name: str = "") -> ProgramImage:
    if not data:
        raise ProgramFormatError("program image is empty")
    if len(data) > MAX_PROGRAM_LENGTH:
        raise ProgramFormatError(
            f"program image exceeds {MAX_PROGRAM_LENGTH} bytes available above {PROGRAM_START:#05x}"
        )

    cpu.reset()
    install_font(cpu.memory)
    cpu.memory.load_block(PROGRAM_START, bytes(data))

    program = ProgramImage(name=name, start=PROGRAM_START, length=len(data))
    if debug_enabled("loader"):
        debug_log("loader", "loaded %s %d bytes at %03x-%03x", name or "<stream>", program.length, program.start, program.end)
    return program
