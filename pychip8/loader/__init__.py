"""Loaders for CHIP-8 program images."""

from __future__ import annotations

from .program import (
    MAX_PROGRAM_LENGTH,
    ProgramFormatError,
    ProgramImage,
    load_program,
    load_program_bytes,
    load_program_from_path,
)

__all__ = [
    "MAX_PROGRAM_LENGTH",
    "ProgramImage",
    "ProgramFormatError",
    "load_program",
    "load_program_bytes",
    "load_program_from_path",
]
