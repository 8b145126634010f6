"""CPU package for the CHIP-8 interpreter."""

from .core import PROGRAM_START, Chip8CPU, CPUState, Quirks
from .errors import (
    AddressError,
    CPUError,
    IllegalOpcodeError,
    StackOverflowError,
    StackUnderflowError,
)
from .stack import DEFAULT_STACK_SIZE, CallStack
from . import opcodes

__all__ = [
    "Chip8CPU",
    "CPUState",
    "CallStack",
    "Quirks",
    "CPUError",
    "IllegalOpcodeError",
    "StackOverflowError",
    "StackUnderflowError",
    "AddressError",
    "DEFAULT_STACK_SIZE",
    "PROGRAM_START",
    "opcodes",
]
