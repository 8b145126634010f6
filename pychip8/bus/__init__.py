"""Bus-related helpers for the CHIP-8 interpreter."""

from .memory import MEMORY_SIZE, Addressable, Memory, MemoryError

__all__ = [
    "MEMORY_SIZE",
    "Addressable",
    "Memory",
    "MemoryError",
]
