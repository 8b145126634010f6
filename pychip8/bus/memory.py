"""Flat 4 KiB memory used by the CHIP-8 interpreter.

CHIP-8 has a single byte-addressable space with no mapped devices, so the bus
collapses to one region. Words are big-endian: the high byte lives at the
lower address.
"""

from __future__ import annotations

from dataclasses import dataclass

MEMORY_SIZE = 0x1000


class MemoryError(Exception):
    """Raised when a memory region is misconfigured or accessed out of range."""


class Addressable:
    """Interface for byte-addressable storage."""

    def get_start_address(self) -> int:  # pragma: no cover - interface
        raise NotImplementedError

    def get_end_address(self) -> int:  # pragma: no cover - interface
        raise NotImplementedError

    def load8(self, address: int) -> int:  # pragma: no cover - interface
        raise NotImplementedError

    def store8(self, address: int, value: int) -> None:  # pragma: no cover - interface
        raise NotImplementedError

    def load16(self, address: int) -> int:
        high = self.load8(address)
        low = self.load8(address + 1)
        return ((high & 0xFF) << 8) | (low & 0xFF)

    def store16(self, address: int, value: int) -> None:
        self.store8(address, (value >> 8) & 0xFF)
        self.store8(address + 1, value & 0xFF)

    def contains(self, address: int) -> bool:
        return self.get_start_address() <= address <= self.get_end_address()


@dataclass
class Memory(Addressable):
    """Byte-addressable RAM, zero-filled on creation."""

    start: int = 0x0000
    length: int = MEMORY_SIZE

    def __post_init__(self) -> None:
        if self.start < 0 or self.length <= 0:
            raise MemoryError("memory region must have a positive length and non-negative start")
        self._data = bytearray(self.length)

    def get_start_address(self) -> int:
        return self.start

    def get_end_address(self) -> int:
        return self.start + self.length - 1

    def _offset(self, address: int) -> int:
        offset = address - self.start
        if not 0 <= offset < self.length:
            raise MemoryError(f"address {address:#06x} outside region {self.start:#06x}-{self.get_end_address():#06x}")
        return offset

    def load8(self, address: int) -> int:
        return self._data[self._offset(address)]

    def store8(self, address: int, value: int) -> None:
        self._data[self._offset(address)] = value & 0xFF

    def load_block(self, address: int, data: bytes) -> None:
        """Copy ``data`` into memory starting at ``address``."""

        if not data:
            return
        offset = self._offset(address)
        end = offset + len(data)
        if end > self.length:
            raise MemoryError(
                f"block of {len(data)} bytes at {address:#06x} overruns region end {self.get_end_address():#06x}"
            )
        self._data[offset:end] = data

    def read_block(self, address: int, length: int) -> bytes:
        if length <= 0:
            return b""
        offset = self._offset(address)
        self._offset(address + length - 1)
        return bytes(self._data[offset : offset + length])

    def clear(self) -> None:
        self._data[:] = bytes(self.length)

    def snapshot(self) -> bytes:
        return bytes(self._data)
