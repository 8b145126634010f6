"""Fixed-depth call stack of 16-bit return addresses.

The stack pointer lives in the register file; the stack only owns the slots.
The pointer starts at ``capacity`` and moves toward zero on each push, so
``sp == capacity`` means empty and ``sp == 0`` means full.
"""

from __future__ import annotations

from dataclasses import dataclass

from .errors import StackOverflowError, StackUnderflowError

DEFAULT_STACK_SIZE = 128


@dataclass
class CallStack:
    capacity: int = DEFAULT_STACK_SIZE

    def __post_init__(self) -> None:
        if self.capacity <= 0:
            raise ValueError("stack capacity must be positive")
        self._slots = [0] * self.capacity

    def __len__(self) -> int:
        return self.capacity

    def __getitem__(self, index: int) -> int:
        return self._slots[index]

    @property
    def empty_pointer(self) -> int:
        return self.capacity

    def push(self, sp: int, address: int) -> int:
        """Store ``address`` below ``sp`` and return the new stack pointer."""

        if sp <= 0:
            raise StackOverflowError(f"call stack overflow (depth {self.capacity})")
        if sp > self.capacity:
            raise StackUnderflowError(f"stack pointer {sp} beyond capacity {self.capacity}")
        sp -= 1
        self._slots[sp] = address & 0xFFFF
        return sp

    def pop(self, sp: int) -> tuple[int, int]:
        """Return ``(address, new_sp)`` and zero the vacated slot."""

        if sp >= self.capacity:
            raise StackUnderflowError("return with empty call stack")
        if sp < 0:
            raise StackOverflowError(f"stack pointer {sp} below zero")
        address = self._slots[sp]
        self._slots[sp] = 0
        return address, sp + 1

    def depth(self, sp: int) -> int:
        return self.capacity - sp

    def clear(self) -> None:
        self._slots = [0] * self.capacity

    def snapshot(self) -> tuple[int, ...]:
        return tuple(self._slots)
