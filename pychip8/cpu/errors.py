"""Fatal interpreter conditions."""

from __future__ import annotations


class CPUError(Exception):
    """Base error for CPU-related failures."""


class IllegalOpcodeError(CPUError):
    """Raised when an instruction word has no matching instruction."""


class StackOverflowError(CPUError):
    """Raised by CALL when every call stack slot is in use."""


class StackUnderflowError(CPUError):
    """Raised by RET when the call stack is empty."""


class AddressError(CPUError):
    """Raised when a computed address falls outside memory."""
