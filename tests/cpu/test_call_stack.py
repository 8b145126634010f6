"""Tests for the fixed-depth call stack."""

from __future__ import annotations

import pytest

from pychip8.cpu import CallStack, StackOverflowError, StackUnderflowError


def test_push_grows_down_from_capacity():
    stack = CallStack(4)

    sp = stack.push(stack.empty_pointer, 0x202)
    sp = stack.push(sp, 0x304)

    assert sp == 2
    assert stack.depth(sp) == 2
    assert stack.snapshot() == (0, 0, 0x304, 0x202)


def test_pop_clears_slot():
    stack = CallStack(4)
    sp = stack.push(4, 0x202)

    address, sp = stack.pop(sp)

    assert address == 0x202
    assert sp == 4
    assert stack.snapshot() == (0, 0, 0, 0)


def test_overflow_and_underflow():
    stack = CallStack(1)
    sp = stack.push(1, 0x200)

    with pytest.raises(StackOverflowError):
        stack.push(sp, 0x202)

    _, sp = stack.pop(sp)
    with pytest.raises(StackUnderflowError):
        stack.pop(sp)


def test_capacity_must_be_positive():
    with pytest.raises(ValueError):
        CallStack(0)
