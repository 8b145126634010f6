"""Sixteen-key hexadecimal keypad."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Mapping

from pychip8.utils import debug_enabled, debug_log

KEY_COUNT = 16


# Host keyboard layout. The COSMAC VIP keypad
#   1 2 3 C
#   4 5 6 D
#   7 8 9 E
#   A 0 B F
# is laid over the left-hand block of a QWERTY keyboard.
KEY_LAYOUT: Mapping[str, int] = {
    "1": 0x1,
    "2": 0x2,
    "3": 0x3,
    "4": 0xC,
    "q": 0x4,
    "w": 0x5,
    "e": 0x6,
    "r": 0xD,
    "a": 0x7,
    "s": 0x8,
    "d": 0x9,
    "f": 0xE,
    "z": 0xA,
    "x": 0x0,
    "c": 0xB,
    "v": 0xF,
}


ALIAS_TABLE: Mapping[str, str] = {
    "up": "2",
    "left": "q",
    "right": "e",
    "down": "s",
}


KeyListener = Callable[[int, bool], None]


@dataclass
class Keypad:
    """Key state for the sixteen hexadecimal keys."""

    _keys: bytearray = field(default_factory=lambda: bytearray(KEY_COUNT))
    _active: Dict[int, int] = field(default_factory=dict)
    _listeners: list[KeyListener] = field(default_factory=list)

    def press(self, key: int) -> None:
        _check_key(key)
        before = self._keys[key]
        self._keys[key] = 1
        self._active[key] = self._active.get(key, 0) + 1
        if debug_enabled("input"):
            debug_log("input", "key_press key=%X count=%d", key, self._active[key])
        if not before:
            self._notify_listeners(key, True)

    def release(self, key: int) -> None:
        _check_key(key)
        count = self._active.get(key, 0)
        before = self._keys[key]
        if count <= 1:
            self._keys[key] = 0
            self._active.pop(key, None)
        else:
            self._active[key] = count - 1
        if debug_enabled("input"):
            debug_log("input", "key_release key=%X count=%d", key, self._active.get(key, 0))
        if before and not self._keys[key]:
            self._notify_listeners(key, False)

    def press_name(self, key_name: str) -> bool:
        key = self.lookup(key_name)
        if key is None:
            if debug_enabled("input"):
                debug_log("input", "unmapped_press=%s", key_name)
            return False
        self.press(key)
        return True

    def release_name(self, key_name: str) -> bool:
        key = self.lookup(key_name)
        if key is None:
            if debug_enabled("input"):
                debug_log("input", "unmapped_release=%s", key_name)
            return False
        self.release(key)
        return True

    def is_pressed(self, key: int) -> bool:
        _check_key(key)
        return bool(self._keys[key])

    def pressed_keys(self) -> tuple[int, ...]:
        return tuple(key for key in range(KEY_COUNT) if self._keys[key])

    def reset(self) -> None:
        self._keys[:] = bytes(KEY_COUNT)
        self._active.clear()

    def snapshot(self) -> tuple[bool, ...]:
        return tuple(bool(value) for value in self._keys)

    def add_listener(self, listener: KeyListener) -> None:
        self._listeners.append(listener)

    @staticmethod
    def lookup(key_name: str) -> int | None:
        name = key_name.lower()
        name = ALIAS_TABLE.get(name, name)
        return KEY_LAYOUT.get(name)

    def _notify_listeners(self, key: int, pressed: bool) -> None:
        for listener in tuple(self._listeners):
            listener(key, pressed)


def _check_key(key: int) -> None:
    if not 0 <= key < KEY_COUNT:
        raise ValueError(f"key index out of range: {key}")
