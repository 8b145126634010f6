"""Built-in hexadecimal digit sprites."""

from __future__ import annotations

from pychip8.bus import Addressable

FONT_START = 0x050
GLYPH_BYTES = 5
GLYPH_COUNT = 16

FONT_SPRITES = bytes(
    (
        0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
        0x20, 0x60, 0x20, 0x20, 0x70,  # 1
        0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
        0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
        0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
        0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
        0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
        0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
        0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
        0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
        0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
        0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
        0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
        0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
        0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
        0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
    )
)


def glyph_address(digit: int, *, base: int = FONT_START) -> int:
    """Address of the sprite for the low nibble of ``digit``."""

    return base + (digit % GLYPH_COUNT) * GLYPH_BYTES


def install_font(memory: Addressable, *, base: int = FONT_START) -> None:
    for offset, value in enumerate(FONT_SPRITES):
        memory.store8(base + offset, value)
