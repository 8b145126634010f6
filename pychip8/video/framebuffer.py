"""Monochrome CHIP-8 framebuffer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

DISPLAY_WIDTH = 64
DISPLAY_HEIGHT = 32
SPRITE_WIDTH = 8


@dataclass
class Framebuffer:
    """Grid of single-bit pixels mutated by CLS and DRW only."""

    width: int = DISPLAY_WIDTH
    height: int = DISPLAY_HEIGHT

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("framebuffer dimensions must be positive")
        self._pixels = bytearray(self.width * self.height)
        self._revision = 0

    @property
    def revision(self) -> int:
        """Counter bumped on every mutation, for renderers that cache frames."""

        return self._revision

    def clear(self) -> None:
        self._pixels[:] = bytes(len(self._pixels))
        self._revision += 1

    def get_pixel(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} framebuffer")
        return self._pixels[y * self.width + x]

    def draw_sprite(self, x: int, y: int, sprite: Iterable[int]) -> bool:
        """XOR ``sprite`` rows in at ``(x, y)``; return True if a lit pixel was cleared."""

        origin_x = x % self.width
        origin_y = y % self.height
        collision = False
        for row, bits in enumerate(sprite):
            py = (origin_y + row) % self.height
            line = py * self.width
            for column in range(SPRITE_WIDTH):
                if not bits & (0x80 >> column):
                    continue
                index = line + (origin_x + column) % self.width
                if self._pixels[index]:
                    collision = True
                self._pixels[index] ^= 1
        self._revision += 1
        return collision

    def rows(self) -> list[tuple[int, ...]]:
        return [
            tuple(self._pixels[y * self.width : (y + 1) * self.width])
            for y in range(self.height)
        ]

    def lit_count(self) -> int:
        return sum(self._pixels)

    def snapshot(self) -> bytes:
        return bytes(self._pixels)
