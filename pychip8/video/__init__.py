"""Video helpers for the CHIP-8 interpreter."""

from __future__ import annotations

from .font import FONT_SPRITES, FONT_START, GLYPH_BYTES, GLYPH_COUNT, glyph_address, install_font
from .framebuffer import DISPLAY_HEIGHT, DISPLAY_WIDTH, Framebuffer
from .palette import MONOCHROME, validate_palette
from .renderer import RenderResult, Renderer

__all__ = [
    "Framebuffer",
    "Renderer",
    "RenderResult",
    "MONOCHROME",
    "validate_palette",
    "FONT_SPRITES",
    "FONT_START",
    "GLYPH_BYTES",
    "GLYPH_COUNT",
    "glyph_address",
    "install_font",
    "DISPLAY_WIDTH",
    "DISPLAY_HEIGHT",
]
