"""Pygame frontend for the CHIP-8 interpreter."""

from .app import AppConfig, Chip8App, canonical_key_name

__all__ = ["AppConfig", "Chip8App", "canonical_key_name"]
