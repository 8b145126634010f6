"""CHIP-8 interpreter.

The interpreter core lives in ``cpu`` (fetch, decode and execute over the
memory, call stack, framebuffer and keypad). The remaining subpackages host the
collaborators around it: program loading, machine assembly, rendering, audio
and the pygame frontend used by ``run.py``.
"""

from __future__ import annotations

__version__ = "0.1.0"

from . import audio, bus, cpu, io, loader, system, ui, utils, video

__all__: list[str] = [
    "cpu",
    "bus",
    "video",
    "audio",
    "io",
    "loader",
    "system",
    "ui",
    "utils",
]
