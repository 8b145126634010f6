"""Audio output for the CHIP-8 sound timer."""

from .beeper import DEFAULT_TONE_HZ, SquareWaveBeeper, square_wave_samples

__all__ = ["DEFAULT_TONE_HZ", "SquareWaveBeeper", "square_wave_samples"]
