"""Square-wave tone played while the sound timer is non-zero."""

from __future__ import annotations

from array import array
from typing import Optional

DEFAULT_TONE_HZ = 440.0


def square_wave_samples(sample_rate: int, frequency: float, *, amplitude: int = 8_000) -> array:
    """One period of a signed 16-bit square wave."""

    if sample_rate <= 0 or frequency <= 0.0:
        raise ValueError("sample rate and frequency must be positive")
    period = max(2, int(round(sample_rate / frequency)))
    half = period // 2
    return array("h", [amplitude] * half + [-amplitude] * (period - half))


class SquareWaveBeeper:
    """Manage a looping square-wave tone using pygame's mixer."""

    def __init__(
        self,
        *,
        sample_rate: int = 44_100,
        frequency: float = DEFAULT_TONE_HZ,
        volume: float = 0.25,
    ) -> None:
        try:
            import pygame  # type: ignore
        except Exception as exc:  # pragma: no cover - optional dependency
            raise RuntimeError("pygame is required for audio output") from exc

        if pygame.mixer.get_init() is None:
            raise RuntimeError("pygame mixer must be initialised before creating SquareWaveBeeper")

        self._pygame = pygame
        self._volume = max(0.0, min(1.0, volume))
        samples = square_wave_samples(max(1, sample_rate), frequency)
        self._sound = pygame.mixer.Sound(buffer=samples.tobytes())
        self._channel: Optional["pygame.mixer.Channel"] = None
        self._playing = False

    @property
    def playing(self) -> bool:
        return self._playing

    def set_active(self, active: bool) -> None:
        """Start or stop the tone; repeated calls with the same state are no-ops."""

        if active == self._playing:
            return
        if active:
            channel = self._channel or self._pygame.mixer.find_channel(True)
            if channel is None:
                return
            self._channel = channel
            channel.play(self._sound, loops=-1)
            channel.set_volume(self._volume)
        elif self._channel is not None:
            self._channel.stop()
        self._playing = active

    def shutdown(self) -> None:
        """Stop any active tone and release resources."""

        self.set_active(False)
        self._channel = None
