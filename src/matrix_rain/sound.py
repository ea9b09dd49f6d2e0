# sound.py

import logging
import math
from array import array

import pygame

logger = logging.getLogger(__name__)

CUE_FREQUENCY_HZ = 440.0
CUE_DURATION_S = 0.18
CUE_VOLUME = 0.35

# pygame.mixer sample size -> array typecode
_SAMPLE_FORMATS = {
    8: ("B", 127, 128),
    -8: ("b", 127, 0),
    16: ("H", 32767, 32768),
    -16: ("h", 32767, 0),
}


def synthesize_cue(frequency, size, channels,
                   tone_hz=CUE_FREQUENCY_HZ, duration=CUE_DURATION_S):
    """
    Builds a short decaying sine blip in the mixer's raw sample format.

    Args:
        frequency (int): Mixer sample rate.
        size (int): Mixer sample size as reported by pygame.mixer.get_init().
        channels (int): Number of interleaved output channels.

    Returns:
        bytes: Raw samples, or None when the sample size is unsupported.
    """
    if size not in _SAMPLE_FORMATS:
        return None

    typecode, amplitude, offset = _SAMPLE_FORMATS[size]
    total = int(frequency * duration)
    samples = array(typecode)
    for n in range(total):
        envelope = 1.0 - n / total
        value = math.sin(2 * math.pi * tone_hz * n / frequency) * envelope
        samples.extend([int(value * amplitude) + offset] * channels)
    return samples.tobytes()


class AmbientSound:
    """Decorative audio cue, played once whenever sound gets switched on."""

    def __init__(self, enabled=False):
        self.enabled = False
        self.available = True
        self._cue = None
        self.set_enabled(enabled)

    def set_enabled(self, enabled):
        enabled = bool(enabled)
        if enabled and not self.enabled:
            self.play_cue()
        self.enabled = enabled

    def play_cue(self):
        """Fire-and-forget. Audio failures never reach the caller."""
        cue = self._load_cue()
        if cue is None:
            return
        try:
            cue.play()
        except pygame.error as e:
            logger.warning("Sound cue playback failed: %s", e)

    def _load_cue(self):
        if self._cue is not None or not self.available:
            return self._cue

        try:
            if not pygame.mixer.get_init():
                pygame.mixer.init()
            frequency, size, channels = pygame.mixer.get_init()
            raw = synthesize_cue(frequency, size, channels)
            if raw is None:
                logger.warning("Unsupported mixer sample size %s, sound disabled", size)
                self.available = False
                return None
            self._cue = pygame.mixer.Sound(buffer=raw)
            self._cue.set_volume(CUE_VOLUME)
        except (pygame.error, TypeError) as e:
            # No audio device, or the mixer came up unusable
            logger.warning("Audio unavailable, sound disabled: %s", e)
            self.available = False
            self._cue = None

        return self._cue
