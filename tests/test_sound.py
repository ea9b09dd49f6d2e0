"""
Tests for the ambient sound cue. pygame.mixer is replaced by a mock so no audio
device is needed.
"""

from array import array
from unittest.mock import MagicMock, patch

import pygame
import pytest

from matrix_rain import sound
from matrix_rain.sound import AmbientSound, synthesize_cue


@pytest.fixture
def mixer():
    fake = MagicMock()
    fake.get_init.return_value = (22050, -16, 2)
    with patch.object(sound.pygame, "mixer", fake):
        yield fake


# ===========================================================================
# Cue Synthesis Tests
# ===========================================================================

class TestSynthesizeCue:
    def test_signed_16_bit_mono(self):
        raw = synthesize_cue(8000, -16, 1, duration=0.1)
        assert len(raw) == 800 * 2

    def test_channels_are_interleaved(self):
        mono = synthesize_cue(8000, -16, 1, duration=0.1)
        stereo = synthesize_cue(8000, -16, 2, duration=0.1)
        assert len(stereo) == 2 * len(mono)

        samples = array("h", stereo)
        assert samples[0::2] == samples[1::2]

    def test_unsigned_8_bit_is_centered(self):
        raw = synthesize_cue(8000, 8, 1, duration=0.05)
        assert len(raw) == 400
        assert raw[0] == 128
        assert min(raw) < 128 < max(raw)

    def test_cue_decays(self):
        samples = array("h", synthesize_cue(8000, -16, 1, duration=0.2))
        quarter = len(samples) // 4
        assert max(map(abs, samples[:quarter])) > max(map(abs, samples[-quarter:]))

    def test_unsupported_sample_size(self):
        assert synthesize_cue(44100, 32, 2) is None


# ===========================================================================
# AmbientSound Tests
# ===========================================================================

class TestAmbientSound:
    def test_disabled_by_default_and_silent(self, mixer):
        ambient = AmbientSound()
        assert ambient.enabled is False
        mixer.Sound.assert_not_called()

    def test_enabling_plays_cue_once(self, mixer):
        ambient = AmbientSound()
        ambient.set_enabled(True)
        ambient.set_enabled(True)

        cue = mixer.Sound.return_value
        assert cue.play.call_count == 1
        assert ambient.enabled is True

    def test_reenabling_plays_again(self, mixer):
        ambient = AmbientSound(enabled=True)
        ambient.set_enabled(False)
        ambient.set_enabled(True)
        assert mixer.Sound.return_value.play.call_count == 2
        # The cue is synthesized only once
        assert mixer.Sound.call_count == 1

    def test_mixer_is_initialized_on_demand(self, mixer):
        mixer.get_init.side_effect = [None, (22050, -16, 2)]
        AmbientSound(enabled=True)
        mixer.init.assert_called_once()

    def test_missing_audio_device_is_not_fatal(self, mixer, caplog):
        mixer.get_init.return_value = None
        mixer.init.side_effect = pygame.error("No available audio device")

        ambient = AmbientSound(enabled=True)

        assert ambient.enabled is True
        assert ambient.available is False
        assert "Audio unavailable" in caplog.text

        ambient.set_enabled(False)
        ambient.set_enabled(True)
        assert mixer.init.call_count == 1

    def test_playback_error_is_not_fatal(self, mixer, caplog):
        mixer.Sound.return_value.play.side_effect = pygame.error("channel busy")
        AmbientSound(enabled=True)
        assert "playback failed" in caplog.text

    def test_unsupported_mixer_format_disables_sound(self, mixer):
        mixer.get_init.return_value = (48000, 32, 2)
        ambient = AmbientSound(enabled=True)
        assert ambient.available is False
        mixer.Sound.assert_not_called()
