"""
Shared fixtures for the rain engine tests.

pygame is pointed at SDL's dummy drivers before anything imports it, so the
surface and sound tests run headless.
"""

import os
import random

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pytest

from matrix_rain.scheduler import FrameScheduler


class RecordingSurface:
    """Stand-in for SurfaceAdapter that records paint calls instead of drawing."""

    def __init__(self, width=800, height=600):
        self.width = width
        self.height = height
        self.calls = []
        self.on_fade = None

    @property
    def is_ready(self):
        return self.width > 0 and self.height > 0

    def resize(self, width, height):
        self.width = max(0, int(width))
        self.height = max(0, int(height))
        return self.is_ready

    def clear(self):
        self.calls.append(("clear",))

    def fade(self, opacity):
        self.calls.append(("fade", opacity))
        if self.on_fade is not None:
            self.on_fade(opacity)

    def draw_glyph(self, char, x, y, color, opacity):
        self.calls.append(("glyph", char, x, y, color, opacity))

    @property
    def glyph_calls(self):
        return [c for c in self.calls if c[0] == "glyph"]

    def reset(self):
        self.calls.clear()


class FakeSound:
    def __init__(self):
        self.enabled = False
        self.history = []

    def set_enabled(self, enabled):
        self.history.append(bool(enabled))
        self.enabled = bool(enabled)


@pytest.fixture
def surface():
    return RecordingSurface()


@pytest.fixture
def scheduler():
    return FrameScheduler()


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def fake_sound():
    return FakeSound()
