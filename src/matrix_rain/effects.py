# effects.py
import math
import random

# Drops spawned per unit of density
BASE_DROP_COUNT = 100

MIN_TRAIL_LENGTH = 5
MAX_TRAIL_LENGTH = 25  # exclusive

LATIN_GLYPHS = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"
KATAKANA_GLYPHS = "アイウエオカキクケコサシスセソタチツテトナニヌネノハヒフヘホマミムメモヤユヨラリルレロワヲン"
GLYPH_ALPHABET = LATIN_GLYPHS + KATAKANA_GLYPHS


class Drop:
    """Represents a single falling character stream."""

    __slots__ = ("x", "y", "speed", "trail_length", "glyphs")

    def __init__(self, x, y, speed, glyphs):
        self.x = x
        self.y = y
        self.speed = speed
        # Glyphs never change after creation; the trail "moves" by falling
        self.glyphs = tuple(glyphs)
        self.trail_length = len(self.glyphs)

    def __repr__(self):
        return (f"Drop(x={self.x:.1f}, y={self.y:.1f}, speed={self.speed:.2f}, "
                f"trail_length={self.trail_length})")


def create_drop(surface_w, surface_h, speed, rng=None):
    """
    Builds a drop at a random column, already part-way through its fall.

    Args:
        surface_w (int): Surface width at creation time. The drop keeps its x for life.
        surface_h (int): Surface height, used to stagger the starting heights.
        speed (float): Global speed multiplier.
        rng (random.Random): Optional source of randomness, for reproducible tests.

    Returns:
        Drop: The new drop.
    """
    rng = rng or random
    trail_length = rng.randrange(MIN_TRAIL_LENGTH, MAX_TRAIL_LENGTH)
    return Drop(
        x=rng.random() * surface_w,
        # Start above the visible area so a fresh field doesn't fall in lockstep
        y=-rng.random() * surface_h,
        speed=(rng.random() * 3 + 1) * speed,
        glyphs=[rng.choice(GLYPH_ALPHABET) for _ in range(trail_length)],
    )


def init_field(surface_w, surface_h, density, speed, rng=None):
    """Returns floor(density * 100) fresh drops, or none for a degenerate surface."""
    if surface_w <= 0 or surface_h <= 0 or density <= 0:
        return []
    count = math.floor(density * BASE_DROP_COUNT)
    return [create_drop(surface_w, surface_h, speed, rng) for _ in range(count)]


class DropField:
    """Manages the live collection of drops for one surface."""

    def __init__(self, density, speed, rng=None):
        self.density = density
        self.speed = speed
        self.rng = rng
        self.drops = []

    def reinitialize(self, surface_w, surface_h, density=None, speed=None):
        """Throws away every drop and repopulates the field for the given surface."""
        if density is not None:
            self.density = density
        if speed is not None:
            self.speed = speed
        self.drops = init_field(surface_w, surface_h, self.density, self.speed, self.rng)
        return self.drops

    def respawn(self, index, surface_w, surface_h):
        """Replaces the drop at index in place with a freshly created one."""
        drop = create_drop(surface_w, surface_h, self.speed, self.rng)
        self.drops[index] = drop
        return drop

    def __len__(self):
        return len(self.drops)

    def __iter__(self):
        return iter(self.drops)

    def __getitem__(self, index):
        return self.drops[index]
