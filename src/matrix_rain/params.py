# params.py

import logging
from dataclasses import dataclass, replace as dc_replace
from typing import Any, Dict

from matrix_rain.themes import ColorTheme

logger = logging.getLogger(__name__)

SPEED_RANGE = (0.5, 5.0)
DENSITY_RANGE = (0.1, 2.0)


def _clamp(value, bounds):
    lo, hi = bounds
    return max(lo, min(hi, float(value)))


def _config_number(config, key, default):
    value = config.get(key, default)
    try:
        return float(value)
    except (TypeError, ValueError):
        logger.warning("Invalid %s %r in config, using %s", key, value, default)
        return default


@dataclass(frozen=True)
class RainParams:
    """The live parameters exposed by the control panel."""

    playing: bool = True
    speed: float = 2.0
    density: float = 1.0
    color: ColorTheme = ColorTheme.GREEN
    sound_enabled: bool = False

    def __post_init__(self):
        # Frozen dataclass: normalize through object.__setattr__
        object.__setattr__(self, "playing", bool(self.playing))
        object.__setattr__(self, "speed", _clamp(self.speed, SPEED_RANGE))
        object.__setattr__(self, "density", _clamp(self.density, DENSITY_RANGE))
        object.__setattr__(self, "color", ColorTheme.parse(self.color))
        object.__setattr__(self, "sound_enabled", bool(self.sound_enabled))

    def replace(self, **changes):
        """Returns a validated copy with the given fields changed."""
        return dc_replace(self, **changes)

    def affects_rendering(self, other):
        """True if switching from self to other requires restarting the animation."""
        return (self.playing, self.speed, self.density, self.color) != \
            (other.playing, other.speed, other.density, other.color)

    @classmethod
    def from_config(cls, config: Dict[str, Any]):
        """
        Builds the startup parameters from the loaded configuration dictionary.
        Out-of-range numbers are clamped, non-numeric ones fall back to the
        defaults, and an unknown color falls back to green.
        """
        defaults = cls()
        color = config.get("color", defaults.color)
        try:
            color = ColorTheme.parse(color)
        except ValueError:
            logger.warning("Unknown color %r in config, using %s", color, defaults.color.value)
            color = defaults.color

        return cls(
            playing=config.get("playing", defaults.playing),
            speed=_config_number(config, "speed", defaults.speed),
            density=_config_number(config, "density", defaults.density),
            color=color,
            sound_enabled=config.get("sound_enabled", defaults.sound_enabled),
        )
