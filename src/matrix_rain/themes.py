# themes.py

from enum import Enum


class ColorTheme(Enum):
    """The three selectable color modes. Values double as config names."""

    GREEN = "green"
    CYAN = "cyan"
    MAGENTA = "magenta"

    @property
    def hex_value(self):
        return _HEX_VALUES[self]

    def channels(self, brightness):
        """
        Maps a brightness value onto this theme's color channels.

        Args:
            brightness (int): Raw brightness, may fall outside 0-255 for long trails.

        Returns:
            tuple: (r, g, b), each clamped to 0-255.
        """
        b = max(0, min(255, int(brightness)))
        if self is ColorTheme.GREEN:
            return 0, b, 0
        if self is ColorTheme.CYAN:
            return 0, b, b
        return b, 0, b

    @classmethod
    def parse(cls, value):
        """Accepts a theme, its name (any case) or its swatch hex code."""
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        for theme in cls:
            if key == theme.value or key == theme.hex_value:
                return theme
        raise ValueError(f"Unknown color theme: {value!r}")


# Swatch colors shown on the control panel
_HEX_VALUES = {
    ColorTheme.GREEN: "#00ff00",
    ColorTheme.CYAN: "#00ffff",
    ColorTheme.MAGENTA: "#ff00ff",
}
