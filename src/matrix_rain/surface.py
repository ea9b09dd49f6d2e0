# surface.py

import logging
import pygame

logger = logging.getLogger(__name__)

BACKGROUND_COLOR = (0, 0, 0)
GLYPH_FONT_SIZE = 15
# First installed font wins; the CJK faces cover the katakana glyphs
GLYPH_FONT_NAMES = ["notosansmonocjkjp", "notosanscjkjp", "msgothic",
                    "yugothic", "dejavusansmono", "consolas", "monospace"]


class SurfaceAdapter:
    """
    Owns the off-screen pygame Surface the rain is painted on.

    The surface is persistent between frames: fade() darkens what is already
    there, which is what leaves the trails behind the falling heads.
    """

    def __init__(self, width, height, background=BACKGROUND_COLOR, font=None):
        if not pygame.font.get_init():
            pygame.font.init()

        self.background = background
        self.font = font or pygame.font.SysFont(GLYPH_FONT_NAMES, GLYPH_FONT_SIZE)
        self.surface = None
        self.width = 0
        self.height = 0

        self._fade_overlay = None
        self._fade_opacity = None
        self._glyph_cache = {}

        self.resize(width, height)

    @property
    def is_ready(self):
        """False while there is no drawing surface, e.g. for a zero-sized window."""
        return self.surface is not None

    def resize(self, width, height):
        """
        Recreates the drawing surface at the new size.

        Args:
            width (int): New width in pixels.
            height (int): New height in pixels.

        Returns:
            bool: True if a usable surface exists afterwards.
        """
        width, height = int(width), int(height)
        self._fade_overlay = None

        # Windows can report empty sizes while being minimized or laid out
        if width <= 0 or height <= 0:
            logger.warning("Ignoring degenerate surface size %dx%d", width, height)
            self.surface = None
            self.width = max(0, width)
            self.height = max(0, height)
            return False

        try:
            self.surface = pygame.Surface((width, height))
        except pygame.error as e:
            logger.warning("Failed to create %dx%d surface: %s", width, height, e)
            self.surface = None
            self.width = self.height = 0
            return False

        self.width = width
        self.height = height
        self.clear()
        return True

    def clear(self):
        if self.surface is not None:
            self.surface.fill(self.background)

    def fade(self, opacity):
        """Lays a translucent background-colored overlay over the whole surface."""
        if self.surface is None:
            return

        if self._fade_overlay is None or self._fade_opacity != opacity:
            self._fade_overlay = pygame.Surface((self.width, self.height), pygame.SRCALPHA)
            self._fade_overlay.fill((*self.background, round(opacity * 255)))
            self._fade_opacity = opacity

        self.surface.blit(self._fade_overlay, (0, 0))

    def draw_glyph(self, char, x, y, color, opacity):
        """
        Draws one character with its baseline at y, like a canvas fillText.

        Args:
            char (str): The glyph.
            x (float): Left edge in pixels.
            y (float): Baseline in pixels.
            color (tuple): (r, g, b).
            opacity (float): 0.0 (invisible) to 1.0 (opaque).
        """
        if self.surface is None:
            return

        image = self._glyph_cache.get((char, color))
        if image is None:
            image = self.font.render(char, True, color)
            self._glyph_cache[(char, color)] = image

        # The cached image is shared, so its alpha is set right before every blit
        image.set_alpha(round(opacity * 255))
        self.surface.blit(image, (int(x), int(y) - self.font.get_ascent()))

    def blit_to(self, target, dest=(0, 0)):
        """Copies the painted rain onto another surface, normally the display."""
        if self.surface is not None:
            target.blit(self.surface, dest)
