# rain_desktop.py

import logging
import math

import pygame

from matrix_rain.engine import RainEngine
from matrix_rain.params import RainParams
from matrix_rain.scheduler import FrameScheduler
from matrix_rain.sound import AmbientSound
from matrix_rain.surface import SurfaceAdapter

logger = logging.getLogger(__name__)

TITLE_TEXT = "MATRIX"
SUBTITLE_TEXT = "Welcome to the simulation"
TITLE_COLOR = (74, 222, 128)
TITLE_FONT_NAMES = ["dejavusansmono", "consolas", "couriernew", "monospace"]


class MatrixRainDesktop:
    """Manages the pygame window, the main loop, Tk pumping and the rain engine."""

    # Title opacity oscillates between these values
    TITLE_PULSE_RANGE = (0.5, 1.0)
    TITLE_PULSE_PERIOD_MS = 2000

    def __init__(self, width, height, fps, initial_config):
        pygame.init()

        # --- Configuration Initialization ---
        self.config = initial_config
        self.fps = fps
        self.show_title = self.config.get("show_title", True)
        self.running = True
        self.clock = pygame.time.Clock()

        # --- Window Setup ---
        if self.config.get("fullscreen", False):
            self.screen = pygame.display.set_mode((0, 0), pygame.FULLSCREEN)
        else:
            self.screen = pygame.display.set_mode((width, height), pygame.RESIZABLE)
        pygame.display.set_caption("Matrix Rain")
        self.width, self.height = self.screen.get_size()

        # --- Rain Engine ---
        self.scheduler = FrameScheduler()
        self.surface = SurfaceAdapter(self.width, self.height)
        self.sound = AmbientSound()
        self.engine = RainEngine(
            self.surface,
            self.scheduler,
            params=RainParams.from_config(self.config),
            sound=self.sound,
        )

        # --- Title Overlay ---
        self.title_font = pygame.font.SysFont(TITLE_FONT_NAMES, 96, bold=True)
        self.subtitle_font = pygame.font.SysFont(TITLE_FONT_NAMES, 22)
        self.title_image = self.title_font.render(TITLE_TEXT, True, TITLE_COLOR)
        self.subtitle_image = self.subtitle_font.render(SUBTITLE_TEXT, True, TITLE_COLOR)
        self.subtitle_image.set_alpha(204)

        self.tk_root = None  # Tkinter root will be set by main.py
        self.control_panel = None

    def update_params(self, **changes):
        """Called by the control panel with the values that changed."""
        self.engine.update(**changes)
        if self.control_panel is not None and self.control_panel.winfo_exists():
            self.control_panel.refresh()

    def open_control_panel(self):
        """Opens or activates the control panel."""
        if self.tk_root is None:
            logger.warning("No Tk root, control panel unavailable")
            return

        # Imported lazily so the rain runs even where Tk can't start
        from matrix_rain.settings_gui import ControlPanel

        # Avoid creating duplicate windows
        if self.control_panel is None or not self.control_panel.winfo_exists():
            self.control_panel = ControlPanel(self.tk_root, self)
        else:
            self.control_panel.lift()

    def handle_event(self, event):
        """Dispatches a single pygame event."""
        if event.type == pygame.QUIT:
            self.running = False

        elif event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                self.running = False
            elif event.key == pygame.K_SPACE:
                self.update_params(playing=not self.engine.params.playing)
            elif event.key == pygame.K_s:
                self.open_control_panel()

        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 3:
            # Right-click: open control panel
            self.open_control_panel()

        elif event.type == pygame.VIDEORESIZE:
            self.on_resize(event.w, event.h)

    def on_resize(self, width, height):
        if (width, height) == (self.width, self.height):
            return
        self.width, self.height = width, height
        self.engine.resize(width, height)

    def render(self):
        """Composes the rain and the title overlay onto the display."""
        self.screen.fill(self.surface.background)
        self.surface.blit_to(self.screen)

        if self.show_title:
            self._draw_title()

        pygame.display.flip()

    def _draw_title(self):
        lo, hi = self.TITLE_PULSE_RANGE
        phase = pygame.time.get_ticks() / self.TITLE_PULSE_PERIOD_MS * 2 * math.pi
        alpha = lo + (hi - lo) * (0.5 + 0.5 * math.cos(phase))
        self.title_image.set_alpha(round(alpha * 255))

        center_x = self.width // 2
        center_y = self.height // 2
        title_rect = self.title_image.get_rect(midbottom=(center_x, center_y))
        subtitle_rect = self.subtitle_image.get_rect(midtop=(center_x, center_y + 12))
        self.screen.blit(self.title_image, title_rect)
        self.screen.blit(self.subtitle_image, subtitle_rect)

    def run(self):
        """Main application loop."""

        def check_tk_root():
            """Handles events for the hidden Tkinter root and the control panel."""
            if self.tk_root is None:
                return
            try:
                self.tk_root.update_idletasks()
                self.tk_root.update()
            except Exception as e:
                # The root is gone (e.g. closed from the window manager); keep the rain going
                logger.warning("Tk root stopped responding: %s", e)
                self.tk_root = None
                self.control_panel = None

        self.engine.start()
        if self.config.get("show_panel", False):
            self.open_control_panel()

        while self.running:
            check_tk_root()

            # --- Event Handling ---
            for event in pygame.event.get():
                self.handle_event(event)
            if not self.running:
                break

            # --- Next display refresh: fire the pending frame ---
            self.scheduler.run_pending()

            # --- Rendering ---
            self.render()

            # Cap frame rate
            self.clock.tick(self.fps)

        self.cleanup()

    def cleanup(self):
        """Stops the engine and shuts down pygame."""
        self.engine.stop()
        pygame.quit()
