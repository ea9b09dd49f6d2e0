# engine.py

import logging

from matrix_rain.effects import DropField
from matrix_rain.params import RainParams
from matrix_rain.render_loop import RenderLoop

logger = logging.getLogger(__name__)


class RainEngine:
    """
    Owns all animation state for one view: the drop field, the current render
    loop and the live parameters.

    Lifecycle: start() mounts, stop() unmounts, reconfigure() does a full
    restart with new parameters (fresh field, fresh loop).
    """

    def __init__(self, surface, scheduler, params=None, rng=None, sound=None):
        self.surface = surface
        self.scheduler = scheduler
        self.params = params or RainParams()
        self.rng = rng
        self.sound = sound

        self.field = DropField(self.params.density, self.params.speed, rng=rng)
        self.loop = None
        self.mounted = False

        if self.sound is not None:
            self.sound.set_enabled(self.params.sound_enabled)

    @property
    def frame_count(self):
        return self.loop.frame_count if self.loop is not None else 0

    def start(self):
        """
        Mounts the engine: repopulates the field and starts a new render loop.
        Without a drawing surface this logs and does nothing; the engine stays
        mounted and starts on the next usable resize.

        Returns:
            bool: True if a render loop is running afterwards.
        """
        self._teardown_loop()
        self.mounted = True

        if not self.surface.is_ready:
            logger.warning("No drawing surface available, rain engine not started")
            return False

        self.field.reinitialize(self.surface.width, self.surface.height,
                                density=self.params.density, speed=self.params.speed)
        self.loop = RenderLoop(self.field, self.surface, self.scheduler, self.params)
        self.loop.start()

        logger.debug("Rain engine started: %d drops on %dx%d, playing=%s",
                     len(self.field), self.surface.width, self.surface.height, self.params.playing)
        return True

    def stop(self):
        """Unmounts: cancels any pending frame. Safe to call repeatedly."""
        self._teardown_loop()
        self.mounted = False

    def _teardown_loop(self):
        if self.loop is not None:
            self.loop.teardown()
            self.loop = None

    def reconfigure(self, params):
        """
        Applies new parameters.

        Any change to playing, speed, density or color restarts the animation
        from a freshly spawned field, color included. A sound-only change leaves
        the animation running.

        Args:
            params (RainParams): The complete new parameter set.
        """
        previous = self.params
        self.params = params

        if self.sound is not None and params.sound_enabled != previous.sound_enabled:
            self.sound.set_enabled(params.sound_enabled)

        if self.mounted and previous.affects_rendering(params):
            logger.debug("Reconfiguring rain engine: %s", params)
            self.start()

    def update(self, **changes):
        """Shorthand for reconfigure(params.replace(**changes))."""
        self.reconfigure(self.params.replace(**changes))

    def set_playing(self, playing):
        self.update(playing=playing)

    def toggle_playing(self):
        self.set_playing(not self.params.playing)

    def resize(self, width, height):
        """
        Follows a viewport resize: recreates the surface and respawns every drop,
        since x positions from the old width are meaningless. A running loop
        keeps its schedule.
        """
        self.surface.resize(width, height)

        if not self.surface.is_ready:
            self.field.reinitialize(0, 0)
            return

        if self.mounted and self.loop is None:
            # Mounted while the surface was unusable
            self.start()
            return

        self.field.reinitialize(self.surface.width, self.surface.height,
                                density=self.params.density, speed=self.params.speed)
        logger.debug("Surface resized to %dx%d, field respawned with %d drops",
                     self.surface.width, self.surface.height, len(self.field))
