# loop_states.py

import logging

logger = logging.getLogger(__name__)


class LoopState:
    """Base Class for the render loop's scheduling states."""

    name = "base"

    def __init__(self, loop):
        # Reference to the RenderLoop (context)
        self.loop = loop

    def enter(self):
        """Logic executed upon entering the state."""
        pass

    def exit(self):
        """Logic executed upon leaving the state (cleanup)."""
        pass

    def start(self):
        """Handles a start request from the engine."""
        pass

    def on_frame(self):
        """Handles the scheduled frame callback firing."""
        pass


# --- Concrete State Implementations ---

class IdleState(LoopState):
    """Nothing scheduled. Waits for start() while playing."""

    name = "idle"

    def start(self):
        if self.loop.params.playing:
            self.loop.change_state(ScheduledState(self.loop))


class ScheduledState(LoopState):
    """Exactly one frame callback is pending with the scheduler."""

    name = "scheduled"

    def __init__(self, loop):
        super().__init__(loop)
        self.handle = None

    def enter(self):
        self.handle = self.loop.scheduler.request(self.loop.on_frame)

    def exit(self):
        # A handle that already fired is None here, so only live requests get cancelled
        if self.handle is not None:
            self.loop.scheduler.cancel(self.handle)
            self.handle = None

    def on_frame(self):
        self.handle = None

        if not self.loop.params.playing:
            self.loop.change_state(IdleState(self.loop))
            return

        self.loop.render_frame()

        # The decision to re-arm is made once, at the end of this frame
        if self.loop.params.playing:
            self.loop.change_state(ScheduledState(self.loop))
        else:
            self.loop.change_state(IdleState(self.loop))


class StoppedState(LoopState):
    """Torn down. Terminal: ignores start requests and stray frames."""

    name = "stopped"

    def enter(self):
        logger.debug("Render loop stopped after %d frames", self.loop.frame_count)
