# render_loop.py

from matrix_rain.loop_states import IdleState, StoppedState

# Opacity of the background overlay laid over the previous frame
FADE_OPACITY = 0.05
# Vertical distance between consecutive glyphs of a trail, in pixels
GLYPH_LINE_HEIGHT = 15

HEAD_BRIGHTNESS = 255
BASE_BRIGHTNESS = 200
BRIGHTNESS_STEP = 10


def glyph_opacity(index, trail_length):
    """Head glyph is fully opaque; the trail fades linearly toward the tail."""
    if index == 0:
        return 1.0
    return (trail_length - index) / trail_length


def glyph_brightness(index):
    if index == 0:
        return HEAD_BRIGHTNESS
    return BASE_BRIGHTNESS - index * BRIGHTNESS_STEP


class RenderLoop:
    """
    Per-frame driver for one drop field on one surface.

    Scheduling is delegated to a state object (idle / scheduled / stopped) so the
    loop can never hold more than one pending frame. A stopped loop is spent; the
    engine creates a new one on restart.
    """

    def __init__(self, field, surface, scheduler, params):
        self.field = field
        self.surface = surface
        self.scheduler = scheduler
        self.params = params
        self.frame_count = 0

        self.state = None
        self.change_state(IdleState(self))

    @property
    def state_name(self):
        return self.state.name

    @property
    def is_scheduled(self):
        return self.state.name == "scheduled"

    def change_state(self, new_state):
        """Switches the loop to a new scheduling state."""
        if self.state is not None:
            self.state.exit()

        self.state = new_state
        self.state.enter()

    def start(self):
        self.state.start()

    def teardown(self):
        """Cancels any pending frame. Safe to call any number of times."""
        if not isinstance(self.state, StoppedState):
            self.change_state(StoppedState(self))

    def on_frame(self):
        """Scheduler callback."""
        self.state.on_frame()

    def render_frame(self):
        """Advances every drop by one step and paints the visible trail glyphs."""
        surface = self.surface
        field = self.field
        theme = self.params.color

        # 1. Fade the previous image instead of clearing it; this leaves the trails
        surface.fade(FADE_OPACITY)

        for index, drop in enumerate(field.drops):
            # 2. Fall
            drop.y += drop.speed

            # 3. Recycle drops whose head left the bottom edge
            if drop.y > surface.height:
                field.respawn(index, surface.width, surface.height)
                continue

            # 4-5. Paint the trail, head first
            for i, glyph in enumerate(drop.glyphs):
                y = drop.y - i * GLYPH_LINE_HEIGHT
                if y < 0:
                    # Positions only decrease along the trail; the rest is off-screen too
                    break

                color = theme.channels(glyph_brightness(i))
                surface.draw_glyph(glyph, drop.x, y, color, glyph_opacity(i, drop.trail_length))

        self.frame_count += 1
