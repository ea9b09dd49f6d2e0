"""
Tests for the desktop host: event dispatch, resizing and the main loop, run
against SDL's dummy video driver without a Tk root.
"""

from unittest.mock import MagicMock

import pygame
import pytest

from matrix_rain.config_manager import DEFAULT_CONFIG
from matrix_rain.rain_desktop import MatrixRainDesktop


@pytest.fixture
def app():
    desktop = MatrixRainDesktop(200, 150, 60, dict(DEFAULT_CONFIG))
    yield desktop
    pygame.quit()


def key_event(key):
    return pygame.event.Event(pygame.KEYDOWN, key=key)


def resize_event(width, height):
    return pygame.event.Event(pygame.VIDEORESIZE, w=width, h=height, size=(width, height))


# ===========================================================================
# Keyboard and Mouse Tests
# ===========================================================================

class TestInput:
    def test_space_toggles_playing(self, app):
        app.engine.start()
        assert app.engine.params.playing is True

        app.handle_event(key_event(pygame.K_SPACE))
        assert app.engine.params.playing is False
        assert app.scheduler.pending == 0

        app.handle_event(key_event(pygame.K_SPACE))
        assert app.engine.params.playing is True
        assert app.scheduler.pending == 1

    def test_escape_stops_running(self, app):
        app.handle_event(key_event(pygame.K_ESCAPE))
        assert app.running is False

    def test_quit_event_stops_running(self, app):
        app.handle_event(pygame.event.Event(pygame.QUIT))
        assert app.running is False

    def test_other_keys_are_ignored(self, app):
        app.handle_event(key_event(pygame.K_a))
        assert app.running is True
        assert app.engine.params.playing is True

    def test_panel_shortcuts_without_tk_are_not_fatal(self, app, caplog):
        app.handle_event(key_event(pygame.K_s))
        app.handle_event(pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=3, pos=(10, 10)))
        assert app.control_panel is None
        assert "control panel unavailable" in caplog.text


# ===========================================================================
# Resize Tests
# ===========================================================================

class TestResize:
    def test_resize_event_reaches_engine(self, app):
        app.engine.start()
        app.handle_event(resize_event(320, 240))

        assert (app.width, app.height) == (320, 240)
        assert (app.surface.width, app.surface.height) == (320, 240)
        assert len(app.engine.field) == 100
        assert all(0 <= d.x < 320 for d in app.engine.field)

    def test_same_size_event_is_ignored(self, app):
        app.engine.start()
        before = list(app.engine.field)

        app.handle_event(resize_event(app.width, app.height))

        assert list(app.engine.field) == before

    def test_resize_to_zero_empties_field(self, app):
        app.engine.start()
        app.handle_event(resize_event(0, 0))
        assert len(app.engine.field) == 0


# ===========================================================================
# Parameter and Panel Tests
# ===========================================================================

class TestUpdateParams:
    def test_update_params_refreshes_open_panel(self, app):
        panel = MagicMock()
        panel.winfo_exists.return_value = True
        app.control_panel = panel

        app.update_params(color="cyan")

        assert app.engine.params.color.value == "cyan"
        panel.refresh.assert_called_once()

    def test_closed_panel_is_not_refreshed(self, app):
        panel = MagicMock()
        panel.winfo_exists.return_value = False
        app.control_panel = panel

        app.update_params(speed=3.0)

        assert app.engine.params.speed == 3.0
        panel.refresh.assert_not_called()


# ===========================================================================
# Main Loop Tests
# ===========================================================================

class TestRun:
    def test_render_composes_without_error(self, app):
        app.engine.start()
        app.scheduler.run_pending()
        app.render()
        assert app.engine.frame_count == 1

    def test_run_exits_on_quit_and_stops_engine(self, app):
        pygame.event.post(pygame.event.Event(pygame.QUIT))
        app.run()

        assert app.running is False
        assert app.engine.loop is None
        assert app.scheduler.pending == 0
