"""Tests for the Pygame window and the boot screen."""

import logging
from unittest.mock import patch

import pygame
import pytest
from PIL import Image

from cuaca.config import DisplayConfig
from cuaca.display import NIGHT, WeatherDisplay, render_boot_screen


@pytest.fixture
def display(monkeypatch):
    """A real window on SDL's dummy video driver (no screen needed)."""
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    window = WeatherDisplay(DisplayConfig(width=120, height=160))
    yield window
    window.close()


def _key(key):
    return pygame.event.Event(pygame.KEYDOWN, key=key)


class TestHandleEvents:
    """Tests for WeatherDisplay.handle_events()."""

    @patch("cuaca.display.pygame.event.get")
    def test_no_events_keeps_running(self, mock_get, display):
        mock_get.return_value = []
        assert display.handle_events() is True

    @patch("cuaca.display.pygame.event.get")
    def test_window_close_quits(self, mock_get, display):
        mock_get.return_value = [pygame.event.Event(pygame.QUIT)]
        assert display.handle_events() is False
        assert display.quit_reason == "window closed"

    @patch("cuaca.display.pygame.event.get")
    def test_quit_keys(self, mock_get, display):
        mock_get.return_value = [_key(pygame.K_q)]
        assert display.handle_events() is False
        assert display.quit_reason == "Q pressed"

    @patch("cuaca.display.pygame.event.get")
    def test_other_keys_ignored(self, mock_get, display):
        mock_get.return_value = [_key(pygame.K_a), _key(pygame.K_SPACE)]
        assert display.handle_events() is True

    @patch("cuaca.display.pygame.event.get")
    def test_quit_request_is_sticky(self, mock_get, display):
        """Verify that a quit pressed during the boot screen still stops the main loop."""
        mock_get.return_value = [_key(pygame.K_ESCAPE)]
        display.handle_events()
        mock_get.return_value = []
        assert display.handle_events() is False

    @patch("cuaca.display.pygame.event.get")
    def test_quit_logged_once(self, mock_get, display, caplog):
        """Verify that repeated quit events produce a single log line, not one per event."""
        caplog.set_level(logging.INFO, logger="cuaca.display")
        mock_get.return_value = [pygame.event.Event(pygame.QUIT), _key(pygame.K_ESCAPE)]
        display.handle_events()
        display.handle_events()

        quits = [r for r in caplog.records if r.getMessage().startswith("Quit requested")]
        assert len(quits) == 1


class TestUpdate:
    def test_frame_fills_window(self, display):
        display.update(Image.new("RGB", (120, 160), (255, 0, 0)))
        assert tuple(display.screen.get_at((0, 0)))[:3] == (255, 0, 0)

    def test_smaller_frame_is_centered(self, display):
        """Verify that a frame smaller than the window is centered on the background."""
        display.update(Image.new("RGB", (60, 80), (255, 0, 0)))
        assert tuple(display.screen.get_at((60, 80)))[:3] == (255, 0, 0)
        assert tuple(display.screen.get_at((0, 0)))[:3] == NIGHT


class TestRenderBootScreen:
    """Tests for render_boot_screen()."""

    def test_correct_dimensions(self):
        """Verify that the boot screen matches the requested pixel dimensions."""
        img = render_boot_screen("Loading...", width=480, height=640)
        assert img.size == (480, 640)

    def test_custom_dimensions(self):
        img = render_boot_screen("Loading...", width=800, height=480)
        assert img.size == (800, 480)

    def test_returns_rgb_image(self):
        img = render_boot_screen("Test status")
        assert isinstance(img, Image.Image)
        assert img.mode == "RGB"

    def test_text_drawn_on_background(self):
        """Verify that the boot screen contains pixels other than the background."""
        img = render_boot_screen("Memuat cuaca...")
        colors = {color for _, color in img.getcolors(maxcolors=1 << 20)}
        assert colors - {NIGHT}

    def test_custom_colors(self):
        img = render_boot_screen("Memuat cuaca...", background=(0, 0, 0), foreground=(255, 170, 0))
        assert img.getpixel((0, 0)) == (0, 0, 0)
