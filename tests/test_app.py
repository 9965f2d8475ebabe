"""Tests for the main application loop with the Pygame window mocked out."""

from unittest.mock import MagicMock, patch

import pytest

from cuaca.app import WeatherBoardApp
from cuaca.config import Config
from cuaca.models import Error, Ready, parse_snapshot


@pytest.fixture
def app(sample_weather_raw, sync_executor):
    with patch("cuaca.app.WeatherDisplay") as display_cls, \
            patch("cuaca.app.OpenWeatherClient") as client_cls:
        display = display_cls.return_value
        # Boot screen pump, then two frames, then the window closes
        display.handle_events.side_effect = [True, True, True, False]
        client = client_cls.return_value
        client.fetch_snapshot.side_effect = lambda loc: parse_snapshot(sample_weather_raw, loc.name)
        app = WeatherBoardApp(Config())
        app._notifier = None
        # Run fetches inline so results are visible on the next frame
        app.controller.executor = sync_executor
        yield app


@patch("cuaca.app.time.sleep")
def test_run_mounts_and_tears_down(mock_sleep, app):
    app.run()

    assert app.client.fetch_snapshot.call_count == 1
    assert app.controller.mounted is False
    assert app.controller.timer.active is False
    app.display.close.assert_called_once()


@patch("cuaca.app.time.sleep")
def test_frames_show_rendered_state(mock_sleep, app):
    app.run()

    # Boot screen plus one image per frame
    assert app.display.update.call_count == 3


@patch("cuaca.app.time.sleep")
def test_failed_fetch_keeps_running(mock_sleep, app):
    app.client.fetch_snapshot.side_effect = ConnectionError("down")
    rendered = []
    app.renderer = MagicMock()
    app.renderer.render.side_effect = lambda state: rendered.append(state) or MagicMock()

    app.run()

    assert any(isinstance(state, Error) for state in rendered)
    assert not any(isinstance(state, Ready) for state in rendered)
    app.display.close.assert_called_once()
