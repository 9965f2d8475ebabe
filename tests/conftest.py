"""Shared fixtures: sample OpenWeather responses, fake executors and clocks."""

from concurrent.futures import Future

import pytest


@pytest.fixture
def sample_weather_raw():
    """A full /data/2.5/weather response for Yogyakarta with rain, no snow."""
    return {
        "coord": {"lon": 110.3695, "lat": -7.7956},
        "weather": [
            {"id": 500, "main": "Rain", "description": "light rain", "icon": "10d"}
        ],
        "base": "stations",
        "main": {
            "temp": 300.15,
            "feels_like": 303.71,
            "temp_min": 299.62,
            "temp_max": 301.02,
            "pressure": 1009,
            "humidity": 79,
            "sea_level": 1009,
            "grnd_level": 995,
        },
        "visibility": 10000,
        "wind": {"speed": 2.57, "deg": 230, "gust": 4.12},
        "rain": {"1h": 2.5},
        "clouds": {"all": 75},
        "dt": 1717135200,
        "sys": {
            "type": 1,
            "id": 9364,
            "country": "ID",
            "sunrise": 1717109460,
            "sunset": 1717151700,
        },
        "timezone": 25200,
        "id": 1621177,
        "name": "Yogyakarta",
        "cod": 200,
    }


@pytest.fixture
def sample_weather_dry(sample_weather_raw):
    """Same response without rain and without wind gust."""
    raw = dict(sample_weather_raw)
    del raw["rain"]
    raw["wind"] = {"speed": 1.2, "deg": 90}
    raw["weather"] = [
        {"id": 803, "main": "Clouds", "description": "broken clouds", "icon": "04n"}
    ]
    return raw


@pytest.fixture
def sample_config_yaml(tmp_path):
    """Create a temporary YAML config file."""
    yaml_content = """api:
  api_key: "yaml-key"
  timeout_seconds: 5

rotation:
  interval_seconds: 8

display:
  width: 800
  height: 480
  fullscreen: true
  fps: 15
  background_color: [0, 0, 0]
  text_color: [255, 170, 0]

fonts:
  title_size: 40
"""
    config_file = tmp_path / "config.yaml"
    config_file.write_text(yaml_content)
    return str(config_file)


class SyncExecutor:
    """Runs submitted calls immediately; futures are done on return."""

    def __init__(self):
        self.calls = []

    def submit(self, fn, *args, **kwargs):
        self.calls.append(args)
        future = Future()
        try:
            future.set_result(fn(*args, **kwargs))
        except Exception as exc:
            future.set_exception(exc)
        return future


class ManualExecutor:
    """Holds submitted calls until the test runs them, in any order."""

    def __init__(self):
        self.jobs = []

    def submit(self, fn, *args, **kwargs):
        future = Future()
        self.jobs.append((fn, args, kwargs, future))
        return future

    def run(self, index):
        fn, args, kwargs, future = self.jobs[index]
        try:
            future.set_result(fn(*args, **kwargs))
        except Exception as exc:
            future.set_exception(exc)


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def sync_executor():
    return SyncExecutor()


@pytest.fixture
def manual_executor():
    return ManualExecutor()


@pytest.fixture
def clock():
    return FakeClock()
