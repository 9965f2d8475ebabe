"""OpenWeather current-weather API client."""

from __future__ import annotations

import threading

import requests

from cuaca.config import ApiConfig
from cuaca.models import Location, WeatherSnapshot, parse_snapshot


class OpenWeatherClient:
    """Client for the OpenWeather "current weather by coordinates" endpoint."""

    def __init__(self, config: ApiConfig) -> None:
        """Initialize the OpenWeather API client.

        The API key is taken from the passed config rather than the
        environment, so tests and tools can inject fake keys and endpoints.

        Args:
            config: API settings (key, endpoint URL, timeout).
        """
        self.config = config
        self._local = threading.local()

    @property
    def session(self) -> requests.Session:
        """HTTP session for the calling thread.

        Fetches run on several executor threads at once and a
        requests.Session is not thread-safe, so each thread gets its own.
        """
        session = getattr(self._local, "session", None)
        if session is None:
            session = requests.Session()
            session.headers.update({"Accept": "application/json"})
            self._local.session = session
        return session

    def get_current(self, lat: float, lon: float) -> dict:
        """Fetch the raw current-weather JSON for a coordinate pair.

        GET /data/2.5/weather?lat=..&lon=..&appid=..
        Raises requests.HTTPError on non-2xx responses.
        """
        # No 'units' parameter: the API answers in Kelvin (standard units)
        params = {
            "lat": lat,
            "lon": lon,
            "appid": self.config.api_key,
        }
        resp = self.session.get(
            self.config.base_url,
            params=params,
            timeout=self.config.timeout_seconds,
        )
        resp.raise_for_status()
        return resp.json()

    def fetch_snapshot(self, location: Location) -> WeatherSnapshot:
        """Fetch and parse current weather for a location."""
        raw = self.get_current(location.latitude, location.longitude)
        return parse_snapshot(raw, location.name)
