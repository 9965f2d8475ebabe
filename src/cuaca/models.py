"""Data models for OpenWeather current-weather data."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Union

# Kelvin offset for 0 °C
ZERO_CELSIUS = 273.15

# Provider icon template. Icons are referenced, never downloaded.
ICON_URL = "https://openweathermap.org/img/wn/{icon}@2x.png"


@dataclass(frozen=True)
class Location:
    name: str
    latitude: float
    longitude: float


# The five regencies/cities of the Special Region of Yogyakarta, in rotation order
LOCATIONS: tuple[Location, ...] = (
    Location("Yogyakarta", -7.7956, 110.3695),
    Location("Sleman", -7.715298, 110.355308),
    Location("Bantul", -7.922842, 110.328535),
    Location("Gunungkidul", -8.027008, 110.616875),
    Location("Kulon Progo", -7.828017, 110.157096),
)


@dataclass
class WeatherSnapshot:
    """Weather fields retrieved for one location at one point in time.

    Temperatures are kept in Kelvin as delivered by the API; conversion
    happens at render time. rain_1h and snow_1h are None when the API
    omits the corresponding object, which is not the same as 0 mm.
    """

    city: str
    temperature: float    # K
    feels_like: float     # K
    temp_min: float       # K
    temp_max: float       # K
    description: str
    icon: str
    humidity: int         # %
    wind_speed: float     # m/s
    wind_gust: float | None  # m/s, only reported in gusty conditions
    wind_deg: int         # degrees
    pressure: int         # hPa
    sunrise: int          # Unix timestamp, UTC
    sunset: int           # Unix timestamp, UTC
    visibility: int | None  # m
    clouds: int           # %
    lat: float
    lon: float
    rain_1h: float | None = None  # mm over the last hour
    snow_1h: float | None = None  # mm over the last hour

    @property
    def icon_url(self) -> str:
        return ICON_URL.format(icon=self.icon)


def _last_hour(block: dict | None) -> float | None:
    if block is None:
        return None
    return block.get("1h")


def parse_snapshot(raw: dict, city: str) -> WeatherSnapshot:
    """Parse a raw OpenWeather /weather response into a WeatherSnapshot.

    Required blocks are indexed directly so a malformed body raises
    KeyError, IndexError or TypeError.
    """
    main = raw["main"]
    weather = raw["weather"][0]
    wind = raw["wind"]
    sys_block = raw["sys"]
    coord = raw["coord"]

    return WeatherSnapshot(
        city=city,
        temperature=main["temp"],
        feels_like=main["feels_like"],
        temp_min=main["temp_min"],
        temp_max=main["temp_max"],
        description=weather["description"],
        icon=weather["icon"],
        humidity=main["humidity"],
        wind_speed=wind["speed"],
        wind_gust=wind.get("gust"),
        wind_deg=wind["deg"],
        pressure=main["pressure"],
        sunrise=sys_block["sunrise"],
        sunset=sys_block["sunset"],
        visibility=raw.get("visibility"),
        clouds=raw["clouds"]["all"],
        lat=coord["lat"],
        lon=coord["lon"],
        rain_1h=_last_hour(raw.get("rain")),
        snow_1h=_last_hour(raw.get("snow")),
    )


def kelvin_to_celsius(kelvin: float) -> int:
    """Convert Kelvin to whole degrees Celsius, rounding halves up."""
    return math.floor(kelvin - ZERO_CELSIUS + 0.5)


def format_time(timestamp: int) -> str:
    """Local time of day (HH:MM:SS) for a Unix timestamp."""
    return datetime.fromtimestamp(timestamp).strftime("%H:%M:%S")


@dataclass(frozen=True)
class Loading:
    pass


@dataclass(frozen=True)
class Error:
    message: str


@dataclass(frozen=True)
class Ready:
    snapshot: WeatherSnapshot


ViewState = Union[Loading, Error, Ready]
