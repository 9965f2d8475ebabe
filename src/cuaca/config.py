"""Configuration loading: defaults → YAML overlay → environment → argparse overlay."""

from __future__ import annotations

import argparse
import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml
from dotenv import load_dotenv

# Environment setting holding the OpenWeather API key
API_KEY_ENV = "OPENWEATHER_API_KEY"


@dataclass
class ApiConfig:
    """OpenWeather API settings.

    Attributes:
        api_key: OpenWeather API key sent as the 'appid' query parameter.
            Normally supplied through the OPENWEATHER_API_KEY environment
            setting or a .env file. An empty key is not rejected; requests
            simply fail with 401 and the board shows its error message.
        base_url: "Current weather by coordinates" endpoint.
        timeout_seconds: HTTP timeout per request.
    """

    api_key: str = ""
    base_url: str = "https://api.openweathermap.org/data/2.5/weather"
    timeout_seconds: int = 10


@dataclass
class RotationConfig:
    """Location rotation settings.

    Attributes:
        interval_seconds: Seconds each location stays on screen before the
            board advances to the next one and fetches its weather.
    """

    interval_seconds: float = 4.0


@dataclass
class DisplayConfig:
    """Pygame window settings.

    Attributes:
        width: Window width in pixels.
        height: Window height in pixels. Font sizes scale relative to a
            640px base.
        fullscreen: Run in fullscreen mode (kiosk setups).
        fps: Target frames per second for the main loop. Also bounds how
            quickly finished fetches and timer ticks are picked up.
        background_color: RGB background color as [R, G, B].
        text_color: RGB text color as [R, G, B].
    """

    width: int = 480
    height: int = 640
    fullscreen: bool = False
    fps: int = 30
    # Night sky blue
    background_color: list[int] = field(default_factory=lambda: [16, 24, 48])
    text_color: list[int] = field(default_factory=lambda: [240, 240, 240])


@dataclass
class FontConfig:
    """Font files and base sizes.

    Fonts are loaded from the project fonts/ directory; Pillow's built-in
    font is used when a file is missing.
    """

    font_title: str = "JetBrainsMono-Bold.ttf"
    font_main: str = "JetBrainsMono-Medium.ttf"
    # Base size for the city name and temperature
    title_size: int = 36
    # Base size for detail lines
    main_size: int = 18


@dataclass
class Config:
    """Top-level application configuration.

    Assembled from four layers with increasing priority:
      1. Hardcoded defaults (dataclass field values)
      2. YAML file overlay (config.yaml or --config path)
      3. OPENWEATHER_API_KEY from the environment (or .env)
      4. CLI argument overlay (--api-key, --rotation, etc.)

    The location list is fixed (see cuaca.models.LOCATIONS) and is not
    part of the configuration.
    """

    api: ApiConfig = field(default_factory=ApiConfig)
    rotation: RotationConfig = field(default_factory=RotationConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    fonts: FontConfig = field(default_factory=FontConfig)
    # CLI-only flags (not persisted in YAML)
    fetch_test: bool = False
    render_test: bool = False
    debug: bool = False


def _apply_yaml(config: Config, yaml_path: str) -> None:
    """Overlay YAML config values onto the Config object."""
    if not os.path.exists(yaml_path):
        return

    with open(yaml_path, "r") as f:
        data = yaml.safe_load(f)

    if not data:
        return

    if "api" in data:
        a = data["api"]
        for key in ("api_key", "base_url", "timeout_seconds"):
            if key in a:
                setattr(config.api, key, a[key])

    if "rotation" in data:
        rot = data["rotation"]
        if "interval_seconds" in rot:
            config.rotation.interval_seconds = rot["interval_seconds"]

    if "display" in data:
        d = data["display"]
        for key in ("width", "height", "fullscreen", "fps", "background_color", "text_color"):
            if key in d:
                setattr(config.display, key, d[key])

    if "fonts" in data:
        fonts = data["fonts"]
        for key in ("font_title", "font_main", "title_size", "main_size"):
            if key in fonts:
                setattr(config.fonts, key, fonts[key])


def _apply_env(config: Config) -> None:
    """Overlay the API key from the environment, reading .env if present."""
    load_dotenv()
    api_key = os.getenv(API_KEY_ENV)
    if api_key:
        config.api.api_key = api_key


def _build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser.

    All arguments are optional overlays on top of YAML and environment.
    """
    parser = argparse.ArgumentParser(
        prog="cuaca",
        description="Rotating weather board for Yogyakarta",
    )
    parser.add_argument(
        "--config",
        type=str,
        help="Path to YAML config file",
    )
    parser.add_argument(
        "--api-key",
        type=str,
        help=f"OpenWeather API key (default: ${API_KEY_ENV})",
    )
    parser.add_argument(
        "--fullscreen",
        action="store_true",
        default=None,
        help="Run in fullscreen mode",
    )
    parser.add_argument(
        "--rotation",
        type=float,
        help="Rotation interval in seconds",
    )
    parser.add_argument(
        "--fetch-test",
        action="store_true",
        default=False,
        help="Fetch every location once and print the weather to stdout",
    )
    parser.add_argument(
        "--render-test",
        action="store_true",
        default=False,
        help="Render a sample snapshot to assets/test_output.png",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Enable debug logging",
    )
    return parser


def _apply_args(config: Config, args: argparse.Namespace) -> None:
    """Overlay CLI arguments onto the Config object."""
    if args.api_key:
        config.api.api_key = args.api_key

    if args.fullscreen is True:
        config.display.fullscreen = True

    if args.rotation is not None:
        config.rotation.interval_seconds = args.rotation

    config.fetch_test = args.fetch_test
    config.render_test = args.render_test
    config.debug = args.debug


def load_config(
    yaml_path: str | None = None,
    cli_args: list[str] | None = None,
) -> Config:
    """Load config: defaults → YAML → environment → argparse.

    Args:
        yaml_path: Path to YAML config file. Defaults to config.yaml in project root.
        cli_args: CLI arguments list. None means use sys.argv.
    """
    config = Config()

    parser = _build_parser()
    args = parser.parse_args(cli_args if cli_args is not None else None)

    # Default YAML path: config.yaml in project root (three levels up from
    # this file). CLI --config overrides.
    if yaml_path is None:
        if args.config:
            yaml_path = args.config
        else:
            yaml_path = os.path.join(
                Path(__file__).resolve().parent.parent.parent, "config.yaml"
            )

    _apply_yaml(config, yaml_path)
    _apply_env(config)
    _apply_args(config, args)

    return config
