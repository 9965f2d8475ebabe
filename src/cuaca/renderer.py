"""PIL-based weather card renderer.

Turns a ViewState into a PIL Image: a loading indicator, an error
message, or a card with every field of a WeatherSnapshot. The text
content is produced by view_lines() so it can be printed or tested
without drawing.
"""

from __future__ import annotations

import logging
from pathlib import Path

from PIL import Image, ImageDraw, ImageFont

from cuaca.models import (
    Error,
    Loading,
    Ready,
    ViewState,
    WeatherSnapshot,
    format_time,
    kelvin_to_celsius,
)

logger = logging.getLogger(__name__)

# Project root (three levels up from this file)
_ROOT = Path(__file__).resolve().parent.parent.parent
_FONTS_DIR = _ROOT / "fonts"

LOADING_TEXT = "Loading..."

# Reference height for font and padding scaling
BASE_HEIGHT = 640


def _optional(value, unit: str) -> str:
    if value is None:
        return "n/a"
    return f"{value} {unit}"


def snapshot_lines(snapshot: WeatherSnapshot) -> list[str]:
    """Detail lines for a snapshot, in display order.

    Rain and snow lines appear only when the API reported them.
    """
    lines = [
        f"Feels Like: {kelvin_to_celsius(snapshot.feels_like)}°C",
        f"Min Temp: {kelvin_to_celsius(snapshot.temp_min)}°C",
        f"Max Temp: {kelvin_to_celsius(snapshot.temp_max)}°C",
        f"Humidity: {snapshot.humidity}%",
        f"Wind Speed: {snapshot.wind_speed} m/s",
        f"Wind Gust: {_optional(snapshot.wind_gust, 'm/s')}",
        f"Wind Direction: {snapshot.wind_deg}°",
        f"Pressure: {snapshot.pressure} hPa",
    ]
    if snapshot.rain_1h is not None:
        lines.append(f"Rain (1h): {snapshot.rain_1h} mm")
    if snapshot.snow_1h is not None:
        lines.append(f"Snow (1h): {snapshot.snow_1h} mm")
    lines += [
        f"Visibility: {_optional(snapshot.visibility, 'm')}",
        f"Cloudiness: {snapshot.clouds}%",
        f"Sunrise: {format_time(snapshot.sunrise)}",
        f"Sunset: {format_time(snapshot.sunset)}",
    ]
    return lines


def view_lines(state: ViewState) -> list[str]:
    """Full text content of a view, header first."""
    if isinstance(state, Loading):
        return [LOADING_TEXT]
    if isinstance(state, Error):
        return [state.message]
    snapshot = state.snapshot
    return [
        snapshot.city,
        f"Lat: {snapshot.lat}, Lon: {snapshot.lon}",
        f"Icon: {snapshot.icon_url}",
        f"{kelvin_to_celsius(snapshot.temperature)}°C",
        snapshot.description,
        *snapshot_lines(snapshot),
    ]


def load_font(name: str, size: int) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    try:
        return ImageFont.truetype(str(_FONTS_DIR / name), size)
    except OSError:
        # Falls back to Pillow's built-in font if the .ttf is missing
        return ImageFont.load_default(size)


class WeatherRenderer:
    """Renders a ViewState as a PIL Image.

    Loading and Error states draw a single centered line. Ready draws a
    card: city name, coordinates and icon reference at the top, the
    temperature and description below, then one detail line per field.
    """

    def __init__(
        self,
        width: int = 480,
        height: int = 640,
        font_title: str = "JetBrainsMono-Bold.ttf",
        font_main: str = "JetBrainsMono-Medium.ttf",
        title_size: int = 36,
        main_size: int = 18,
        background_color: tuple[int, int, int] = (16, 24, 48),
        text_color: tuple[int, int, int] = (240, 240, 240),
    ) -> None:
        """Initialize the renderer.

        Args:
            width: Image width in pixels.
            height: Image height in pixels. Font sizes and padding scale
                relative to a 640px base.
            font_title: Font file for the city name and temperature.
            font_main: Font file for coordinates, description and details.
            title_size: Base font size for the city name and temperature.
            main_size: Base font size for all other lines.
            background_color: RGB background.
            text_color: RGB foreground.
        """
        self.width = width
        self.height = height
        self.scale = height / BASE_HEIGHT
        self.pad = max(2, round(16 * self.scale))
        self.background = tuple(background_color)
        self.foreground = tuple(text_color)
        self.font_title = load_font(font_title, max(6, round(title_size * self.scale)))
        self.font_main = load_font(font_main, max(6, round(main_size * self.scale)))
        # Dimmed foreground for secondary lines (coordinates, icon URL)
        self.dim = tuple(c // 2 + b // 2 for c, b in zip(self.foreground, self.background))

    def render(self, state: ViewState) -> Image.Image:
        """Render the given view state to a new image."""
        img = Image.new("RGB", (self.width, self.height), self.background)
        draw = ImageDraw.Draw(img)

        if isinstance(state, Ready):
            self._draw_card(draw, state.snapshot)
        else:
            self._draw_centered(draw, view_lines(state)[0])
        return img

    def _line_height(self, font) -> int:
        bbox = font.getbbox("Ag")
        return bbox[3] - bbox[1] + max(2, round(6 * self.scale))

    def _draw_centered(self, draw: ImageDraw.ImageDraw, text: str) -> None:
        bbox = draw.textbbox((0, 0), text, font=self.font_main)
        x = (self.width - (bbox[2] - bbox[0])) // 2
        y = (self.height - (bbox[3] - bbox[1])) // 2
        draw.text((x, y), text, fill=self.foreground, font=self.font_main)

    def _draw_line(self, draw: ImageDraw.ImageDraw, y: int, text: str, font, fill) -> None:
        """Draw one horizontally centered line with its top at y."""
        bbox = draw.textbbox((0, 0), text, font=font)
        draw.text(((self.width - (bbox[2] - bbox[0])) // 2, y), text, fill=fill, font=font)

    def _wrap(self, text: str, font, max_width: int) -> list[str]:
        """Split text into pieces no wider than max_width.

        Breaks after the last space that fits, or mid-word when a piece
        has no space (URLs). The pieces join back to the original text.
        """
        pieces = []
        current = ""
        for ch in text:
            while current and font.getlength(current + ch) > max_width:
                cut = current.rfind(" ") + 1
                if 0 < cut < len(current):
                    pieces.append(current[:cut])
                    current = current[cut:]
                else:
                    pieces.append(current)
                    current = ""
            current += ch
        if current:
            pieces.append(current)
        return pieces

    def _draw_card(self, draw: ImageDraw.ImageDraw, snapshot: WeatherSnapshot) -> None:
        lines = view_lines(Ready(snapshot))
        city, coords, icon, temp, description = lines[:5]
        max_width = self.width - 2 * self.pad
        y = self.pad

        # (text, font, fill, extra gap below)
        header = [
            (city, self.font_title, self.foreground, 0),
            (coords, self.font_main, self.dim, 0),
            # Icon is shown by reference only
            (icon, self.font_main, self.dim, self.pad),
            (temp, self.font_title, self.foreground, 0),
            (description, self.font_main, self.foreground, self.pad),
        ]
        for text, font, fill, gap in header:
            for piece in self._wrap(text, font, max_width):
                self._draw_line(draw, y, piece, font, fill)
                y += self._line_height(font)
            y += gap

        step = self._line_height(self.font_main)
        details = [p for line in lines[5:] for p in self._wrap(line, self.font_main, max_width)]
        for drawn, line in enumerate(details):
            if y + step > self.height:
                logger.debug(
                    "Card cut off: %d of %d detail lines do not fit %dx%d",
                    len(details) - drawn,
                    len(details),
                    self.width,
                    self.height,
                )
                break
            draw.text((self.pad, y), line, fill=self.foreground, font=self.font_main)
            y += step


def sample_snapshot() -> WeatherSnapshot:
    """A fixed snapshot for render tests and previews."""
    return WeatherSnapshot(
        city="Yogyakarta",
        temperature=301.15,
        feels_like=304.15,
        temp_min=300.15,
        temp_max=302.15,
        description="light rain",
        icon="10d",
        humidity=78,
        wind_speed=2.6,
        wind_gust=4.1,
        wind_deg=230,
        pressure=1009,
        sunrise=1717109460,
        sunset=1717151700,
        visibility=10000,
        clouds=75,
        lat=-7.7956,
        lon=110.3695,
        rain_1h=2.5,
    )


def run_render_test(config=None) -> str:
    """Render the sample snapshot to assets/test_output.png and return the path."""
    if config is not None:
        renderer = WeatherRenderer(
            width=config.display.width,
            height=config.display.height,
            font_title=config.fonts.font_title,
            font_main=config.fonts.font_main,
            title_size=config.fonts.title_size,
            main_size=config.fonts.main_size,
            background_color=config.display.background_color,
            text_color=config.display.text_color,
        )
    else:
        renderer = WeatherRenderer()

    img = renderer.render(Ready(sample_snapshot()))
    assets_dir = _ROOT / "assets"
    assets_dir.mkdir(exist_ok=True)
    output_path = str(assets_dir / "test_output.png")
    img.save(output_path)
    return output_path
