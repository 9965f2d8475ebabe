"""Pygame window hosting the weather board, plus the boot splash."""

from __future__ import annotations

import logging

import pygame
from PIL import Image, ImageDraw

from cuaca.config import DisplayConfig
from cuaca.renderer import load_font

logger = logging.getLogger(__name__)

CAPTION = "Cuaca Yogyakarta"

# Keys that close the board, besides the window's close button
QUIT_KEYS = {pygame.K_ESCAPE: "Esc", pygame.K_q: "Q"}

# Defaults match DisplayConfig
NIGHT = (16, 24, 48)
WHITE = (240, 240, 240)


class WeatherDisplay:
    """Window the frame loop blits rendered frames into.

    A quit request is sticky: once the window is closed or a quit key is
    pressed, every later handle_events() call returns False, so a request
    made while the boot screen is up is not lost.
    """

    def __init__(self, config: DisplayConfig) -> None:
        pygame.init()
        flags = pygame.FULLSCREEN if config.fullscreen else 0
        self.screen = pygame.display.set_mode((config.width, config.height), flags)
        pygame.display.set_caption(CAPTION)
        # Kiosk mode: no pointer over the board
        pygame.mouse.set_visible(not config.fullscreen)
        self.background = tuple(config.background_color)
        self.quit_reason: str | None = None
        width, height = self.screen.get_size()
        logger.info(
            "Window opened at %dx%d%s", width, height, " (fullscreen)" if config.fullscreen else ""
        )

    def update(self, frame: Image.Image) -> None:
        """Show a rendered frame, centered when its size differs from the window."""
        surface = pygame.image.frombytes(frame.tobytes(), frame.size, frame.mode)
        screen_w, screen_h = self.screen.get_size()
        if (screen_w, screen_h) != frame.size:
            self.screen.fill(self.background)
        self.screen.blit(surface, ((screen_w - frame.width) // 2, (screen_h - frame.height) // 2))
        pygame.display.flip()

    def handle_events(self) -> bool:
        """Drain the event queue. Returns False once a quit was requested."""
        for event in pygame.event.get():
            if self.quit_reason is not None:
                continue
            if event.type == pygame.QUIT:
                self.quit_reason = "window closed"
            elif event.type == pygame.KEYDOWN and event.key in QUIT_KEYS:
                self.quit_reason = f"{QUIT_KEYS[event.key]} pressed"
            else:
                continue
            logger.info("Quit requested: %s", self.quit_reason)
        return self.quit_reason is None

    def close(self) -> None:
        pygame.quit()


def render_boot_screen(
    status: str,
    width: int = 480,
    height: int = 640,
    background: tuple[int, int, int] = NIGHT,
    foreground: tuple[int, int, int] = WHITE,
) -> Image.Image:
    """Render a splash screen with the app title, a status line and the version."""
    from cuaca import __version__

    img = Image.new("RGB", (width, height), tuple(background))
    draw = ImageDraw.Draw(img)
    fill = tuple(foreground)

    title_font = load_font("JetBrainsMono-ExtraBold.ttf", int(width * 0.18))
    status_font = load_font("JetBrainsMono-Medium.ttf", int(width * 0.05))
    small_font = load_font("JetBrainsMono-Regular.ttf", int(width * 0.035))

    # Title centered slightly above the middle
    title = "Cuaca"
    tb = draw.textbbox((0, 0), title, font=title_font)
    ty = int(height * 0.35)
    draw.text(((width - (tb[2] - tb[0])) // 2, ty), title, fill=fill, font=title_font)

    sb = draw.textbbox((0, 0), status, font=status_font)
    sy = ty + (tb[3] - tb[1]) + int(height * 0.05)
    draw.text(((width - (sb[2] - sb[0])) // 2, sy), status, fill=fill, font=status_font)

    # Version bottom-right
    version_str = f"v{__version__}"
    vb = draw.textbbox((0, 0), version_str, font=small_font)
    margin = int(height * 0.02)
    draw.text(
        (width - (vb[2] - vb[0]) - margin, height - (vb[3] - vb[1]) - margin),
        version_str,
        fill=fill,
        font=small_font,
    )

    return img
