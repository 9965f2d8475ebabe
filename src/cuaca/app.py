"""Main application loop: rotate, fetch, render, display."""

from __future__ import annotations

import logging
import signal
import time
from concurrent.futures import ThreadPoolExecutor

try:
    import sdnotify
except ImportError:
    sdnotify = None

from cuaca.api import OpenWeatherClient
from cuaca.config import Config
from cuaca.controller import WeatherController
from cuaca.display import WeatherDisplay, render_boot_screen
from cuaca.models import LOCATIONS
from cuaca.renderer import WeatherRenderer

logger = logging.getLogger(__name__)


class WeatherBoardApp:
    """Owns the controller, renderer and Pygame window for one session."""

    def __init__(self, config: Config) -> None:
        """Initialize the weather board application.

        Args:
            config: Fully assembled application configuration.
        """
        self.config = config
        self.client = OpenWeatherClient(config.api)
        # Each location gets its own worker so a slow request never delays
        # the fetch started by the next rotation.
        self.executor = ThreadPoolExecutor(
            max_workers=len(LOCATIONS), thread_name_prefix="cuaca-fetch"
        )
        self.controller = WeatherController(
            self.client,
            LOCATIONS,
            self.executor,
            interval_seconds=config.rotation.interval_seconds,
        )
        self.renderer = WeatherRenderer(
            width=config.display.width,
            height=config.display.height,
            font_title=config.fonts.font_title,
            font_main=config.fonts.font_main,
            title_size=config.fonts.title_size,
            main_size=config.fonts.main_size,
            background_color=config.display.background_color,
            text_color=config.display.text_color,
        )
        self.display = WeatherDisplay(config.display)
        self.frame_interval = 1.0 / config.display.fps
        self._running = False
        # sd-notify: no-op if sdnotify not installed or NOTIFY_SOCKET not set
        self._notifier = sdnotify.SystemdNotifier() if sdnotify else None

    def _notify(self, state: str) -> None:
        """Send a notification to systemd (no-op outside systemd)."""
        if self._notifier:
            self._notifier.notify(state)

    def _show_boot(self, status: str) -> None:
        self._notify(f"STATUS={status}")
        display = self.config.display
        img = render_boot_screen(
            status, display.width, display.height, display.background_color, display.text_color
        )
        self.display.update(img)
        self.display.handle_events()

    def run(self) -> None:
        """Run the main application loop until the window closes or SIGTERM."""
        signal.signal(signal.SIGTERM, lambda *_: setattr(self, "_running", False))
        try:
            logger.info(
                "Starting WeatherBoardApp with %d location(s), rotation=%.1fs",
                len(LOCATIONS),
                self.config.rotation.interval_seconds,
            )
            self._show_boot("Memuat cuaca...")

            self.controller.mount()
            self._notify("READY=1")
            self._notify("STATUS=Running")
            logger.info("Entering main loop")
            self._running = True
            while self._running:
                if not self.display.handle_events():
                    break

                self.controller.poll()
                img = self.renderer.render(self.controller.state)
                self.display.update(img)
                self._notify("WATCHDOG=1")
                time.sleep(self.frame_interval)
        finally:
            self._notify("STOPPING=1")
            self.controller.teardown()
            # In-flight requests finish in the background; their results are dropped
            self.executor.shutdown(wait=False)
            self.display.close()
