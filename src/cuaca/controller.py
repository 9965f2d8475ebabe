"""Fetch-and-rotate controller: owns the cursor and the current ViewState."""

from __future__ import annotations

import logging
import time
from concurrent.futures import Executor, Future
from typing import Callable, Sequence

from cuaca.api import OpenWeatherClient
from cuaca.models import Error, Loading, Location, Ready, ViewState
from cuaca.rotation import RotationTimer

logger = logging.getLogger(__name__)

# Single user-facing message for every fetch failure
FETCH_ERROR_MESSAGE = "Could not fetch weather data. Please try again."


class WeatherController:
    """Rotates through a fixed location list and fetches weather for each.

    Every cursor change starts exactly one fetch. Fetches run on the given
    executor; their results are applied by poll(), on the caller's thread.
    Each fetch gets a sequence number and only the result of the most
    recently started fetch is ever applied, so a slow response for an
    earlier location cannot overwrite a newer one.
    """

    def __init__(
        self,
        client: OpenWeatherClient,
        locations: Sequence[Location],
        executor: Executor,
        interval_seconds: float = 4.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if not locations:
            raise ValueError("at least one location is required")
        self.client = client
        self.locations = tuple(locations)
        self.executor = executor
        self.timer = RotationTimer(interval_seconds, self.advance, clock=clock)
        self.cursor = 0
        self.state: ViewState = Loading()
        self.mounted = False
        self._seq = 0
        self._pending: list[tuple[int, Location, Future]] = []

    @property
    def location(self) -> Location:
        return self.locations[self.cursor]

    def mount(self) -> None:
        """Show the first location, fetch it and start the rotation timer."""
        self.mounted = True
        self._select(0)
        self.timer.start()

    def advance(self) -> None:
        """Move the cursor to the next location, wrapping after the last."""
        if not self.mounted:
            return
        self._select((self.cursor + 1) % len(self.locations))
        logger.info("Rotated to %s", self.location.name)

    def poll(self) -> None:
        """Apply finished fetches, then fire due timer ticks."""
        self._collect()
        self.timer.poll()

    def teardown(self) -> None:
        """Stop the timer and drop pending fetches.

        In-flight requests are not cancelled; their results are discarded.
        """
        self.timer.stop()
        self.mounted = False
        if self._pending:
            logger.debug("Discarding %d pending fetch(es)", len(self._pending))
        self._pending.clear()
        logger.info("Controller torn down")

    def _select(self, index: int) -> None:
        self.cursor = index
        self._start_fetch(self.location)

    def _start_fetch(self, location: Location) -> None:
        self._seq += 1
        # No stale data while refreshing
        self.state = Loading()
        logger.debug("Fetching weather for %s (seq=%d) ...", location.name, self._seq)
        future = self.executor.submit(self._timed_fetch, location)
        self._pending.append((self._seq, location, future))

    def _timed_fetch(self, location: Location):
        t0 = time.time()
        snapshot = self.client.fetch_snapshot(location)
        logger.info("Fetched weather for %s (%.1fs)", location.name, time.time() - t0)
        return snapshot

    def _collect(self) -> None:
        still_pending = []
        for seq, location, future in self._pending:
            if not future.done():
                still_pending.append((seq, location, future))
                continue
            if seq != self._seq:
                logger.debug("Discarding stale result for %s (seq=%d)", location.name, seq)
                continue
            self._resolve(location, future)
        self._pending = still_pending

    def _resolve(self, location: Location, future: Future) -> None:
        try:
            snapshot = future.result()
        except Exception:
            logger.warning("Failed to fetch weather for %s", location.name, exc_info=True)
            self.state = Error(FETCH_ERROR_MESSAGE)
            return
        self.state = Ready(snapshot)
