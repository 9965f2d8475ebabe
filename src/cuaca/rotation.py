"""Fixed-interval rotation timer driven by the main loop."""

from __future__ import annotations

import logging
import time
from typing import Callable

logger = logging.getLogger(__name__)


class RotationTimer:
    """Calls on_tick once per interval while started.

    The timer does not own a thread. The main loop calls poll() every
    frame and due ticks fire on the caller's thread, so tick handlers
    never run concurrently with rendering. Ticks stay on the
    start + n * interval grid, so a slow frame does not make the rotation
    drift, and each poll fires at most one tick.
    """

    def __init__(
        self,
        interval_seconds: float,
        on_tick: Callable[[], None],
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if interval_seconds <= 0:
            raise ValueError(f"interval_seconds must be positive, got {interval_seconds}")
        self.interval_seconds = interval_seconds
        self.on_tick = on_tick
        self.clock = clock
        self._next_tick: float | None = None

    @property
    def active(self) -> bool:
        return self._next_tick is not None

    def start(self) -> None:
        """Arm the timer. Restarting an active timer resets its schedule."""
        self._next_tick = self.clock() + self.interval_seconds
        logger.debug("Rotation timer started (interval=%.1fs)", self.interval_seconds)

    def stop(self) -> None:
        """Release the timer. No tick fires after this returns."""
        if self._next_tick is not None:
            logger.debug("Rotation timer stopped")
        self._next_tick = None

    def poll(self) -> int:
        """Fire at most one due tick and return how many fired (0 or 1).

        Slots missed during a stall are skipped, not replayed: the next
        tick is re-armed to the first slot after now, so a slow frame
        never turns into a burst of rotations.
        """
        if self._next_tick is None:
            return 0
        now = self.clock()
        if now < self._next_tick:
            return 0
        missed = -1
        while self._next_tick <= now:
            self._next_tick += self.interval_seconds
            missed += 1
        if missed:
            logger.debug("Rotation timer skipped %d missed tick(s)", missed)
        self.on_tick()
        return 1
