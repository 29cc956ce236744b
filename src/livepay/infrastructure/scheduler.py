"""Expiration Scheduler: the recurring background sweep.

Runs the expiration handler, then the reminder handler, every
``interval`` seconds on one daemon thread.  Ticks never overlap: a tick
that finds the previous one still running is skipped.  Because deadlines
are stored on the orders, a restarted process simply picks up every
overdue hold on its first tick.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

logger = logging.getLogger(__name__)

Tick = Callable[[], object]


class ExpirationScheduler:

    def __init__(self, ticks: list[Tick], interval: float = 30.0) -> None:
        if interval <= 0:
            raise ValueError("Scheduler interval must be positive")
        self._ticks = ticks
        self._interval = interval
        self._running = threading.Lock()
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def interval(self) -> float:
        return self._interval

    def run_once(self) -> bool:
        """Run one tick now; return False if a tick was already in progress."""
        if not self._running.acquire(blocking=False):
            logger.warning("Previous sweep still running, skipping tick")
            return False
        try:
            for tick in self._ticks:
                tick()
            return True
        finally:
            self._running.release()

    def start(self) -> None:
        if self._thread is not None and self._thread.is_alive():
            return
        self._stop.clear()
        self._thread = threading.Thread(
            target=self._loop, name="livepay-expiration", daemon=True
        )
        self._thread.start()
        logger.info("Expiration scheduler started (every %.1fs)", self._interval)

    def stop(self, timeout: float | None = None) -> None:
        """Signal the loop and wait for the current tick to finish."""
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None
        logger.info("Expiration scheduler stopped")

    def _loop(self) -> None:
        while not self._stop.is_set():
            try:
                self.run_once()
            except Exception:
                logger.exception("Expiration sweep failed")
            self._stop.wait(self._interval)
