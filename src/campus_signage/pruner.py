"""Periodic pruning of expired events."""
from __future__ import annotations

import logging
import threading
from typing import Optional

from .lifecycle import EventLifecycleManager

logger = logging.getLogger(__name__)


class PruneLoop:
    """
    Loads the events once, then re-fetches and prunes every ``interval``
    seconds until stopped. Re-fetching each pass picks up events created by
    other admin sessions.

    Passes are best-effort: an exception inside one pass is logged and the
    loop keeps going.
    """

    def __init__(self, manager: EventLifecycleManager, interval: float = 60):
        self.manager = manager
        self.interval = interval
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self.passes = 0

    def run_once(self) -> int:
        """Single pass: re-sync with the store, then prune."""
        self.passes += 1
        try:
            self.manager.fetch_events(prune=False)
            deleted = self.manager.prune_expired()
        except Exception as e:
            logger.exception(f"Prune pass {self.passes} failed: {e}")
            return 0
        logger.info(f"Prune pass {self.passes}: {deleted} expired event(s) processed")
        return deleted

    def run_forever(self) -> None:
        logger.info(f"Prune loop started (every {self.interval}s)")
        try:
            self.manager.fetch_events()
        except Exception as e:
            logger.exception(f"Initial load failed: {e}")
        while not self._stop.wait(self.interval):
            self.run_once()
        logger.info("Prune loop stopped")

    def start(self) -> threading.Thread:
        if self._thread is not None and self._thread.is_alive():
            return self._thread
        self._stop.clear()
        self._thread = threading.Thread(target=self.run_forever, name="prune-loop", daemon=True)
        self._thread.start()
        return self._thread

    def stop(self, timeout: Optional[float] = None) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None

    @property
    def stopped(self) -> bool:
        return self._stop.is_set()
