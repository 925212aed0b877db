"""Process-wide spacing for requests to rate-limited public services."""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class RequestThrottle:
    """Keeps successive requests at least ``min_interval_seconds`` apart.

    The last request time survives across calls and threads, so every caller
    sharing one instance shares the same budget. Waiting happens under the
    lock, which serializes concurrent callers.
    """

    def __init__(
        self,
        min_interval_seconds: float,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.min_interval_seconds = min_interval_seconds
        self.clock = clock
        self.sleep = sleep
        self._lock = threading.Lock()
        self._last_request: Optional[float] = None

    def wait(self) -> float:
        """Block until the next request may go out and claim that slot. Returns the delay slept."""
        with self._lock:
            now = self.clock()
            delay = 0.0
            if self._last_request is not None:
                delay = self._last_request + self.min_interval_seconds - now
            if delay > 0:
                logger.debug("Throttling request for %.2fs", delay)
                self.sleep(delay)
                now = self.clock()
            else:
                delay = 0.0
            self._last_request = now
        return delay
