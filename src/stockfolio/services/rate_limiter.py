"""Throttling for outbound provider calls."""

import time
from typing import Callable


class RateLimiter:
    """
    Enforces a minimum interval between consecutive calls per key.

    Clock and sleep are injectable so tests can run against a fake clock.
    Not thread-safe; one limiter serves one sequential refresh loop.
    """

    def __init__(
        self,
        min_interval_seconds: float = 0.4,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self._min_interval = max(0.0, min_interval_seconds)
        self._clock = clock
        self._sleep = sleep
        self._last_call: dict[str, float] = {}

    def acquire(self, key: str) -> float:
        """Block until a call for key is allowed. Returns the seconds waited."""
        waited = 0.0
        last = self._last_call.get(key)
        if last is not None:
            remaining = self._min_interval - (self._clock() - last)
            if remaining > 0:
                self._sleep(remaining)
                waited = remaining
        self._last_call[key] = self._clock()
        return waited

    def pause(self, seconds: float) -> None:
        """Explicit fixed delay, e.g. between symbols of a batch."""
        if seconds > 0:
            self._sleep(seconds)
