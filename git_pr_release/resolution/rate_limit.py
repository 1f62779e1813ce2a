"""Client-side pacing for GitHub search requests."""

import time
from collections.abc import Callable
from typing import Protocol

DEFAULT_SEARCH_INTERVAL = 1.0  # seconds between search requests


class RateLimiter(Protocol):
    """Blocks until the next request may be issued."""

    def acquire(self) -> None: ...


class IntervalRateLimiter:
    """Enforces a minimum interval between consecutive requests.

    The first request also waits a full interval, so back-to-back runs stay
    paced. The clock and sleep functions are injectable so tests can simulate
    time.

    Example:
        >>> limiter = IntervalRateLimiter(interval=1.0)
        >>> limiter.acquire()  # sleeps 1s
        >>> limiter.acquire()  # sleeps whatever remains of the next 1s
    """

    def __init__(
        self,
        interval: float = DEFAULT_SEARCH_INTERVAL,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if interval < 0:
            msg = f"Interval must be non-negative, got {interval}"
            raise ValueError(msg)
        self.interval = interval
        self.clock = clock
        self.sleep = sleep
        self._last: float | None = None

    def acquire(self) -> None:
        now = self.clock()
        wait = self.interval if self._last is None else self._last + self.interval - now
        if wait > 0:
            self.sleep(wait)
            now = self.clock()
        self._last = now
