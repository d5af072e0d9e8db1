"""Elapsed-time source used to measure suite duration."""

import time
from typing import Callable, Optional


class Timer:
    """
    Millisecond stopwatch.

    Example:
        timer = Timer()
        timer.start()
        ...
        duration_ms = timer.elapsed()
    """

    def __init__(self, now: Optional[Callable[[], float]] = None):
        """
        Args:
            now: Clock returning seconds; defaults to time.perf_counter
        """
        self._now = now or time.perf_counter
        self._started_at = self._now()

    def start(self) -> None:
        self._started_at = self._now()

    def elapsed(self) -> float:
        """Milliseconds since the last start()."""
        return (self._now() - self._started_at) * 1000.0
