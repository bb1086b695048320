"""Monotonic stopwatch used to time operations."""

import time
from collections.abc import Callable
from datetime import timedelta


class Stopwatch:
    """Measures elapsed time against a monotonic clock.

    The stopwatch runs from construction (or ``start_new``) until ``stop`` is
    called; afterwards ``elapsed`` is frozen. Stopping twice keeps the first
    reading.
    """

    def __init__(self, clock: Callable[[], float] | None = None) -> None:
        """
        Initialize and start the stopwatch.

        Args:
            clock: Optional time provider in seconds for testing
                (defaults to time.perf_counter).
        """
        self._clock = clock or time.perf_counter
        self._started = self._clock()
        self._stopped: float | None = None

    @classmethod
    def start_new(cls, clock: Callable[[], float] | None = None) -> "Stopwatch":
        return cls(clock)

    @property
    def is_running(self) -> bool:
        return self._stopped is None

    def stop(self) -> None:
        if self._stopped is None:
            self._stopped = self._clock()

    @property
    def elapsed_seconds(self) -> float:
        end = self._clock() if self._stopped is None else self._stopped
        return max(end - self._started, 0.0)

    @property
    def elapsed_ms(self) -> float:
        return self.elapsed_seconds * 1000.0

    @property
    def elapsed(self) -> timedelta:
        return timedelta(seconds=self.elapsed_seconds)
