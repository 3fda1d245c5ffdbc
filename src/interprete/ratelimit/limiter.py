"""Local admission gate.

Hidden design decisions:
- Clock source (injectable; monotonic by default)
- Order in which limits are evaluated
- Serialization of counter updates

The limiter owns no timer. Whoever owns its lifecycle must call
``reset_period`` once per period (see ``PeriodicReset``).
"""

import threading
import time
from collections.abc import Callable

from .models import RateWindow

SECONDS_PER_DAY = 86_400.0


class RateLimiter:
    """Counts admitted messages and refuses those that exceed the limits.

    Admission rules, evaluated in order:
    1. Less than ``min_interval`` seconds since the last admission: reject.
    2. ``max_per_period`` admissions already in this period: reject.
    3. ``max_per_day`` admissions already in this day window: reject.
    4. Otherwise count the admission and record its time.

    Thread-safe: every read-modify-write happens under a lock.
    """

    def __init__(
        self,
        max_per_period: int = 10,
        min_interval: float = 2.0,
        max_per_day: int | None = 100,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initialize the limiter.

        Args:
            max_per_period: Admissions allowed between two resets
            min_interval: Minimum seconds between admissions
            max_per_day: Admissions allowed per rolling day window (None disables)
            clock: Function returning the current time in seconds
        """
        if max_per_period < 1:
            raise ValueError("max_per_period must be at least 1")
        if min_interval < 0:
            raise ValueError("min_interval cannot be negative")

        self._max_per_period = max_per_period
        self._min_interval = min_interval
        self._max_per_day = max_per_day
        self._clock = clock
        self._lock = threading.Lock()
        self._count = 0
        self._daily_count = 0
        self._day_started_at: float | None = None
        self._last_admitted_at: float | None = None

    @property
    def max_per_period(self) -> int:
        return self._max_per_period

    @property
    def message_count(self) -> int:
        """Admissions counted in the current period."""
        with self._lock:
            return self._count

    def try_admit(self) -> bool:
        """Admit one message if every limit allows it.

        Returns:
            True if the message was admitted and counted, False otherwise
        """
        with self._lock:
            now = self._clock()

            if (
                self._last_admitted_at is not None
                and now - self._last_admitted_at < self._min_interval
            ):
                return False

            if self._count >= self._max_per_period:
                return False

            if self._max_per_day is not None:
                if (
                    self._day_started_at is None
                    or now - self._day_started_at >= SECONDS_PER_DAY
                ):
                    self._day_started_at = now
                    self._daily_count = 0
                if self._daily_count >= self._max_per_day:
                    return False
                self._daily_count += 1

            self._count += 1
            self._last_admitted_at = now
            return True

    def reset_period(self) -> None:
        """Zero the per-period counter. The minimum interval still applies."""
        with self._lock:
            self._count = 0

    def snapshot(self) -> RateWindow:
        """Get a consistent copy of the current counters."""
        with self._lock:
            return RateWindow(
                message_count=self._count,
                daily_count=self._daily_count,
                day_started_at=self._day_started_at,
                last_message_at=self._last_admitted_at,
            )
