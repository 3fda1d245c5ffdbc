"""Client-side rate limiting."""

from .limiter import RateLimiter
from .models import RateWindow
from .scheduler import PeriodicReset

__all__ = [
    "PeriodicReset",
    "RateLimiter",
    "RateWindow",
]
