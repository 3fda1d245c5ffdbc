"""Recurring reset of the rate limiter's period counter."""

import asyncio

from .limiter import RateLimiter


class PeriodicReset:
    """Background task that calls ``RateLimiter.reset_period`` on a fixed period.

    Usage:
        reset = PeriodicReset(limiter, period=60.0)
        reset.start()
        ...
        await reset.stop()
    """

    def __init__(self, limiter: RateLimiter, period: float = 60.0):
        if period <= 0:
            raise ValueError("period must be positive")
        self._limiter = limiter
        self._period = period
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Start the reset loop on the running event loop. Idempotent."""
        if self.running:
            return
        self._task = asyncio.create_task(self._run(), name="interprete-rate-reset")

    async def stop(self) -> None:
        """Cancel the reset loop and wait for it to finish."""
        if self._task is None:
            return
        task, self._task = self._task, None
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self._period)
            self._limiter.reset_period()
