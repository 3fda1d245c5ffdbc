"""Unit tests for the rate limiting module."""
import asyncio
import threading

import pytest
from hypothesis import given
from hypothesis import strategies as st

from interprete.ratelimit import PeriodicReset, RateLimiter, RateWindow


class TestRateLimiter:
    """Tests for RateLimiter admission rules."""

    def test_first_call_is_admitted(self, fake_clock):
        """Test that a fresh limiter admits immediately."""
        limiter = RateLimiter(clock=fake_clock)
        assert limiter.try_admit()
        assert limiter.message_count == 1

    def test_ten_spaced_calls_then_reject(self, fake_clock):
        """Test that 10 calls 2s apart succeed and the 11th fails."""
        limiter = RateLimiter(max_per_period=10, min_interval=2.0, clock=fake_clock)

        for _ in range(10):
            assert limiter.try_admit()
            fake_clock.advance(2.0)

        assert not limiter.try_admit()
        assert limiter.message_count == 10

    def test_min_interval_rejects_regardless_of_count(self, fake_clock):
        """Test that two calls less than 2s apart reject the second."""
        limiter = RateLimiter(clock=fake_clock)
        assert limiter.try_admit()
        fake_clock.advance(1.99)
        assert not limiter.try_admit()
        assert limiter.message_count == 1

    def test_rejection_does_not_move_interval_start(self, fake_clock):
        """Test that a rejected call does not restart the minimum interval."""
        limiter = RateLimiter(clock=fake_clock)
        assert limiter.try_admit()
        fake_clock.advance(1.0)
        assert not limiter.try_admit()
        fake_clock.advance(1.0)
        assert limiter.try_admit()

    def test_reset_period_allows_ten_more(self, fake_clock):
        """Test that reset_period restores the full allowance."""
        limiter = RateLimiter(max_per_period=10, clock=fake_clock)
        for _ in range(10):
            assert limiter.try_admit()
            fake_clock.advance(2.0)
        assert not limiter.try_admit()

        limiter.reset_period()
        assert limiter.message_count == 0

        for _ in range(10):
            assert limiter.try_admit()
            fake_clock.advance(2.0)
        assert not limiter.try_admit()

    def test_reset_keeps_min_interval(self, fake_clock):
        """Test that resetting the counter does not bypass the interval."""
        limiter = RateLimiter(clock=fake_clock)
        assert limiter.try_admit()
        limiter.reset_period()
        assert not limiter.try_admit()

    def test_daily_cap(self, fake_clock):
        """Test that the per-day cap applies across period resets."""
        limiter = RateLimiter(max_per_period=10, max_per_day=15, clock=fake_clock)
        admitted = 0
        for _ in range(3):
            for _ in range(10):
                if limiter.try_admit():
                    admitted += 1
                fake_clock.advance(2.0)
            limiter.reset_period()
        assert admitted == 15

    def test_daily_window_rolls_over(self, fake_clock):
        """Test that the day window restarts after 24 hours."""
        limiter = RateLimiter(max_per_period=10, max_per_day=1, clock=fake_clock)
        assert limiter.try_admit()
        fake_clock.advance(10.0)
        assert not limiter.try_admit()
        fake_clock.advance(86_400.0)
        assert limiter.try_admit()

    def test_daily_cap_can_be_disabled(self, fake_clock):
        """Test that max_per_day=None removes the daily cap."""
        limiter = RateLimiter(max_per_period=1000, max_per_day=None, min_interval=0, clock=fake_clock)
        assert all(limiter.try_admit() for _ in range(500))

    def test_snapshot(self, fake_clock):
        """Test that snapshot reports the counters."""
        limiter = RateLimiter(clock=fake_clock)
        assert limiter.snapshot() == RateWindow()
        limiter.try_admit()
        window = limiter.snapshot()
        assert window.message_count == 1
        assert window.daily_count == 1
        assert window.last_message_at == fake_clock.now

    def test_invalid_configuration(self):
        """Test that nonsensical limits are rejected."""
        with pytest.raises(ValueError):
            RateLimiter(max_per_period=0)
        with pytest.raises(ValueError):
            RateLimiter(min_interval=-1)

    def test_concurrent_admissions_never_exceed_limit(self):
        """Test that threads racing on try_admit never over-admit."""
        limiter = RateLimiter(max_per_period=10, min_interval=0, max_per_day=None)
        results = []
        barrier = threading.Barrier(20)

        def _worker():
            barrier.wait()
            results.append(limiter.try_admit())

        threads = [threading.Thread(target=_worker) for _ in range(20)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert results.count(True) == 10
        assert limiter.message_count == 10

    @given(st.integers(min_value=1, max_value=50), st.integers(min_value=0, max_value=80))
    def test_admissions_never_exceed_period_cap(self, cap: int, calls: int):
        """Property test: spaced calls admit exactly min(calls, cap)."""
        now = [0.0]
        limiter = RateLimiter(max_per_period=cap, min_interval=2.0, max_per_day=None, clock=lambda: now[0])
        admitted = 0
        for _ in range(calls):
            admitted += limiter.try_admit()
            now[0] += 2.0
        assert admitted == min(calls, cap)


class TestPeriodicReset:
    """Tests for the PeriodicReset background task."""

    @pytest.mark.asyncio
    async def test_resets_counter_each_period(self, fake_clock):
        """Test that the task zeroes the counter after a period."""
        limiter = RateLimiter(clock=fake_clock)
        limiter.try_admit()
        reset = PeriodicReset(limiter, period=0.01)
        reset.start()
        try:
            await asyncio.sleep(0.05)
            assert limiter.message_count == 0
        finally:
            await reset.stop()

    @pytest.mark.asyncio
    async def test_start_is_idempotent_and_stop_cancels(self, fake_clock):
        """Test lifecycle handling."""
        reset = PeriodicReset(RateLimiter(clock=fake_clock), period=60)
        reset.start()
        reset.start()
        assert reset.running
        await reset.stop()
        assert not reset.running
        await reset.stop()

    def test_period_must_be_positive(self):
        """Test that a zero period is rejected."""
        with pytest.raises(ValueError):
            PeriodicReset(RateLimiter(), period=0)
