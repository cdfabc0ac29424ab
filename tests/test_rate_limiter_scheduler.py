"""Tests for the threading scheduler and its use by the limiter.

These use real daemon threads with short intervals.
"""

import logging
import threading
import time

import pytest

from tinyessentials import RateLimiterConfig, SlidingWindowRateLimiter
from tinyessentials.ratelimit import RepeatingTimer, ThreadingIntervalScheduler, monotonic_ms
from tests.helpers.timing import FakeClock


class TestRepeatingTimer:
    def test_calls_until_cancelled(self) -> None:
        calls: list[int] = []
        reached = threading.Event()

        def callback() -> None:
            calls.append(1)
            if len(calls) >= 3:
                reached.set()

        timer = RepeatingTimer(0.01, callback)
        timer.start()
        assert reached.wait(2.0)
        timer.cancel()
        timer.join(1.0)
        assert not timer.is_alive()
        assert timer.cancelled
        count = len(calls)
        time.sleep(0.05)
        assert len(calls) == count

    def test_callback_errors_are_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        reached = threading.Event()
        calls: list[int] = []

        def callback() -> None:
            calls.append(1)
            if len(calls) >= 2:
                reached.set()
            raise RuntimeError("sweep failed")

        with caplog.at_level(logging.ERROR, logger="tinyessentials.ratelimit.scheduler"):
            timer = RepeatingTimer(0.01, callback)
            timer.start()
            assert reached.wait(2.0)
            timer.cancel()
            timer.join(1.0)
        assert "Repeating timer callback failed" in caplog.text

    def test_daemon(self) -> None:
        timer = RepeatingTimer(10.0, lambda: None)
        assert timer.daemon
        timer.cancel()


class TestThreadingIntervalScheduler:
    def test_schedule_starts_timer(self) -> None:
        fired = threading.Event()
        timer = ThreadingIntervalScheduler().schedule(10, fired.set)
        try:
            assert timer.is_alive()
            assert fired.wait(2.0)
        finally:
            timer.cancel()
            timer.join(1.0)

    def test_limiter_sweeps_on_real_timer(self) -> None:
        clock = FakeClock()
        config = RateLimiterConfig(max_hits=1, interval=100, cleanup_interval=10, max_idle=100)
        limiter = SlidingWindowRateLimiter(config, clock=clock)
        try:
            limiter.hit("u")
            clock.advance(500)
            deadline = monotonic_ms() + 2000
            while limiter.has_data("u") and monotonic_ms() < deadline:
                time.sleep(0.01)
            assert not limiter.has_data("u")
        finally:
            limiter.destroy()


def test_monotonic_ms_is_non_decreasing() -> None:
    first = monotonic_ms()
    second = monotonic_ms()
    assert second >= first
