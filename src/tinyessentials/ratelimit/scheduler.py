"""Clock and recurring-timer collaborators for the rate limiter.

The limiter never reads wall-clock time or starts threads directly; it
receives a clock and an IntervalScheduler so tests can drive time by hand.

Components:
    Clock - Callable returning the current time in milliseconds
    monotonic_ms - Default clock
    ScheduledTask - Protocol for a cancellable recurring job
    IntervalScheduler - Protocol for scheduling recurring jobs
    RepeatingTimer - Daemon thread invoking a callback every interval
    ThreadingIntervalScheduler - Default scheduler built on RepeatingTimer

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from typing import Protocol, TypeAlias

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Clock
    "Clock",
    "monotonic_ms",
    # Protocols
    "ScheduledTask",
    "IntervalScheduler",
    # Threading implementation
    "RepeatingTimer",
    "ThreadingIntervalScheduler",
]

logger = logging.getLogger(__name__)

Clock: TypeAlias = Callable[[], float]
"""Zero-argument callable returning milliseconds from an arbitrary origin."""


def monotonic_ms() -> float:
    """Current monotonic time in milliseconds."""
    return time.monotonic() * 1000


class ScheduledTask(Protocol):
    """Handle of a recurring job."""

    def cancel(self) -> None:
        """Stop the job. Must be safe to call more than once."""
        ...


class IntervalScheduler(Protocol):
    """Schedules a callback to run every interval_ms milliseconds."""

    def schedule(self, interval_ms: int, callback: Callable[[], None]) -> ScheduledTask:
        """Start calling callback every interval_ms milliseconds."""
        ...


class RepeatingTimer(threading.Thread):
    """Daemon thread that calls a function every interval seconds until cancelled.

    Exceptions raised by the callback are logged and do not stop the timer.
    """

    def __init__(self, interval: float, callback: Callable[[], None]) -> None:
        super().__init__(name="tinyessentials-repeating-timer", daemon=True)
        self._interval = interval
        self._callback = callback
        self._stopped = threading.Event()

    def run(self) -> None:
        while not self._stopped.wait(self._interval):
            try:
                self._callback()
            except Exception:
                logger.exception("Repeating timer callback failed")

    def cancel(self) -> None:
        """Stop the timer. The current callback, if running, completes."""
        self._stopped.set()

    @property
    def cancelled(self) -> bool:
        return self._stopped.is_set()


class ThreadingIntervalScheduler:
    """IntervalScheduler backed by one RepeatingTimer thread per job."""

    __slots__ = ()

    def schedule(self, interval_ms: int, callback: Callable[[], None]) -> RepeatingTimer:
        timer = RepeatingTimer(interval_ms / 1000, callback)
        timer.start()
        return timer

    def __repr__(self) -> str:
        return "ThreadingIntervalScheduler()"
