"""Sliding-window rate limiter package.

Submodules:
    config    - RateLimiterConfig (validated frozen dataclass)
    scheduler - Clock, IntervalScheduler protocol, ThreadingIntervalScheduler
    metrics   - HitMetrics snapshot
    limiter   - SlidingWindowRateLimiter

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability

from tinyessentials.ratelimit.config import RateLimiterConfig
from tinyessentials.ratelimit.limiter import SlidingWindowRateLimiter
from tinyessentials.ratelimit.metrics import HitMetrics
from tinyessentials.ratelimit.scheduler import (
    Clock,
    IntervalScheduler,
    RepeatingTimer,
    ScheduledTask,
    ThreadingIntervalScheduler,
    monotonic_ms,
)

__all__ = [
    # Limiter
    "SlidingWindowRateLimiter",
    "RateLimiterConfig",
    "HitMetrics",
    # Collaborators
    "Clock",
    "monotonic_ms",
    "IntervalScheduler",
    "ScheduledTask",
    "ThreadingIntervalScheduler",
    "RepeatingTimer",
]
