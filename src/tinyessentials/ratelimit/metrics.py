"""Metrics snapshot returned by SlidingWindowRateLimiter.get_metrics().

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass

__all__ = ["HitMetrics"]


@dataclass(frozen=True, slots=True)
class HitMetrics:
    """Point-in-time view of one group's window.

    All values are computed after pruning expired hits. Identifiers without
    data report zero hits and None for time-based values.

    Attributes:
        group_id: Group the identifier resolved to
        total_hits: Hits inside the current window
        last_hit: Timestamp (ms) of the most recent hit, or None
        time_since_last_hit: Milliseconds since last_hit, or None
        average_hit_spacing: Mean gap (ms) between consecutive hits in the
            window, or None with fewer than two hits
        is_rate_limited: Whether the window is over capacity
    """

    group_id: str
    total_hits: int
    last_hit: float | None
    time_since_last_hit: float | None
    average_hit_spacing: float | None
    is_rate_limited: bool
