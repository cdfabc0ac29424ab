"""Rate limiter configuration.

Provides a single frozen dataclass holding the window and eviction
parameters of SlidingWindowRateLimiter. Values are validated at
construction so a limiter can never be built from a bad config.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass

from tinyessentials.constants import DEFAULT_MAX_IDLE_MS
from tinyessentials.diagnostics import ConfigurationError, ErrorTemplate

__all__ = ["RateLimiterConfig"]


def _is_positive_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 1


@dataclass(frozen=True, slots=True)
class RateLimiterConfig:
    """Immutable configuration for SlidingWindowRateLimiter.

    Attributes:
        max_hits: Window capacity. A caller is limited once the window
            holds more than max_hits hits.
        interval: Sliding window length in milliseconds.
        cleanup_interval: Milliseconds between idle sweeps; None disables
            the automatic sweep (cleanup() can still be called by hand).
        max_idle: A group is evicted when it has not been hit for more than
            max_idle milliseconds (default: 5 minutes).

    Example:
        >>> config = RateLimiterConfig(max_hits=3, interval=1000, cleanup_interval=500)
        >>> config.max_idle
        300000
    """

    max_hits: int
    interval: int
    cleanup_interval: int | None = None
    max_idle: int = DEFAULT_MAX_IDLE_MS

    def __post_init__(self) -> None:
        """Validate configuration values at construction time.

        Raises:
            ConfigurationError: If any value is not a positive integer
        """
        requirement = "must be a positive integer in milliseconds"
        if not _is_positive_int(self.max_hits):
            raise ConfigurationError(
                ErrorTemplate.limiter_config_invalid("max_hits", "must be a positive integer")
            )
        if not _is_positive_int(self.interval):
            raise ConfigurationError(ErrorTemplate.limiter_config_invalid("interval", requirement))
        if self.cleanup_interval is not None and not _is_positive_int(self.cleanup_interval):
            raise ConfigurationError(
                ErrorTemplate.limiter_config_invalid("cleanup_interval", requirement)
            )
        if not _is_positive_int(self.max_idle):
            raise ConfigurationError(ErrorTemplate.limiter_config_invalid("max_idle", requirement))
