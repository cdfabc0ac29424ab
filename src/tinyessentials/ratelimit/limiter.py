"""Sliding-window rate limiter with user grouping and idle eviction.

State:
    users:  user_id -> (group_id, last_hit_at)
    groups: group_id -> (hits, last_hit_at)

A user's group defaults to its own id. Hits always land in the user's
current group; reassigning a user moves future hits only.

Window:
    Hits older than ``now - interval`` are pruned before every decision or
    read, so the window is ``(now - interval, now]``. A caller is rate
    limited once the window holds more than max_hits hits.

Identifier lookup:
    Read operations accept either a user id or a group id. The id is first
    looked up as a user (its group is used) and otherwise treated as a
    group id.

Eviction:
    With cleanup_interval set, a recurring sweep evicts groups idle for
    more than max_idle, the users pointing at them, and idle users whose
    group no longer exists.

Thread Safety:
    All state is guarded by one RLock; the sweep runs on the scheduler's
    thread.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Iterable
from dataclasses import dataclass, field
from threading import RLock
from typing import TYPE_CHECKING

from tinyessentials.ratelimit.metrics import HitMetrics
from tinyessentials.ratelimit.scheduler import (
    Clock,
    IntervalScheduler,
    ScheduledTask,
    ThreadingIntervalScheduler,
    monotonic_ms,
)

if TYPE_CHECKING:
    from tinyessentials.ratelimit.config import RateLimiterConfig

__all__ = ["SlidingWindowRateLimiter"]

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class _UserRecord:
    group_id: str
    # Last hit or group assignment; used to expire users without a group
    touched_at: float
    last_hit_at: float | None = None


@dataclass(slots=True)
class _GroupRecord:
    last_hit_at: float
    hits: deque[float] = field(default_factory=deque)


class SlidingWindowRateLimiter:
    """Counts hits per group inside a sliding time window.

    Example:
        >>> limiter = SlidingWindowRateLimiter(RateLimiterConfig(max_hits=2, interval=1000))
        >>> for _ in range(3):
        ...     limiter.hit("alice")
        >>> limiter.is_rate_limited("alice")
        True
        >>> limiter.destroy()
    """

    __slots__ = ("_clock", "_config", "_destroyed", "_groups", "_lock", "_timer", "_users")

    def __init__(
        self,
        config: RateLimiterConfig,
        *,
        clock: Clock | None = None,
        scheduler: IntervalScheduler | None = None,
    ) -> None:
        """Initialize rate limiter.

        Args:
            config: Validated limiter configuration
            clock: Millisecond clock (default: monotonic_ms)
            scheduler: Runs the idle sweep (default: ThreadingIntervalScheduler).
                Unused when config.cleanup_interval is None.
        """
        self._config = config
        self._clock: Clock = clock if clock is not None else monotonic_ms
        self._lock = RLock()
        self._users: dict[str, _UserRecord] = {}
        self._groups: dict[str, _GroupRecord] = {}
        self._destroyed = False
        self._timer: ScheduledTask | None = None

        if config.cleanup_interval is not None:
            active = scheduler if scheduler is not None else ThreadingIntervalScheduler()
            self._timer = active.schedule(config.cleanup_interval, self.cleanup)

        logger.debug(
            "Rate limiter created: max_hits=%d, interval=%dms, cleanup_interval=%s",
            config.max_hits,
            config.interval,
            config.cleanup_interval,
        )

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    @property
    def config(self) -> RateLimiterConfig:
        """Limiter configuration (read-only)."""
        return self._config

    @property
    def max_hits(self) -> int:
        """Window capacity."""
        return self._config.max_hits

    @property
    def interval(self) -> int:
        """Window length in milliseconds."""
        return self._config.interval

    @property
    def is_destroyed(self) -> bool:
        """True once destroy() has been called."""
        return self._destroyed

    # ------------------------------------------------------------------
    # Recording and decisions
    # ------------------------------------------------------------------

    def hit(self, user_id: str) -> None:
        """Record one event for user_id in the user's current group.

        The group keeps at most max_hits + 1 timestamps, so counts read
        after hits saturate there while the limit decision is unaffected.
        """
        with self._lock:
            now = self._clock()
            user = self._users.get(user_id)
            if user is None:
                user = _UserRecord(group_id=user_id, touched_at=now)
                self._users[user_id] = user
            group = self._groups.get(user.group_id)
            if group is None:
                group = _GroupRecord(last_hit_at=now)
                self._groups[user.group_id] = group

            group.hits.append(now)
            group.last_hit_at = now
            user.last_hit_at = now
            user.touched_at = now
            self._prune(group, now)
            # Only the newest max_hits + 1 hits can change a decision
            while len(group.hits) > self._config.max_hits + 1:
                group.hits.popleft()

    def is_rate_limited(self, id_: str) -> bool:
        """Check whether the window of id_'s group holds more than max_hits hits."""
        with self._lock:
            group = self._pruned_group(id_)
            return group is not None and len(group.hits) > self._config.max_hits

    # ------------------------------------------------------------------
    # Grouping
    # ------------------------------------------------------------------

    def assign_to_group(self, user_id: str, group_id: str) -> None:
        """Point user_id at group_id. Existing hits stay where they are."""
        with self._lock:
            now = self._clock()
            user = self._users.get(user_id)
            if user is None:
                self._users[user_id] = _UserRecord(group_id=group_id, touched_at=now)
            else:
                user.group_id = group_id
                user.touched_at = now

    def reset_user_group(self, user_id: str) -> None:
        """Point user_id back at its own group."""
        with self._lock:
            user = self._users.get(user_id)
            if user is not None:
                user.group_id = user_id
                user.touched_at = self._clock()

    def get_group_id(self, user_id: str) -> str:
        """Return the user's group; unknown users are their own group."""
        with self._lock:
            user = self._users.get(user_id)
            return user.group_id if user is not None else user_id

    # ------------------------------------------------------------------
    # Resets
    # ------------------------------------------------------------------

    def reset_group(self, group_id: str) -> None:
        """Drop a group's hits. Users keep pointing at it."""
        with self._lock:
            self._groups.pop(group_id, None)

    def reset_user(self, user_id: str) -> None:
        """Drop the user record and the record of the group it points at."""
        with self._lock:
            user = self._users.pop(user_id, None)
            self._groups.pop(user.group_id if user is not None else user_id, None)

    # ------------------------------------------------------------------
    # Raw data
    # ------------------------------------------------------------------

    def set_data(self, group_id: str, timestamps: Iterable[float]) -> None:
        """Replace a group's hits. Timestamps are stored sorted.

        Raises:
            TypeError: If a timestamp is not a real number
        """
        hits = list(timestamps)
        for stamp in hits:
            if isinstance(stamp, bool) or not isinstance(stamp, int | float):
                msg = f"set_data: timestamps must be numbers, got {type(stamp).__name__}"
                raise TypeError(msg)
        hits.sort()
        with self._lock:
            self._groups[group_id] = _GroupRecord(last_hit_at=self._clock(), hits=deque(hits))

    def get_data(self, group_id: str) -> tuple[float, ...]:
        """Return a group's stored hits as-is (not pruned)."""
        with self._lock:
            group = self._groups.get(group_id)
            return tuple(group.hits) if group is not None else ()

    # ------------------------------------------------------------------
    # Observability
    # ------------------------------------------------------------------

    def has_data(self, id_: str) -> bool:
        """Check whether id_'s group has a record."""
        with self._lock:
            return self._resolve(id_) in self._groups

    def get_total_hits(self, id_: str) -> int:
        """Number of hits in the window of id_'s group."""
        with self._lock:
            group = self._pruned_group(id_)
            return len(group.hits) if group is not None else 0

    def get_user_hits(self, user_id: str) -> int:
        """Number of hits in the window of the user's current group."""
        with self._lock:
            group = self._pruned(self.get_group_id(user_id))
            return len(group.hits) if group is not None else 0

    def get_last_hit(self, id_: str) -> float | None:
        """Timestamp of the last hit on id_'s group, or None."""
        with self._lock:
            group = self._groups.get(self._resolve(id_))
            return group.last_hit_at if group is not None else None

    def get_user_last_hit(self, user_id: str) -> float | None:
        """Timestamp of the user's own last hit, or None."""
        with self._lock:
            user = self._users.get(user_id)
            return user.last_hit_at if user is not None else None

    def get_time_since_last_hit(self, id_: str) -> float | None:
        """Milliseconds since the last hit on id_'s group, or None."""
        with self._lock:
            last = self.get_last_hit(id_)
            return self._clock() - last if last is not None else None

    def get_average_hit_spacing(self, id_: str) -> float | None:
        """Mean gap between consecutive hits in the window, or None with fewer than two."""
        with self._lock:
            group = self._pruned_group(id_)
            return _average_spacing(group.hits) if group is not None else None

    def get_metrics(self, id_: str) -> HitMetrics:
        """Snapshot of id_'s group window."""
        with self._lock:
            now = self._clock()
            group_id = self._resolve(id_)
            group = self._pruned(group_id)
            if group is None:
                return HitMetrics(
                    group_id=group_id,
                    total_hits=0,
                    last_hit=None,
                    time_since_last_hit=None,
                    average_hit_spacing=None,
                    is_rate_limited=False,
                )
            hits = group.hits
            return HitMetrics(
                group_id=group_id,
                total_hits=len(hits),
                last_hit=group.last_hit_at,
                time_since_last_hit=now - group.last_hit_at,
                average_hit_spacing=_average_spacing(hits),
                is_rate_limited=len(hits) > self._config.max_hits,
            )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def cleanup(self) -> None:
        """Run one idle sweep now."""
        with self._lock:
            now = self._clock()
            max_idle = self._config.max_idle
            expired = {
                group_id
                for group_id, group in self._groups.items()
                if now - group.last_hit_at > max_idle
            }
            for group_id in expired:
                del self._groups[group_id]

            stale_users = [
                user_id
                for user_id, user in self._users.items()
                if user.group_id in expired
                or (user.group_id not in self._groups and now - user.touched_at > max_idle)
            ]
            for user_id in stale_users:
                del self._users[user_id]

        if expired or stale_users:
            logger.debug(
                "Idle sweep evicted %d groups and %d users", len(expired), len(stale_users)
            )

    def destroy(self) -> None:
        """Stop the sweep timer and drop all state. Safe to call repeatedly."""
        with self._lock:
            timer, self._timer = self._timer, None
            self._users.clear()
            self._groups.clear()
            already = self._destroyed
            self._destroyed = True
        if timer is not None:
            timer.cancel()
        if not already:
            logger.info("Rate limiter destroyed")

    def __enter__(self) -> SlidingWindowRateLimiter:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.destroy()

    def __repr__(self) -> str:
        return (
            f"SlidingWindowRateLimiter(max_hits={self._config.max_hits}, "
            f"interval={self._config.interval}, groups={len(self._groups)}, "
            f"users={len(self._users)})"
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _resolve(self, id_: str) -> str:
        user = self._users.get(id_)
        return user.group_id if user is not None else id_

    def _pruned_group(self, id_: str) -> _GroupRecord | None:
        return self._pruned(self._resolve(id_))

    def _pruned(self, group_id: str) -> _GroupRecord | None:
        group = self._groups.get(group_id)
        if group is not None:
            self._prune(group, self._clock())
        return group

    def _prune(self, group: _GroupRecord, now: float) -> None:
        cutoff = now - self._config.interval
        hits = group.hits
        while hits and hits[0] <= cutoff:
            hits.popleft()


def _average_spacing(hits: deque[float]) -> float | None:
    if len(hits) < 2:
        return None
    # Consecutive deltas telescope to last - first
    return (hits[-1] - hits[0]) / (len(hits) - 1)
