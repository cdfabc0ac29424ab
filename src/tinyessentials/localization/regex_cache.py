"""Thread-safe LRU cache for compiled pattern-table regexes.

Pattern sources read from locale files are compiled once per Translator
instance and shared across reloads of the same locale.

Architecture:
    - Thread-safe using threading.RLock (reentrant lock)
    - LRU eviction via OrderedDict
    - Keyed by regex source; patterns are always compiled without flags
    - Compile errors are never cached

Python 3.13+. Zero external dependencies.
"""

import re
from collections import OrderedDict
from threading import RLock

from tinyessentials.constants import DEFAULT_REGEX_CACHE_SIZE

__all__ = ["RegexCache"]


class RegexCache:
    """Thread-safe LRU cache of compiled regular expressions.

    Uses OrderedDict for LRU eviction and RLock for thread safety.

    Attributes:
        maxsize: Maximum number of cached patterns
        hits: Number of cache hits (for metrics)
        misses: Number of cache misses (for metrics)
    """

    __slots__ = ("_cache", "_hits", "_lock", "_maxsize", "_misses")

    def __init__(self, maxsize: int = DEFAULT_REGEX_CACHE_SIZE) -> None:
        """Initialize regex cache.

        Args:
            maxsize: Maximum number of entries (default: DEFAULT_REGEX_CACHE_SIZE)

        Raises:
            ValueError: If maxsize is not positive
        """
        if maxsize <= 0:
            msg = "maxsize must be positive"
            raise ValueError(msg)

        self._cache: OrderedDict[str, re.Pattern[str]] = OrderedDict()
        self._maxsize = maxsize
        self._lock = RLock()
        self._hits = 0
        self._misses = 0

    def compile(self, source: str) -> re.Pattern[str]:
        """Return the compiled pattern for source, compiling on a miss.

        Thread-safe. Evicts the least recently used entry when full.

        Raises:
            re.error: If source is not a valid regular expression
        """
        with self._lock:
            cached = self._cache.get(source)
            if cached is not None:
                self._cache.move_to_end(source)
                self._hits += 1
                return cached
            self._misses += 1

        # Compile outside the lock; re.compile keeps its own module cache.
        compiled = re.compile(source)

        with self._lock:
            if source in self._cache:
                self._cache.move_to_end(source)
            elif len(self._cache) >= self._maxsize:
                self._cache.popitem(last=False)
            self._cache[source] = compiled
        return compiled

    def clear(self) -> None:
        """Clear all cached patterns and reset metrics.

        Thread-safe. Patterns already installed in tables keep working.
        """
        with self._lock:
            self._cache.clear()
            self._hits = 0
            self._misses = 0

    def get_stats(self) -> dict[str, int | float]:
        """Get cache statistics.

        Returns:
            Dict with keys:
            - size (int): Current number of cached patterns
            - maxsize (int): Maximum cache capacity
            - hits (int): Number of cache hits
            - misses (int): Number of cache misses
            - hit_rate (float): Hit rate as percentage (0.0-100.0)
        """
        with self._lock:
            total = self._hits + self._misses
            hit_rate = (self._hits / total * 100) if total > 0 else 0.0

            return {
                "size": len(self._cache),
                "maxsize": self._maxsize,
                "hits": self._hits,
                "misses": self._misses,
                "hit_rate": round(hit_rate, 2),
            }

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)

    def __contains__(self, source: object) -> bool:
        with self._lock:
            return source in self._cache

    @property
    def maxsize(self) -> int:
        """Maximum cache size."""
        return self._maxsize

    @property
    def hits(self) -> int:
        """Number of cache hits."""
        with self._lock:
            return self._hits

    @property
    def misses(self) -> int:
        """Number of cache misses."""
        with self._lock:
            return self._misses
