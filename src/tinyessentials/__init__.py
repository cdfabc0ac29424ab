"""tinyessentials - translation engine, sequential task queue and rate limiter.

Three independent components, each usable on its own:

Public API:
    Translator - Key resolution with locale fallback, patterns and helpers
    SequentialTaskQueue - Serial asyncio task execution with delays,
        cancellation and concurrent fan-out points
    SlidingWindowRateLimiter - Per-group sliding-window hit counting with
        idle eviction
    RateLimiterConfig - Validated limiter configuration

Exceptions:
    TinyError - Base exception class
    ConfigurationError - Invalid constructor options
    TranslationError - Translation engine failures (strict mode)
    TaskCancelledError - Queue entry cancelled before it started

Submodules:
    tinyessentials.localization - Translator, helpers, loading, merging
    tinyessentials.tasks - SequentialTaskQueue
    tinyessentials.ratelimit - SlidingWindowRateLimiter and its collaborators
    tinyessentials.diagnostics - Error types, codes and message templates
    tinyessentials.locale_utils - Babel-backed locale helpers
"""

# Essential Public API - Minimal exports for clean namespace
from .diagnostics import (
    ConfigurationError,
    TaskCancelledError,
    TinyError,
    TranslationError,
)
from .enums import TranslationMode
from .localization import Translator
from .ratelimit import RateLimiterConfig, SlidingWindowRateLimiter
from .tasks import SequentialTaskQueue

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("tinyessentials")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "ConfigurationError",
    "RateLimiterConfig",
    "SequentialTaskQueue",
    "SlidingWindowRateLimiter",
    "TaskCancelledError",
    "TinyError",
    "TranslationError",
    "TranslationMode",
    "Translator",
    "__version__",
]
