"""Shared constants for tinyessentials.

This module provides centralized defaults used across the localization,
task queue and rate limiter packages. Placing constants here avoids
circular imports and provides a single source of truth.

Constants are grouped by domain:
- Localization: file layout, placeholder grammar, regex cache bounds
- Task queue: canonical cancellation text
- Rate limiter: idle eviction defaults

Python 3.13+.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Localization
    "LOCALE_FILE_SUFFIX",
    "PLACEHOLDER_PATTERN",
    "NEVER_MATCH_PATTERN",
    "DEFAULT_REGEX_CACHE_SIZE",
    "PATTERN_KEY",
    "HELPER_KEY",
    "HELPER_ARGS_KEY",
    "PATTERN_VALUE_KEY",
    "PATTERN_ELSE_KEYS",
    "FALLBACK_EMPTY",
    # Task queue
    "CANCELLED_TASK_MESSAGE",
    # Rate limiter
    "DEFAULT_MAX_IDLE_MS",
]

# ============================================================================
# LOCALIZATION
# ============================================================================

# Locale files live at <base_path>/<locale><LOCALE_FILE_SUFFIX>.
LOCALE_FILE_SUFFIX: str = ".json"

# Placeholder grammar for template strings: {name}, {user.name}, {items.0}.
PLACEHOLDER_PATTERN: str = r"\{([a-zA-Z0-9_.$-]+)\}"

# Sentinel installed in place of an invalid regex in non-strict mode.
# An empty negative lookahead can never match, not even the empty string.
NEVER_MATCH_PATTERN: str = r"(?!)"

# Maximum compiled patterns kept per Translator instance.
DEFAULT_REGEX_CACHE_SIZE: int = 256

# Raw tree markers (JSON files and in-memory dicts share the same spelling).
PATTERN_KEY: str = "$pattern"
HELPER_KEY: str = "$fn"
HELPER_ARGS_KEY: str = "args"
PATTERN_VALUE_KEY: str = "value"
PATTERN_ELSE_KEYS: tuple[str, ...] = ("elseValue", "else_value")

# Rendered in non-strict mode for unknown helpers and unsupported entries.
FALLBACK_EMPTY: str = ""

# ============================================================================
# TASK QUEUE
# ============================================================================

# Single message shared by every cancellation path (queued, delayed, picked up).
CANCELLED_TASK_MESSAGE: str = "The task was cancelled by the sequential task queue."

# ============================================================================
# RATE LIMITER
# ============================================================================

# Groups idle for longer than this are evicted by the cleanup sweep (5 minutes).
DEFAULT_MAX_IDLE_MS: int = 300_000
