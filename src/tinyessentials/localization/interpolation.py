"""Template interpolation for string entries.

Replaces ``{dotted.path}`` placeholders with values looked up in the
params mapping. No ICU formatting and no escaping: the caller controls
output safety (e.g. HTML).

Python 3.13+. Zero external dependencies.
"""

import re
from collections.abc import Mapping, Sequence
from typing import Any

from tinyessentials.constants import PLACEHOLDER_PATTERN

__all__ = ["dot_get", "interpolate"]

_PLACEHOLDER_RE = re.compile(PLACEHOLDER_PATTERN)


def dot_get(obj: Any, path: str) -> Any:
    """Walk a dotted path through nested mappings and sequences.

    Integer segments index into sequences (``items.0``). Any missing step
    yields None.

    Example:
        >>> dot_get({"user": {"name": "Ana"}}, "user.name")
        'Ana'
        >>> dot_get({"items": ["a", "b"]}, "items.1")
        'b'
        >>> dot_get({}, "user.name") is None
        True
    """
    current = obj
    for part in path.split("."):
        if current is None:
            return None
        match current:
            case Mapping():
                current = current.get(part)
            case str() | bytes():
                return None
            case Sequence() if part.lstrip("-").isdigit():
                index = int(part)
                current = current[index] if -len(current) <= index < len(current) else None
            case _:
                return None
    return current


def interpolate(template: str, params: Mapping[str, Any] | None) -> str:
    """Substitute placeholders in a template.

    Args:
        template: Text with zero or more ``{dotted.path}`` placeholders
        params: Values to substitute; non-mapping params leave the template as-is

    Returns:
        Rendered string; missing or None values render as ""

    Example:
        >>> interpolate("Hi {name}", {"name": "Ana"})
        'Hi Ana'
        >>> interpolate("Hi {name}", {})
        'Hi '
    """
    if not isinstance(params, Mapping):
        return template

    def _replace(match: re.Match[str]) -> str:
        value = dot_get(params, match.group(1))
        return "" if value is None else str(value)

    return _PLACEHOLDER_RE.sub(_replace, template)
