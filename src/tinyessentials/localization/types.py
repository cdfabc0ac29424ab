"""Type aliases and value types for the localization domain.

Provides semantic type aliases used throughout the localization package
and by user code when annotating Translator call sites, plus the two
structured leaf shapes: helper references and pattern entries.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, TypeAlias

if TYPE_CHECKING:
    from tinyessentials.localization.helpers import HelperFacade

__all__ = [
    "Helper",
    "HelperName",
    "HelperReference",
    "LeafValue",
    "LocaleCode",
    "PatternEntry",
    "RawTree",
    "TranslationKey",
]

LocaleCode: TypeAlias = str
"""Locale identifier, also used as the file stem (e.g., 'en', 'pt-BR')."""

TranslationKey: TypeAlias = str
"""Dot-flattened key (e.g., 'app.title')."""

HelperName: TypeAlias = str
"""Name under which a helper is registered."""

RawTree: TypeAlias = Mapping[str, Any]
"""Nested source data before flattening."""

Helper: TypeAlias = Callable[[Mapping[str, Any], "HelperFacade"], Any]
"""Helper or callable entry: (params, helpers) -> any value."""


@dataclass(frozen=True, slots=True)
class HelperReference:
    """Leaf that dispatches to a registered helper at resolution time.

    Spelled ``{"$fn": name, "args": ...}`` in raw trees and JSON files.
    Helpers are addressed by name so that file data never carries code.

    Attributes:
        name: Registered helper name
        args: Arbitrary data handed to the helper as params["args"]
    """

    name: HelperName
    args: Any = None


LeafValue: TypeAlias = str | HelperReference | Helper
"""Terminal table entry: template string, helper reference or callable."""


@dataclass(frozen=True, slots=True)
class PatternEntry:
    """Regex rule checked against an input key.

    Attributes:
        regex: Compiled pattern (file patterns are compiled without flags)
        value: Returned when the regex matches
        else_value: Returned when it does not (may be None)
    """

    regex: re.Pattern[str]
    value: LeafValue
    else_value: LeafValue | None = None

    def select(self, key: str) -> LeafValue | None:
        """Return value on a match, else_value otherwise."""
        return self.value if self.regex.search(key) is not None else self.else_value
