"""Raw tree ingestion: flatten nested locale data into lookup tables.

A raw tree is a nested mapping (Python dict or parsed JSON object). The
walk produces two tables per locale:

    strings:  dot-flattened key -> leaf (str, HelperReference or callable)
    patterns: ordered list of PatternEntry

Recognized shapes:
    "text"                                  -> string leaf
    callable                                -> callable leaf (in-memory only)
    {"$fn": "name", "args": ...}            -> HelperReference leaf
    {"$pattern": "re", "value": ..., "elseValue": ...}
                                            -> PatternEntry (key path ignored)
    {...}                                   -> nested map, recurse
    None                                    -> skipped

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from tinyessentials.constants import (
    FALLBACK_EMPTY,
    HELPER_ARGS_KEY,
    HELPER_KEY,
    NEVER_MATCH_PATTERN,
    PATTERN_ELSE_KEYS,
    PATTERN_KEY,
    PATTERN_VALUE_KEY,
)
from tinyessentials.diagnostics import (
    ErrorTemplate,
    InvalidPatternError,
    UnsupportedValueError,
)
from tinyessentials.localization.types import (
    HelperReference,
    LeafValue,
    PatternEntry,
    RawTree,
    TranslationKey,
)

if TYPE_CHECKING:
    from tinyessentials.localization.regex_cache import RegexCache

__all__ = ["LocaleTables", "TreeIngestor"]

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class LocaleTables:
    """String and pattern tables of a single locale.

    Attributes:
        strings: Flattened key -> leaf
        patterns: Pattern entries in insertion order
    """

    strings: dict[TranslationKey, LeafValue] = field(default_factory=dict)
    patterns: list[PatternEntry] = field(default_factory=list)

    def merge(self, other: LocaleTables) -> None:
        """Merge other into self: string entries overwrite, patterns append."""
        self.strings.update(other.strings)
        self.patterns.extend(other.patterns)


class TreeIngestor:
    """Walks raw trees into LocaleTables.

    Shares the owning Translator's regex cache and strict flag. In strict
    mode malformed data raises; otherwise it degrades (unsupported leaves
    become "", invalid regexes never match) and a warning is logged.
    """

    __slots__ = ("_regex_cache", "_strict")

    def __init__(self, regex_cache: RegexCache, *, strict: bool) -> None:
        self._regex_cache = regex_cache
        self._strict = strict

    def ingest(self, tree: RawTree, *, locale: str = "") -> LocaleTables:
        """Flatten a raw tree.

        Args:
            tree: Nested mapping of translations
            locale: Locale the tree belongs to (diagnostics only)

        Returns:
            Fresh LocaleTables

        Raises:
            TypeError: If tree is not a mapping or a leaf sits at an empty path
            UnsupportedValueError: Strict mode, unsupported leaf
            InvalidPatternError: Strict mode, regex fails to compile
        """
        if not isinstance(tree, Mapping):
            msg = f"Locale data must be a mapping, got {type(tree).__name__}"
            raise TypeError(msg)

        tables = LocaleTables()
        self._visit(tree, "", tables)
        logger.debug(
            "Ingested locale %r: %d strings, %d patterns",
            locale,
            len(tables.strings),
            len(tables.patterns),
        )
        return tables

    def compile_pattern(self, source: object) -> re.Pattern[str]:
        """Compile a pattern source through the cache.

        Accepts an already compiled pattern (in-memory trees) or a source
        string. Invalid input yields a never-matching pattern unless strict.
        """
        if isinstance(source, re.Pattern):
            return source
        if not isinstance(source, str):
            self._unsupported(source, PATTERN_KEY)
            return self._regex_cache.compile(NEVER_MATCH_PATTERN)
        try:
            return self._regex_cache.compile(source)
        except re.error as e:
            diagnostic = ErrorTemplate.pattern_invalid(source, str(e))
            if self._strict:
                raise InvalidPatternError(diagnostic, source=source) from e
            logger.warning("%s; pattern will never match", diagnostic.message)
            return self._regex_cache.compile(NEVER_MATCH_PATTERN)

    def _visit(self, value: object, path: str, tables: LocaleTables) -> None:
        if value is None:
            return
        if isinstance(value, Mapping) and PATTERN_KEY in value and PATTERN_VALUE_KEY in value:
            tables.patterns.append(self._pattern(value, path))
            return
        if isinstance(value, Mapping) and not _is_helper_mapping(value):
            for raw_key, child in value.items():
                key = raw_key if isinstance(raw_key, str) else str(raw_key)
                self._visit(child, f"{path}.{key}" if path else key, tables)
            return

        if not path:
            msg = "Translation leaf must have a non-empty key path"
            raise TypeError(msg)
        tables.strings[path] = self._leaf(value, path)

    def _leaf(self, value: object, path: str) -> LeafValue:
        match value:
            case str() | HelperReference():
                return value
            case Mapping() if _is_helper_mapping(value):
                return HelperReference(value[HELPER_KEY], value.get(HELPER_ARGS_KEY))
            case _ if callable(value):
                return value  # type: ignore[return-value]
            case _:
                self._unsupported(value, path)
                return FALLBACK_EMPTY

    def _pattern(self, node: Mapping[str, Any], path: str) -> PatternEntry:
        regex = self.compile_pattern(node[PATTERN_KEY])
        value = self._leaf(node[PATTERN_VALUE_KEY], path)
        else_value: LeafValue | None = None
        for else_key in PATTERN_ELSE_KEYS:
            raw_else = node.get(else_key)
            if raw_else is not None:
                else_value = self._leaf(raw_else, path)
                break
        return PatternEntry(regex=regex, value=value, else_value=else_value)

    def _unsupported(self, value: object, path: str) -> None:
        diagnostic = ErrorTemplate.value_unsupported(type(value).__name__, key=path)
        if self._strict:
            raise UnsupportedValueError(diagnostic)
        logger.warning("%s at '%s'; stored as empty string", diagnostic.message, path)


def _is_helper_mapping(value: Mapping[Any, Any]) -> bool:
    return isinstance(value.get(HELPER_KEY), str)
