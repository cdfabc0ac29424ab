"""Translator: key resolution with locale fallback, patterns and helpers.

Resolves a key against at most three locales (forced, current, default)
and renders the resolved leaf:

    template string  -> {dotted.path} interpolation
    HelperReference  -> registered helper(params + args, facade)
    callable         -> fn(params, facade)

Two storage modes:
    - in-memory: tables are ingested from Python data
    - file-backed: ``<base_path>/<locale>.json`` is read lazily by set_locale()

Error Handling:
    Engine errors (missing key, unknown helper, invalid regex, unsupported
    leaf, unreadable file) raise TranslationError subclasses in strict mode
    and degrade to fallbacks otherwise. Exceptions raised by user helpers
    and callable entries always propagate.

Concurrency:
    Resolution is synchronous. set_locale() suspends while a file is read
    in a worker thread; callers must not race concurrent set_locale() calls.

Python 3.13+.
"""

from __future__ import annotations

import asyncio
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from tinyessentials.constants import DEFAULT_REGEX_CACHE_SIZE, FALLBACK_EMPTY, LOCALE_FILE_SUFFIX
from tinyessentials.diagnostics import (
    ConfigurationError,
    ErrorTemplate,
    MissingLocaleDataError,
    MissingTranslationError,
    TranslationError,
    UnknownHelperError,
    UnsupportedValueError,
)
from tinyessentials.enums import LoadStatus, TranslationMode
from tinyessentials.locale_utils import describe_locale
from tinyessentials.localization.helpers import HelperFacade, HelperRegistry
from tinyessentials.localization.ingestion import LocaleTables, TreeIngestor
from tinyessentials.localization.interpolation import interpolate
from tinyessentials.localization.loading import (
    FileResourceReader,
    LocaleLoadResult,
    ResourceReader,
    read_locale_tree,
    resolve_locale_path,
)
from tinyessentials.localization.regex_cache import RegexCache
from tinyessentials.localization.types import (
    Helper,
    HelperName,
    HelperReference,
    LeafValue,
    LocaleCode,
    RawTree,
    TranslationKey,
)

__all__ = ["LocaleStats", "Translator", "TranslatorStats"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LocaleStats:
    """Table sizes and flags of one loaded locale.

    Attributes:
        locale: Locale code
        strings: Number of string entries
        patterns: Number of pattern entries
        is_default: True for the default locale
        is_current: True for the selected locale
        display_name: CLDR English name, None when Babel does not know the code
    """

    locale: LocaleCode
    strings: int
    patterns: int
    is_default: bool
    is_current: bool
    display_name: str | None = None


@dataclass(frozen=True, slots=True)
class TranslatorStats:
    """Snapshot returned by Translator.stats()."""

    mode: TranslationMode
    default_locale: LocaleCode
    current_locale: LocaleCode | None
    locales: tuple[LocaleStats, ...]
    regex_cache: Mapping[str, int | float]

    def get(self, locale: LocaleCode) -> LocaleStats | None:
        """Return the stats of one locale, or None if it is not loaded."""
        for entry in self.locales:
            if entry.locale == locale:
                return entry
        return None


class Translator:
    """Multi-locale translation engine.

    Example:
        >>> i18n = Translator(
        ...     "in-memory",
        ...     "en",
        ...     local_resources={
        ...         "en": {"greet": "Hi {name}"},
        ...         "pt": {"greet": "Olá {name}"},
        ...     },
        ... )
        >>> asyncio.run(i18n.set_locale("pt"))
        >>> i18n.t("greet", {"name": "Ana"})
        'Olá Ana'
    """

    __slots__ = (
        "_base_path",
        "_current_locale",
        "_default_loaded",
        "_default_locale",
        "_helpers",
        "_ingestor",
        "_load_results",
        "_mode",
        "_reader",
        "_regex_cache",
        "_strict",
        "_tables",
    )

    def __init__(
        self,
        mode: TranslationMode | str,
        default_locale: LocaleCode,
        *,
        base_path: str | os.PathLike[str] | None = None,
        local_resources: Mapping[LocaleCode, RawTree] | None = None,
        strict: bool = False,
        reader: ResourceReader | None = None,
        regex_cache_size: int = DEFAULT_REGEX_CACHE_SIZE,
    ) -> None:
        """Initialize translator.

        Args:
            mode: "in-memory" or "file-backed" (or a TranslationMode)
            default_locale: Locale whose tables always exist
            base_path: Directory holding ``<locale>.json`` (file-backed only, required)
            local_resources: Initial ``{locale: raw tree}`` (in-memory only)
            strict: Raise engine errors instead of degrading (default: False)
            reader: File reader used in file-backed mode (default: FileResourceReader)
            regex_cache_size: Maximum compiled patterns kept by this instance

        Raises:
            ConfigurationError: If any option is invalid
            TranslationError: Strict mode, malformed local_resources
        """
        try:
            self._mode = TranslationMode(mode)
        except ValueError:
            raise ConfigurationError(
                ErrorTemplate.invalid_configuration("mode", "must be 'in-memory' or 'file-backed'")
            ) from None

        if not isinstance(default_locale, str) or not default_locale:
            raise ConfigurationError(
                ErrorTemplate.invalid_configuration("default_locale", "must be a non-empty string")
            )
        if not isinstance(strict, bool):
            raise ConfigurationError(
                ErrorTemplate.invalid_configuration("strict", "must be a boolean")
            )
        if (
            isinstance(regex_cache_size, bool)
            or not isinstance(regex_cache_size, int)
            or regex_cache_size <= 0
        ):
            raise ConfigurationError(
                ErrorTemplate.invalid_configuration("regex_cache_size", "must be a positive integer")
            )

        self._base_path: Path | None = None
        if self._mode is TranslationMode.FILE_BACKED:
            if base_path is None or not os.fspath(base_path):
                raise ConfigurationError(
                    ErrorTemplate.invalid_configuration(
                        "base_path", "is required in 'file-backed' mode"
                    )
                )
            self._base_path = Path(base_path)

        if reader is not None and not callable(getattr(reader, "read", None)):
            raise ConfigurationError(
                ErrorTemplate.invalid_configuration("reader", "must provide a read(path) method")
            )

        self._default_locale: LocaleCode = default_locale
        self._current_locale: LocaleCode | None = None
        self._default_loaded = self._mode is TranslationMode.IN_MEMORY
        self._strict = strict
        self._reader: ResourceReader = reader if reader is not None else FileResourceReader()
        self._regex_cache = RegexCache(regex_cache_size)
        self._ingestor = TreeIngestor(self._regex_cache, strict=strict)
        self._helpers = HelperRegistry()
        self._tables: dict[LocaleCode, LocaleTables] = {}
        self._load_results: list[LocaleLoadResult] = []

        if local_resources is not None:
            if self._mode is TranslationMode.IN_MEMORY:
                for locale, tree in local_resources.items():
                    self._merge_tables(locale, self._ingestor.ingest(tree, locale=locale))
            else:
                logger.debug("Ignoring local_resources in file-backed mode")

        self._tables.setdefault(default_locale, LocaleTables())

        logger.info(
            "Translator created: mode=%s, default_locale=%s, strict=%s",
            self._mode,
            default_locale,
            strict,
        )

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def mode(self) -> TranslationMode:
        """Storage mode (read-only)."""
        return self._mode

    @property
    def default_locale(self) -> LocaleCode:
        """Default locale (read-only)."""
        return self._default_locale

    @property
    def current_locale(self) -> LocaleCode | None:
        """Selected locale, or None when only the default is active."""
        return self._current_locale

    @property
    def strict(self) -> bool:
        """Get whether strict mode is enabled (read-only).

        When strict mode is enabled, engine errors raise TranslationError
        subclasses instead of returning fallback values.
        """
        return self._strict

    @property
    def helpers(self) -> HelperFacade:
        """Read-only view of the helper registry."""
        return self._helpers.facade()

    def __repr__(self) -> str:
        """Return string representation for debugging.

        Example:
            >>> repr(Translator("in-memory", "en"))
            "Translator(mode='in-memory', default='en', current=None, locales=1)"
        """
        return (
            f"Translator(mode={str(self._mode)!r}, default={self._default_locale!r}, "
            f"current={self._current_locale!r}, locales={len(self._tables)})"
        )

    # ------------------------------------------------------------------
    # Locale management
    # ------------------------------------------------------------------

    async def set_locale(self, locale: LocaleCode | None) -> None:
        """Select the current locale.

        None (or the default locale) leaves only the default active. In
        file-backed mode a locale's file is read once and cached until the
        locale is unloaded; the default locale's file is read by the first
        call. The previously selected non-default locale is unloaded after
        a successful switch.

        In strict file-backed mode a missing or broken default file fails
        every call, set_locale(None) included, until the file can be read;
        the current locale is left unchanged each time.

        Raises:
            TypeError: If locale is neither None nor a non-empty string
            MissingLocaleDataError: Strict file-backed mode, file unreadable
        """
        if locale is not None and (not isinstance(locale, str) or not locale):
            msg = "set_locale: 'locale' must be a non-empty string or None"
            raise TypeError(msg)

        if not self._default_loaded:
            await self._load_from_file(self._default_locale)
            self._default_loaded = True

        previous = self._current_locale

        if locale is None or locale == self._default_locale:
            self._unload_selected(previous)
            self._current_locale = locale
            logger.debug("Locale reset to default: %s", self._default_locale)
            return

        if locale not in self._tables:
            if self._mode is TranslationMode.FILE_BACKED:
                await self._load_from_file(locale)
            else:
                self._tables[locale] = LocaleTables()

        if previous != locale:
            self._unload_selected(previous)
        self._current_locale = locale
        logger.debug("Locale selected: %s", locale)

    def load_locale_in_memory(self, locale: LocaleCode, raw_tree: RawTree) -> None:
        """Merge a raw tree into a locale's tables.

        String entries overwrite existing keys; pattern entries are appended.

        Raises:
            ConfigurationError: In file-backed mode
            TypeError: If locale is not a non-empty string or raw_tree is not a mapping
        """
        if self._mode is not TranslationMode.IN_MEMORY:
            raise ConfigurationError(
                ErrorTemplate.mode_mismatch("load_locale_in_memory", TranslationMode.IN_MEMORY)
            )
        if not isinstance(locale, str) or not locale:
            msg = "load_locale_in_memory: 'locale' must be a non-empty string"
            raise TypeError(msg)
        self._merge_tables(locale, self._ingestor.ingest(raw_tree, locale=locale))

    def reset_to_default_only(self) -> None:
        """Unload every non-default locale and clear the selection."""
        for locale in [loc for loc in self._tables if loc != self._default_locale]:
            self._unload(locale)
        self._current_locale = None

    def get_load_results(self) -> tuple[LocaleLoadResult, ...]:
        """Return every locale file load attempt, oldest first."""
        return tuple(self._load_results)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def register_helper(self, name: HelperName, fn: Helper) -> None:
        """Register (or replace) a helper.

        Raises:
            TypeError: If name is empty or fn is not callable
        """
        self._helpers.register(name, fn)

    def unregister_helper(self, name: HelperName) -> bool:
        """Remove a helper. Returns True if it was registered."""
        return self._helpers.unregister(name)

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def get(
        self,
        key: TranslationKey,
        params: Mapping[str, Any] | None = None,
        *,
        locale: LocaleCode | None = None,
        skip_fallback: bool = False,
    ) -> Any:
        """Resolve a key by exact match and render it.

        Args:
            key: Flattened translation key
            params: Interpolation values, also passed to helpers
            locale: Locale to try first (ignored if not loaded)
            skip_fallback: Only search the first locale of the resolution order

        Returns:
            Rendered string, or whatever a helper/callable entry returns.
            On a miss in non-strict mode, the key itself.

        Raises:
            TypeError: If key is not a non-empty string
            MissingTranslationError: Strict mode, key not found
            UnknownHelperError: Strict mode, entry references an unregistered helper
            UnsupportedValueError: Strict mode, entry has an unsupported shape
        """
        self._check_key(key, "get")
        for loc in self._resolve_order(locale, skip_fallback=skip_fallback):
            strings = self._tables[loc].strings
            if key in strings:
                return self._materialize(strings[key], params, key)

        if self._strict:
            raise MissingTranslationError(ErrorTemplate.translation_not_found(key), key=key)
        logger.debug("Missing translation for key %r; returning key", key)
        return key

    t = get

    def resolve_by_pattern(
        self,
        key: TranslationKey,
        *,
        locale: LocaleCode | None = None,
        skip_fallback: bool = False,
    ) -> LeafValue | None:
        """Resolve a key against the pattern tables.

        First-entry ternary: the first locale in the resolution order that
        has any pattern entries decides. Its *first* entry is tested with
        ``re.search``; on a match its value is returned, otherwise its
        else_value (possibly None). Later entries are never consulted.
        Returns None when no locale has patterns.

        The returned value is not rendered.

        Raises:
            TypeError: If key is not a non-empty string
        """
        self._check_key(key, "resolve_by_pattern")
        for loc in self._resolve_order(locale, skip_fallback=skip_fallback):
            patterns = self._tables[loc].patterns
            if patterns:
                return patterns[0].select(key)
        return None

    p = resolve_by_pattern

    def has_key(self, key: TranslationKey, *, locale: LocaleCode | None = None) -> bool:
        """Check if an exact key exists anywhere in the resolution order."""
        return any(
            key in self._tables[loc].strings for loc in self._resolve_order(locale)
        )

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def clear_regex_cache(self) -> None:
        """Drop memoized compiled regexes. Installed patterns keep working."""
        self._regex_cache.clear()

    def stats(self) -> TranslatorStats:
        """Return per-locale table sizes plus default/current flags."""
        locales = tuple(
            LocaleStats(
                locale=loc,
                strings=len(tables.strings),
                patterns=len(tables.patterns),
                is_default=loc == self._default_locale,
                is_current=loc == self._current_locale,
                display_name=describe_locale(loc),
            )
            for loc, tables in self._tables.items()
        )
        return TranslatorStats(
            mode=self._mode,
            default_locale=self._default_locale,
            current_locale=self._current_locale,
            locales=locales,
            regex_cache=self._regex_cache.get_stats(),
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @staticmethod
    def _check_key(key: object, operation: str) -> None:
        if not isinstance(key, str) or not key:
            msg = f"{operation}: 'key' must be a non-empty string"
            raise TypeError(msg)

    def _resolve_order(
        self, locale: LocaleCode | None, *, skip_fallback: bool = False
    ) -> list[LocaleCode]:
        candidates = (locale, self._current_locale, self._default_locale)
        # dict.fromkeys() removes duplicates while maintaining insertion order
        order = [
            loc for loc in dict.fromkeys(c for c in candidates if c) if loc in self._tables
        ]
        return order[:1] if skip_fallback else order

    def _materialize(
        self, value: LeafValue, params: Mapping[str, Any] | None, key: TranslationKey
    ) -> Any:
        match value:
            case str():
                return interpolate(value, params)
            case HelperReference(name=name, args=args):
                helper = self._helpers.get(name)
                if helper is None:
                    if self._strict:
                        raise UnknownHelperError(
                            ErrorTemplate.helper_not_found(name), helper_name=name
                        )
                    logger.warning("Helper %r is not registered (key %r)", name, key)
                    return FALLBACK_EMPTY
                base = dict(params) if isinstance(params, Mapping) else {}
                return helper({**base, "args": args}, self._helpers.facade())
            case _ if callable(value):
                return value(params if params is not None else {}, self._helpers.facade())
            case _:
                if self._strict:
                    raise UnsupportedValueError(
                        ErrorTemplate.value_unsupported(type(value).__name__, key=key)
                    )
                return FALLBACK_EMPTY

    def _merge_tables(self, locale: LocaleCode, tables: LocaleTables) -> None:
        existing = self._tables.get(locale)
        if existing is None:
            self._tables[locale] = tables
        else:
            existing.merge(tables)

    def _unload_selected(self, locale: LocaleCode | None) -> None:
        if locale is not None and locale != self._default_locale:
            self._unload(locale)

    def _unload(self, locale: LocaleCode) -> None:
        if locale == self._default_locale:
            return
        if self._tables.pop(locale, None) is not None:
            logger.debug("Unloaded locale: %s", locale)

    async def _load_from_file(self, locale: LocaleCode) -> None:
        assert self._base_path is not None
        source_path = str(self._base_path / f"{locale}{LOCALE_FILE_SUFFIX}")
        try:
            path = resolve_locale_path(self._base_path, locale)
            source_path = str(path)
            tree = await asyncio.to_thread(read_locale_tree, self._reader, path)
        except (OSError, ValueError) as e:
            status = LoadStatus.NOT_FOUND if isinstance(e, FileNotFoundError) else LoadStatus.ERROR
            self._load_results.append(
                LocaleLoadResult(locale=locale, status=status, source_path=source_path, error=e)
            )
            diagnostic = ErrorTemplate.locale_data_missing(locale, source_path, str(e))
            if self._strict:
                raise MissingLocaleDataError(
                    diagnostic, locale=locale, source_path=source_path
                ) from e
            logger.warning("%s; using empty tables", diagnostic.message)
            # Empty tables prevent repeated I/O for a broken file
            self._tables[locale] = LocaleTables()
            return

        try:
            tables = self._ingestor.ingest(tree, locale=locale)
        except (TranslationError, TypeError) as e:
            self._load_results.append(
                LocaleLoadResult(
                    locale=locale, status=LoadStatus.ERROR, source_path=source_path, error=e
                )
            )
            raise

        self._tables[locale] = tables
        self._load_results.append(
            LocaleLoadResult(
                locale=locale,
                status=LoadStatus.SUCCESS,
                source_path=source_path,
                strings=len(tables.strings),
                patterns=len(tables.patterns),
            )
        )
        logger.debug("Loaded locale %s from %s", locale, source_path)
