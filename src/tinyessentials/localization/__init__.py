"""Translation engine package.

Provides the full translation stack: type aliases, helper dispatch,
raw tree ingestion, file loading and the Translator itself.

Submodules:
    types         - PEP 695 type aliases, HelperReference, PatternEntry
    helpers       - HelperRegistry, HelperFacade
    interpolation - {dotted.path} template rendering
    regex_cache   - RegexCache (thread-safe LRU of compiled patterns)
    ingestion     - TreeIngestor, LocaleTables
    loading       - ResourceReader protocol, FileResourceReader, LocaleLoadResult
    merging       - merge_locale_files, deep_merge
    translator    - Translator, TranslatorStats, LocaleStats

Python 3.13+.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability

from tinyessentials.enums import LoadStatus, TranslationMode
from tinyessentials.localization.helpers import HelperFacade, HelperRegistry
from tinyessentials.localization.interpolation import dot_get, interpolate
from tinyessentials.localization.loading import (
    FileResourceReader,
    LocaleLoadResult,
    ResourceReader,
)
from tinyessentials.localization.merging import deep_merge, merge_locale_files
from tinyessentials.localization.regex_cache import RegexCache
from tinyessentials.localization.translator import LocaleStats, Translator, TranslatorStats
from tinyessentials.localization.types import (
    Helper,
    HelperName,
    HelperReference,
    LeafValue,
    LocaleCode,
    PatternEntry,
    RawTree,
    TranslationKey,
)

__all__ = [
    # Main engine
    "Translator",
    "TranslationMode",
    "TranslatorStats",
    "LocaleStats",
    # Helpers
    "HelperFacade",
    "HelperRegistry",
    "HelperReference",
    # Patterns
    "PatternEntry",
    "RegexCache",
    # Loading
    "ResourceReader",
    "FileResourceReader",
    "LoadStatus",
    "LocaleLoadResult",
    "merge_locale_files",
    "deep_merge",
    # Rendering
    "interpolate",
    "dot_get",
    # Type aliases for user code type annotations
    "Helper",
    "HelperName",
    "LeafValue",
    "LocaleCode",
    "RawTree",
    "TranslationKey",
]
