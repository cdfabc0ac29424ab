"""Enumerations for tinyessentials type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class TranslationMode(StrEnum):
    """Storage mode of a Translator.

    StrEnum provides automatic string conversion: str(TranslationMode.IN_MEMORY) == "in-memory"
    """

    IN_MEMORY = "in-memory"
    """All locale tables are provided by the caller and kept in memory."""

    FILE_BACKED = "file-backed"
    """Locales are read lazily from <base_path>/<locale>.json."""


class LoadStatus(StrEnum):
    """Outcome of a single locale file load attempt."""

    SUCCESS = "success"
    """File read, parsed and ingested."""

    NOT_FOUND = "not_found"
    """File does not exist."""

    ERROR = "error"
    """File exists but could not be read, decoded or parsed."""


class EntryMarker(StrEnum):
    """Marker carried by a queue entry.

    Ordinary entries carry no marker at all.
    """

    POINT = "point"
    """Fan-out point: runs concurrently with adjacent point entries."""


__all__ = [
    "EntryMarker",
    "LoadStatus",
    "TranslationMode",
]
