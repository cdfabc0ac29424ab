"""Locale file loading for file-backed translators.

Provides the protocol for byte readers, a filesystem implementation, the
path-traversal check for ``<base_path>/<locale>.json`` and the result
record kept for every load attempt.

Components:
    ResourceReader - Protocol for reading raw locale file bytes (structural typing)
    FileResourceReader - Disk-based reader
    LocaleLoadResult - Immutable result of a single locale load attempt
    resolve_locale_path - Safe path construction
    read_locale_tree - Read, decode and parse a locale file

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol

from tinyessentials.constants import LOCALE_FILE_SUFFIX
from tinyessentials.enums import LoadStatus
from tinyessentials.localization.types import LocaleCode

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Protocol
    "ResourceReader",
    # Concrete reader
    "FileResourceReader",
    # Load result type
    "LocaleLoadResult",
    # Helpers
    "read_locale_tree",
    "resolve_locale_path",
]


class ResourceReader(Protocol):
    """Protocol for reading locale files.

    Readers are synchronous; file-backed translators call them through
    ``asyncio.to_thread`` so the event loop is never blocked.

    Example:
        >>> class MemoryReader:
        ...     def __init__(self, files: dict[str, bytes]) -> None:
        ...         self.files = files
        ...     def read(self, path: Path) -> bytes:
        ...         try:
        ...             return self.files[path.name]
        ...         except KeyError:
        ...             raise FileNotFoundError(path) from None
    """

    def read(self, path: Path) -> bytes:
        """Return the raw bytes stored at path.

        Raises:
            FileNotFoundError: If nothing exists at path
            OSError: If the data cannot be read
        """
        ...


class FileResourceReader:
    """Reads locale files from the local filesystem."""

    __slots__ = ()

    def read(self, path: Path) -> bytes:
        return path.read_bytes()

    def __repr__(self) -> str:
        return "FileResourceReader()"


@dataclass(frozen=True, slots=True)
class LocaleLoadResult:
    """Result of loading a single locale file.

    Attributes:
        locale: Locale code that was loaded
        status: Load status (success, not_found, error)
        source_path: Path the file was read from (as given, unresolved)
        error: Exception if status is not SUCCESS, None otherwise
        strings: Number of string entries ingested
        patterns: Number of pattern entries ingested
    """

    locale: LocaleCode
    status: LoadStatus
    source_path: str
    error: Exception | None = None
    strings: int = 0
    patterns: int = 0

    @property
    def is_success(self) -> bool:
        """Check if the file loaded successfully."""
        return self.status == LoadStatus.SUCCESS

    @property
    def is_not_found(self) -> bool:
        """Check if the file was missing."""
        return self.status == LoadStatus.NOT_FOUND

    @property
    def is_error(self) -> bool:
        """Check if loading failed for another reason."""
        return self.status == LoadStatus.ERROR


def _is_safe_path(base_dir: Path, full_path: Path) -> bool:
    """Check if full_path is within base_dir once both are resolved."""
    try:
        full_path.resolve().relative_to(base_dir.resolve())
    except ValueError:
        return False
    return True


def resolve_locale_path(base_path: str | os.PathLike[str], locale: LocaleCode) -> Path:
    """Build ``<base_path>/<locale>.json``.

    Sub-directories inside base_path are allowed (``temp/merged``); paths
    that escape it are not.

    Raises:
        ValueError: If locale is empty, absolute or escapes base_path
    """
    if not locale:
        msg = "Locale code cannot be empty"
        raise ValueError(msg)
    if Path(locale).is_absolute() or locale.startswith(("/", "\\")):
        msg = f"Absolute paths not allowed in locale: '{locale}'"
        raise ValueError(msg)

    base_dir = Path(base_path)
    full_path = base_dir / f"{locale}{LOCALE_FILE_SUFFIX}"
    if not _is_safe_path(base_dir, full_path):
        msg = f"Path traversal detected: locale '{locale}' escapes base path"
        raise ValueError(msg)
    return full_path


def read_locale_tree(reader: ResourceReader, path: Path) -> dict[str, Any]:
    """Read and parse a locale file.

    Returns:
        Parsed JSON object

    Raises:
        OSError: If the reader fails (FileNotFoundError when missing)
        UnicodeDecodeError: If the bytes are not UTF-8
        json.JSONDecodeError: If the text is not JSON
        ValueError: If the JSON root is not an object
    """
    text = reader.read(path).decode("utf-8")
    data = json.loads(text)
    if not isinstance(data, dict):
        msg = f"JSON root must be an object, got {type(data).__name__}"
        raise ValueError(msg)
    return data
