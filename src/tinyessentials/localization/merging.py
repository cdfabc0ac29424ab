"""Merge several locale JSON files into one.

Useful for shipping a single resource built from a base locale plus
overrides; the merged file can be selected like any other locale
(``set_locale("build/merged")`` under the same base path).

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from tinyessentials.diagnostics import ErrorTemplate, MissingLocaleDataError
from tinyessentials.localization.loading import FileResourceReader, read_locale_tree

__all__ = ["deep_merge", "merge_locale_files"]

logger = logging.getLogger(__name__)


def deep_merge(target: dict[str, Any], source: Mapping[str, Any]) -> dict[str, Any]:
    """Recursively merge source into target (in place) and return target.

    Nested objects merge key by key; any other value from source replaces
    the one in target.

    Example:
        >>> deep_merge({"a": {"x": "1"}, "b": "2"}, {"a": {"y": "3"}, "b": "4"})
        {'a': {'x': '1', 'y': '3'}, 'b': '4'}
    """
    for key, value in source.items():
        current = target.get(key)
        if isinstance(value, Mapping) and isinstance(current, dict):
            deep_merge(current, value)
        elif isinstance(value, Mapping):
            target[key] = deep_merge({}, value)
        else:
            target[key] = value
    return target


def merge_locale_files(
    paths: Iterable[str | os.PathLike[str]],
    output: str | os.PathLike[str],
    *,
    indent: int | None = 2,
) -> dict[str, Any]:
    """Deep-merge JSON locale files in order and write the result.

    Later files override scalar values of earlier ones. Parent directories
    of output are created as needed.

    Args:
        paths: Source files, lowest priority first
        output: Destination file (UTF-8 JSON)
        indent: JSON indentation passed to json.dumps (None for compact output)

    Returns:
        The merged object

    Raises:
        MissingLocaleDataError: If a source cannot be read or is not a JSON object
        OSError: If output cannot be written
    """
    reader = FileResourceReader()
    merged: dict[str, Any] = {}
    for source in paths:
        path = Path(source)
        try:
            data = read_locale_tree(reader, path)
        except (OSError, ValueError) as e:
            raise MissingLocaleDataError(
                ErrorTemplate.locale_data_missing(path.stem, str(path), str(e)),
                locale=path.stem,
                source_path=str(path),
            ) from e
        deep_merge(merged, data)

    destination = Path(output)
    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_text(
        json.dumps(merged, indent=indent, ensure_ascii=False) + "\n", encoding="utf-8"
    )
    logger.debug("Merged locale files into %s", destination)
    return merged
