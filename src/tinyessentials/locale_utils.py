"""Locale utilities built on Babel.

Centralizes locale code normalization and CLDR lookups used by the
translation engine for diagnostics and statistics. Locale codes double as
file names, so the engine never rewrites them; normalization only applies
when talking to Babel.

Python 3.13+.
"""

from __future__ import annotations

import functools
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from babel import Locale

__all__ = [
    "describe_locale",
    "get_babel_locale",
    "normalize_locale",
]


def normalize_locale(locale_code: str) -> str:
    """Convert BCP-47 locale code to POSIX format for Babel.

    BCP-47 uses hyphens (en-US), while Babel/POSIX uses underscores (en_US).

    Args:
        locale_code: BCP-47 locale code (e.g., "en-US", "pt-BR")

    Returns:
        POSIX-formatted locale code (e.g., "en_US", "pt_BR")

    Example:
        >>> normalize_locale("pt-BR")
        'pt_BR'
        >>> normalize_locale("en")
        'en'
    """
    return locale_code.replace("-", "_")


@functools.lru_cache(maxsize=128)
def get_babel_locale(locale_code: str) -> Locale:
    """Get a Babel Locale object with caching.

    Locale objects are immutable, so sharing the cache between Translator
    instances is safe.

    Args:
        locale_code: Locale code (BCP-47 or POSIX format accepted)

    Returns:
        Babel Locale object

    Raises:
        babel.core.UnknownLocaleError: If locale is not recognized
        ValueError: If locale format is invalid
    """
    # Lazy import: Babel loads CLDR data at import time; defer until needed
    from babel import Locale  # noqa: PLC0415

    return Locale.parse(normalize_locale(locale_code))


def describe_locale(locale_code: str, display_locale: str = "en") -> str | None:
    """Return the CLDR display name of a locale, or None if Babel cannot parse it.

    Locale codes used as file names (``temp/merged``) or private codes are
    legitimate for the engine, so failures are not errors here.

    Example:
        >>> describe_locale("pt-BR")
        'Portuguese (Brazil)'
        >>> describe_locale("not a locale") is None
        True
    """
    from babel.core import UnknownLocaleError  # noqa: PLC0415

    try:
        locale = get_babel_locale(locale_code)
    except (UnknownLocaleError, ValueError, TypeError):
        return None
    return locale.get_display_name(display_locale)
