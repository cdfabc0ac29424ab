"""Diagnostic codes and data structures.

Defines error codes and diagnostic messages.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by component:
        1000-1999: Translation engine
        2000-2999: Sequential task queue
        3000-3999: Rate limiter
    """

    # Translation engine (1000-1999)
    INVALID_CONFIGURATION = 1001
    LOCALE_DATA_MISSING = 1002
    TRANSLATION_NOT_FOUND = 1003
    HELPER_NOT_FOUND = 1004
    PATTERN_INVALID = 1005
    VALUE_UNSUPPORTED = 1006
    MODE_MISMATCH = 1007

    # Sequential task queue (2000-2999)
    TASK_CANCELLED = 2001

    # Rate limiter (3000-3999)
    LIMITER_CONFIG_INVALID = 3001


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        hint: Suggestion for fixing the error
        locale: Locale involved in the failure (translation errors)
        key: Translation key, helper name or task id involved
    """

    code: DiagnosticCode
    message: str
    hint: str | None = None
    locale: str | None = None
    key: str | None = None

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like a compiler error.

        Example output:
            error[TRANSLATION_NOT_FOUND]: Missing translation for key 'greet'
              = key: greet
              = help: Add the key to the default locale

        Control characters in user-supplied fields are escaped so that
        diagnostics stay on one line per field in logs.

        Returns:
            Formatted error message
        """
        lines = [f"error[{self.code.name}]: {_escape(self.message)}"]
        if self.locale is not None:
            lines.append(f"  = locale: {_escape(self.locale)}")
        if self.key is not None:
            lines.append(f"  = key: {_escape(self.key)}")
        if self.hint:
            lines.append(f"  = help: {_escape(self.hint)}")
        return "\n".join(lines)


def _escape(text: str) -> str:
    return text.replace("\r", "\\r").replace("\n", "\\n").replace("\t", "\\t")
