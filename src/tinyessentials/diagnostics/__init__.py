"""Diagnostic system for tinyessentials errors.

Provides structured error diagnostics with codes and hints.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode
from .errors import (
    ConfigurationError,
    InvalidPatternError,
    MissingLocaleDataError,
    MissingTranslationError,
    TaskCancelledError,
    TaskQueueError,
    TinyError,
    TranslationError,
    UnknownHelperError,
    UnsupportedValueError,
)
from .templates import ErrorTemplate

__all__ = [
    "ConfigurationError",
    "Diagnostic",
    "DiagnosticCode",
    "ErrorTemplate",
    "InvalidPatternError",
    "MissingLocaleDataError",
    "MissingTranslationError",
    "TaskCancelledError",
    "TaskQueueError",
    "TinyError",
    "TranslationError",
    "UnknownHelperError",
    "UnsupportedValueError",
]
