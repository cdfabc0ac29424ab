"""tinyessentials exception hierarchy with structured diagnostics.

All component errors derive from TinyError and may carry a Diagnostic
for rich error information.

Hierarchy:
    TinyError
    ├─ ConfigurationError (also a ValueError)
    ├─ TranslationError
    │  ├─ MissingLocaleDataError
    │  ├─ MissingTranslationError
    │  ├─ UnknownHelperError
    │  ├─ InvalidPatternError
    │  └─ UnsupportedValueError
    └─ TaskQueueError
       └─ TaskCancelledError

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode


class TinyError(Exception):
    """Base exception for all tinyessentials errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize TinyError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class ConfigurationError(TinyError, ValueError):
    """Invalid constructor options or configuration values.

    Subclasses ValueError so callers validating input generically keep working.
    """


class TranslationError(TinyError):
    """Engine-side failure inside the translation engine.

    Strict mode surfaces these to the caller; non-strict mode replaces them
    with graceful fallbacks. Errors raised by user helpers are never wrapped.
    """


class MissingLocaleDataError(TranslationError):
    """Locale file could not be read, decoded or parsed.

    Attributes:
        locale: Locale whose data was requested
        source_path: Path of the file that failed
    """

    def __init__(
        self,
        message: str | Diagnostic,
        *,
        locale: str = "",
        source_path: str = "",
    ) -> None:
        super().__init__(message)
        self.locale = locale
        self.source_path = source_path


class MissingTranslationError(TranslationError):
    """No locale in the resolution order contains the key.

    Fallback: return the key itself.
    """

    def __init__(self, message: str | Diagnostic, *, key: str = "") -> None:
        super().__init__(message)
        self.key = key


class UnknownHelperError(TranslationError):
    """Helper reference names a helper that is not registered.

    Fallback: empty string. The helper facade raises this regardless of
    strict mode.
    """

    def __init__(self, message: str | Diagnostic, *, helper_name: str = "") -> None:
        super().__init__(message)
        self.helper_name = helper_name


class InvalidPatternError(TranslationError):
    """Regex source from a resource failed to compile.

    Fallback: a never-matching pattern.
    """

    def __init__(self, message: str | Diagnostic, *, source: str = "") -> None:
        super().__init__(message)
        self.source = source


class UnsupportedValueError(TranslationError):
    """Leaf value has a shape the engine cannot render.

    Fallback: empty string.
    """


class TaskQueueError(TinyError):
    """Base class for sequential task queue errors."""


class TaskCancelledError(TaskQueueError):
    """Task was cancelled before its body started.

    The message is always CANCELLED_TASK_MESSAGE, whichever path
    (queued, delayed, picked up) performed the cancellation, so str(error)
    is the bare message. The diagnostic is attached for structured logging.

    Attributes:
        task_id: Identifier of the cancelled task
    """

    def __init__(self, message: str, *, task_id: str | None = None) -> None:
        super().__init__(message)
        self.task_id = task_id
        self.diagnostic = Diagnostic(
            code=DiagnosticCode.TASK_CANCELLED,
            message=message,
            key=task_id,
        )
