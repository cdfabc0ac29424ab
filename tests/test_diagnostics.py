"""Tests for diagnostic codes, message templates and the exception hierarchy."""

import pytest
from hypothesis import event, given
from hypothesis import strategies as st

from tinyessentials.constants import CANCELLED_TASK_MESSAGE
from tinyessentials.diagnostics import (
    ConfigurationError,
    Diagnostic,
    DiagnosticCode,
    ErrorTemplate,
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


class TestDiagnosticCode:
    """Code ranges stay grouped by component."""

    def test_codes_are_unique(self) -> None:
        values = [code.value for code in DiagnosticCode]
        assert len(values) == len(set(values))

    @pytest.mark.parametrize(
        ("code", "low", "high"),
        [
            (DiagnosticCode.TRANSLATION_NOT_FOUND, 1000, 1999),
            (DiagnosticCode.MODE_MISMATCH, 1000, 1999),
            (DiagnosticCode.TASK_CANCELLED, 2000, 2999),
            (DiagnosticCode.LIMITER_CONFIG_INVALID, 3000, 3999),
        ],
    )
    def test_code_ranges(self, code: DiagnosticCode, low: int, high: int) -> None:
        assert low <= code.value <= high


class TestDiagnosticFormatting:
    """Diagnostic.format_error() output."""

    def test_str_is_message(self) -> None:
        diagnostic = Diagnostic(code=DiagnosticCode.PATTERN_INVALID, message="bad regex")
        assert str(diagnostic) == "bad regex"

    def test_format_error_full(self) -> None:
        diagnostic = Diagnostic(
            code=DiagnosticCode.LOCALE_DATA_MISSING,
            message="Failed",
            hint="Check the file",
            locale="pt",
            key="greet",
        )
        assert diagnostic.format_error() == (
            "error[LOCALE_DATA_MISSING]: Failed\n"
            "  = locale: pt\n"
            "  = key: greet\n"
            "  = help: Check the file"
        )

    def test_format_error_minimal(self) -> None:
        diagnostic = Diagnostic(code=DiagnosticCode.VALUE_UNSUPPORTED, message="nope")
        assert diagnostic.format_error() == "error[VALUE_UNSUPPORTED]: nope"

    @given(key=st.text(max_size=30))
    def test_format_error_one_line_per_field(self, key: str) -> None:
        """Control characters in user input never add lines."""
        diagnostic = Diagnostic(code=DiagnosticCode.HELPER_NOT_FOUND, message="m", key=key)
        has_control = any(ch in key for ch in "\r\n\t")
        event(f"key_has_control={has_control}")
        assert len(diagnostic.format_error().split("\n")) == 2


class TestErrorTemplate:
    """Templates produce stable, documented messages."""

    def test_translation_not_found(self) -> None:
        diagnostic = ErrorTemplate.translation_not_found("greet")
        assert diagnostic.code is DiagnosticCode.TRANSLATION_NOT_FOUND
        assert diagnostic.message == "Missing translation for key 'greet'"
        assert diagnostic.key == "greet"

    def test_helper_not_found(self) -> None:
        diagnostic = ErrorTemplate.helper_not_found("plural")
        assert diagnostic.message == "Helper 'plural' is not registered"

    def test_locale_data_missing(self) -> None:
        diagnostic = ErrorTemplate.locale_data_missing("pt", "/x/pt.json", "boom")
        assert diagnostic.message == "Failed to load or parse /x/pt.json: boom"
        assert diagnostic.locale == "pt"

    def test_pattern_invalid(self) -> None:
        diagnostic = ErrorTemplate.pattern_invalid("(", "missing )")
        assert diagnostic.message == "Invalid regex '(': missing )"

    def test_value_unsupported(self) -> None:
        diagnostic = ErrorTemplate.value_unsupported("int", key="count")
        assert diagnostic.message == "Unsupported entry type: int"
        assert diagnostic.key == "count"

    def test_mode_mismatch(self) -> None:
        diagnostic = ErrorTemplate.mode_mismatch("load_locale_in_memory", "in-memory")
        assert diagnostic.message == "load_locale_in_memory() is only available in 'in-memory' mode"

    def test_configuration_templates(self) -> None:
        assert ErrorTemplate.invalid_configuration("mode", "is bad").message == "'mode' is bad"
        limiter = ErrorTemplate.limiter_config_invalid("max_hits", "must be positive")
        assert limiter.code is DiagnosticCode.LIMITER_CONFIG_INVALID


class TestExceptionHierarchy:
    """Every error derives from TinyError and keeps its extra attributes."""

    @pytest.mark.parametrize(
        "error_type",
        [
            MissingLocaleDataError,
            MissingTranslationError,
            UnknownHelperError,
            InvalidPatternError,
            UnsupportedValueError,
        ],
    )
    def test_translation_errors(self, error_type: type[TranslationError]) -> None:
        assert issubclass(error_type, TranslationError)
        assert issubclass(error_type, TinyError)

    def test_configuration_error_is_value_error(self) -> None:
        error = ConfigurationError(ErrorTemplate.invalid_configuration("mode", "is bad"))
        assert isinstance(error, ValueError)
        assert error.diagnostic is not None
        assert str(error).startswith("error[INVALID_CONFIGURATION]")

    def test_plain_message_has_no_diagnostic(self) -> None:
        error = TinyError("plain")
        assert error.diagnostic is None
        assert str(error) == "plain"

    def test_attributes(self) -> None:
        missing = MissingLocaleDataError("x", locale="pt", source_path="/p")
        assert (missing.locale, missing.source_path) == ("pt", "/p")
        assert MissingTranslationError("x", key="k").key == "k"
        assert UnknownHelperError("x", helper_name="h").helper_name == "h"
        assert InvalidPatternError("x", source="(").source == "("

    def test_task_cancelled_error(self) -> None:
        error = TaskCancelledError(CANCELLED_TASK_MESSAGE, task_id="a")
        assert isinstance(error, TaskQueueError)
        assert str(error) == CANCELLED_TASK_MESSAGE
        assert error.task_id == "a"
        assert error.diagnostic is not None
        assert error.diagnostic.code is DiagnosticCode.TASK_CANCELLED
