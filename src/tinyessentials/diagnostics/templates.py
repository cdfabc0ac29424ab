"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode


class ErrorTemplate:
    """Centralized error message templates.

    All diagnostics are created here. NO f-strings in exception constructors!
    This keeps messages:
        - Testable
        - Consistently formatted
        - Documented in one place
    """

    @staticmethod
    def invalid_configuration(option: str, requirement: str) -> Diagnostic:
        """Constructor option failed validation.

        Args:
            option: Option name (e.g., "default_locale")
            requirement: What the option must be

        Returns:
            Diagnostic for INVALID_CONFIGURATION
        """
        msg = f"'{option}' {requirement}"
        return Diagnostic(
            code=DiagnosticCode.INVALID_CONFIGURATION,
            message=msg,
            key=option,
        )

    @staticmethod
    def mode_mismatch(operation: str, mode: str) -> Diagnostic:
        """Operation is not available in the translator's mode.

        Args:
            operation: Method name
            mode: Mode the operation requires

        Returns:
            Diagnostic for MODE_MISMATCH
        """
        msg = f"{operation}() is only available in '{mode}' mode"
        return Diagnostic(
            code=DiagnosticCode.MODE_MISMATCH,
            message=msg,
            hint="Construct the Translator with the matching mode",
        )

    @staticmethod
    def locale_data_missing(locale: str, source_path: str, reason: str) -> Diagnostic:
        """Locale file could not be loaded.

        Args:
            locale: Locale code being loaded
            source_path: File path that failed
            reason: Underlying error text

        Returns:
            Diagnostic for LOCALE_DATA_MISSING
        """
        msg = f"Failed to load or parse {source_path}: {reason}"
        return Diagnostic(
            code=DiagnosticCode.LOCALE_DATA_MISSING,
            message=msg,
            hint="Check that the file exists and holds a UTF-8 JSON object",
            locale=locale,
        )

    @staticmethod
    def translation_not_found(key: str) -> Diagnostic:
        """Key missing from every locale in the resolution order.

        Args:
            key: Translation key

        Returns:
            Diagnostic for TRANSLATION_NOT_FOUND
        """
        msg = f"Missing translation for key '{key}'"
        return Diagnostic(
            code=DiagnosticCode.TRANSLATION_NOT_FOUND,
            message=msg,
            hint="Add the key to the default locale",
            key=key,
        )

    @staticmethod
    def helper_not_found(name: str) -> Diagnostic:
        """Helper reference names an unregistered helper.

        Args:
            name: Helper name

        Returns:
            Diagnostic for HELPER_NOT_FOUND
        """
        msg = f"Helper '{name}' is not registered"
        return Diagnostic(
            code=DiagnosticCode.HELPER_NOT_FOUND,
            message=msg,
            hint="Call register_helper() before resolving entries that use it",
            key=name,
        )

    @staticmethod
    def pattern_invalid(source: str, reason: str) -> Diagnostic:
        """Regex source failed to compile.

        Args:
            source: Regex source text
            reason: re.error message

        Returns:
            Diagnostic for PATTERN_INVALID
        """
        msg = f"Invalid regex '{source}': {reason}"
        return Diagnostic(
            code=DiagnosticCode.PATTERN_INVALID,
            message=msg,
            hint="Patterns use Python 're' syntax and are compiled without flags",
        )

    @staticmethod
    def value_unsupported(type_name: str, key: str | None = None) -> Diagnostic:
        """Leaf value has an unsupported shape.

        Args:
            type_name: Python type name of the offending value
            key: Flattened key holding the value, when known

        Returns:
            Diagnostic for VALUE_UNSUPPORTED
        """
        msg = f"Unsupported entry type: {type_name}"
        return Diagnostic(
            code=DiagnosticCode.VALUE_UNSUPPORTED,
            message=msg,
            hint="Entries must be strings, helper references or callables",
            key=key,
        )

    @staticmethod
    def limiter_config_invalid(option: str, requirement: str) -> Diagnostic:
        """Rate limiter option failed validation.

        Args:
            option: Option name
            requirement: What the option must be

        Returns:
            Diagnostic for LIMITER_CONFIG_INVALID
        """
        msg = f"'{option}' {requirement}"
        return Diagnostic(
            code=DiagnosticCode.LIMITER_CONFIG_INVALID,
            message=msg,
            key=option,
        )
