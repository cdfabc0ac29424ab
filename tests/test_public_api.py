"""Tests for the package entry point and subpackage exports.

Covers:
- __all__ integrity: every exported name is accessible
- Fallback version when package metadata is unavailable
- Re-exports resolve to the defining modules
"""

from __future__ import annotations

import importlib
from importlib.metadata import PackageNotFoundError
from unittest.mock import patch

import pytest

import tinyessentials


class TestAllIntegrity:
    @pytest.mark.parametrize(
        "module_name",
        [
            "tinyessentials",
            "tinyessentials.localization",
            "tinyessentials.tasks",
            "tinyessentials.ratelimit",
            "tinyessentials.diagnostics",
        ],
    )
    def test_every_exported_name_exists(self, module_name: str) -> None:
        module = importlib.import_module(module_name)
        for name in module.__all__:
            assert hasattr(module, name), f"{module_name}.{name} missing"

    def test_no_duplicates(self) -> None:
        assert len(tinyessentials.__all__) == len(set(tinyessentials.__all__))

    def test_reexports_are_identical(self) -> None:
        from tinyessentials.localization.translator import Translator
        from tinyessentials.ratelimit.limiter import SlidingWindowRateLimiter
        from tinyessentials.tasks.queue import SequentialTaskQueue

        assert tinyessentials.Translator is Translator
        assert tinyessentials.SequentialTaskQueue is SequentialTaskQueue
        assert tinyessentials.SlidingWindowRateLimiter is SlidingWindowRateLimiter


class TestVersion:
    def test_version_is_string(self) -> None:
        assert isinstance(tinyessentials.__version__, str)
        assert tinyessentials.__version__

    def test_fallback_version(self) -> None:
        with patch("importlib.metadata.version", side_effect=PackageNotFoundError):
            reloaded = importlib.reload(tinyessentials)
            assert reloaded.__version__ == "0.0.0+dev"
        importlib.reload(tinyessentials)


class TestErrorHierarchy:
    def test_public_errors_share_base(self) -> None:
        for error_type in (
            tinyessentials.ConfigurationError,
            tinyessentials.TranslationError,
            tinyessentials.TaskCancelledError,
        ):
            assert issubclass(error_type, tinyessentials.TinyError)
