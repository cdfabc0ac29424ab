"""Tests for RateLimiterConfig validation."""

import dataclasses
from typing import Any

import pytest

from tinyessentials import ConfigurationError, RateLimiterConfig
from tinyessentials.constants import DEFAULT_MAX_IDLE_MS
from tinyessentials.diagnostics import DiagnosticCode


class TestRateLimiterConfig:
    def test_defaults(self) -> None:
        config = RateLimiterConfig(max_hits=3, interval=1000)
        assert config.cleanup_interval is None
        assert config.max_idle == DEFAULT_MAX_IDLE_MS

    def test_all_fields(self) -> None:
        config = RateLimiterConfig(max_hits=3, interval=1000, cleanup_interval=500, max_idle=1200)
        assert (config.max_hits, config.interval, config.cleanup_interval, config.max_idle) == (
            3, 1000, 500, 1200,
        )

    def test_frozen(self) -> None:
        config = RateLimiterConfig(max_hits=3, interval=1000)
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.max_hits = 5  # type: ignore[misc]

    @pytest.mark.parametrize(
        ("field", "value"),
        [
            ("max_hits", 0),
            ("max_hits", -1),
            ("max_hits", 1.5),
            ("max_hits", True),
            ("interval", 0),
            ("interval", "1000"),
            ("cleanup_interval", 0),
            ("cleanup_interval", False),
            ("max_idle", 0),
            ("max_idle", None),
        ],
    )
    def test_rejects_invalid(self, field: str, value: Any) -> None:
        kwargs: dict[str, Any] = {"max_hits": 3, "interval": 1000}
        kwargs[field] = value
        with pytest.raises(ConfigurationError) as exc_info:
            RateLimiterConfig(**kwargs)
        diagnostic = exc_info.value.diagnostic
        assert diagnostic is not None
        assert diagnostic.code is DiagnosticCode.LIMITER_CONFIG_INVALID
        assert diagnostic.key == field

    def test_error_is_value_error(self) -> None:
        with pytest.raises(ValueError, match="max_hits"):
            RateLimiterConfig(max_hits=0, interval=1000)
