"""Tests for deep_merge and merge_locale_files."""

import json
from pathlib import Path

import pytest

from tinyessentials.diagnostics import MissingLocaleDataError
from tinyessentials.localization import deep_merge, merge_locale_files


class TestDeepMerge:
    def test_nested_merge(self) -> None:
        target = {"a": {"x": "1"}, "b": "2"}
        result = deep_merge(target, {"a": {"y": "3"}, "b": "4"})
        assert result is target
        assert target == {"a": {"x": "1", "y": "3"}, "b": "4"}

    def test_scalar_replaced_by_mapping(self) -> None:
        assert deep_merge({"a": "x"}, {"a": {"b": "y"}}) == {"a": {"b": "y"}}

    def test_mapping_replaced_by_scalar(self) -> None:
        assert deep_merge({"a": {"b": "y"}}, {"a": "x"}) == {"a": "x"}

    def test_source_not_aliased(self) -> None:
        source = {"a": {"b": "y"}}
        merged = deep_merge({}, source)
        merged["a"]["b"] = "changed"
        assert source == {"a": {"b": "y"}}


class TestMergeLocaleFiles:
    def test_merge_and_write(self, locale_dir: Path) -> None:
        output = locale_dir / "build" / "merged.json"
        merged = merge_locale_files([locale_dir / "en.json", locale_dir / "pt.json"], output)
        assert merged["app"] == {"title": "Meu App"}
        assert merged["rules"]["$pattern"] == "^user\\."
        text = output.read_text(encoding="utf-8")
        assert text.endswith("\n")
        assert "Olá" in text
        assert json.loads(text) == merged

    def test_compact_output(self, locale_dir: Path) -> None:
        output = locale_dir / "compact.json"
        merge_locale_files([locale_dir / "es.json"], output, indent=None)
        assert output.read_text(encoding="utf-8").count("\n") == 1

    def test_missing_source(self, tmp_path: Path) -> None:
        with pytest.raises(MissingLocaleDataError) as exc_info:
            merge_locale_files([tmp_path / "nope.json"], tmp_path / "out.json")
        assert exc_info.value.locale == "nope"
        assert isinstance(exc_info.value.__cause__, FileNotFoundError)
        assert not (tmp_path / "out.json").exists()

    def test_non_object_source(self, tmp_path: Path) -> None:
        (tmp_path / "list.json").write_text("[]", encoding="utf-8")
        with pytest.raises(MissingLocaleDataError):
            merge_locale_files([tmp_path / "list.json"], tmp_path / "out.json")

    def test_no_sources_writes_empty_object(self, tmp_path: Path) -> None:
        assert merge_locale_files([], tmp_path / "out.json") == {}
        assert (tmp_path / "out.json").read_text(encoding="utf-8") == "{}\n"
