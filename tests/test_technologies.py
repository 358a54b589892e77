"""Tests for the reference technology table."""

import json

import pytest

from repo_insight.technologies import (
    CATEGORIES,
    DEFAULT_TECHNOLOGIES,
    DEMAND_LEVELS,
    TechnologyInfo,
    TechnologyTableError,
    flatten_table,
    load_table,
)


class TestDefaultTable:
    def test_entries_are_well_formed(self):
        for partition in DEFAULT_TECHNOLOGIES.values():
            for info in partition.values():
                assert info.category in CATEGORIES
                assert info.demand in DEMAND_LEVELS

    def test_first_definition_wins(self):
        flat = flatten_table(DEFAULT_TECHNOLOGIES)
        assert flat["Vue"].category == "language"
        assert flat["React"].category == "framework"

    def test_flatten_keeps_partition_order(self):
        table = {
            "languages": {"Go": TechnologyInfo("language", "high")},
            "tools": {"Go": TechnologyInfo("tool", "low"), "Make": TechnologyInfo("tool", "low")},
        }
        flat = flatten_table(table)
        assert list(flat) == ["Go", "Make"]
        assert flat["Go"].demand == "high"


class TestLoadTable:
    def _write(self, tmp_path, data):
        path = tmp_path / "tech.json"
        path.write_text(json.dumps(data))
        return path

    def test_load(self, tmp_path):
        path = self._write(tmp_path, {
            "languages": {"Zig": {"demand": "low", "related": ["Systems Programming"]}},
            "frameworks": {"Phoenix": {"category": "framework", "demand": "medium"}},
        })
        table = load_table(path)
        assert table["languages"]["Zig"] == TechnologyInfo("language", "low", ("Systems Programming",))
        assert table["frameworks"]["Phoenix"].related == ()

    def test_unknown_partition_needs_category(self, tmp_path):
        path = self._write(tmp_path, {"extras": {"Nix": {"demand": "low"}}})
        with pytest.raises(TechnologyTableError, match="Nix"):
            load_table(path)
        path = self._write(tmp_path, {"extras": {"Nix": {"category": "tool", "demand": "low"}}})
        assert load_table(path)["extras"]["Nix"].category == "tool"

    @pytest.mark.parametrize("data,match", [
        ([], "top level"),
        ({"languages": []}, "partition"),
        ({"languages": {"Go": {"category": "language"}}}, "missing"),
        ({"languages": {"Go": {"demand": "extreme"}}}, "demand"),
        ({"languages": {"Go": {"category": "runtime", "demand": "high"}}}, "category"),
        ({"languages": {"Go": "high"}}, "Go"),
        ({"languages": {"Go": {"demand": "high", "related": 5}}}, "related"),
        ({"languages": {"Go": {"demand": "high", "related": "Docker"}}}, "related"),
        ({"languages": {"Go": {"demand": "high", "related": ["Docker", 3]}}}, "related"),
    ])
    def test_malformed(self, tmp_path, data, match):
        with pytest.raises(TechnologyTableError, match=match):
            load_table(self._write(tmp_path, data))

    def test_not_json(self, tmp_path):
        path = tmp_path / "tech.json"
        path.write_text("{not json")
        with pytest.raises(TechnologyTableError, match="Cannot read"):
            load_table(path)

    def test_is_a_value_error(self, tmp_path):
        with pytest.raises(ValueError):
            load_table(tmp_path / "missing.json")
