"""
Tests for holiday providers.
"""

import json
import logging
from pathlib import Path

import pytest

from chronorange.adapters.holiday_source import FileHolidayProvider, StaticHolidayProvider


class TestStaticHolidayProvider:
    """Tests for StaticHolidayProvider."""

    def test_resolves_and_skips(self, caplog):
        with caplog.at_level(logging.WARNING):
            provider = StaticHolidayProvider(["2025-12-25", "bogus"])

        assert [h.to_date_string() for h in provider.get_holidays()] == ["2025-12-25"]
        assert "Skipping holiday entry 'bogus'" in caplog.text

    def test_returns_copy(self):
        provider = StaticHolidayProvider(["2025-12-25"])

        provider.get_holidays().clear()

        assert len(provider.get_holidays()) == 1


class TestFileHolidayProvider:
    """Tests for FileHolidayProvider."""

    def test_json_list(self, tmp_path: Path):
        path = tmp_path / "holidays.json"
        path.write_text(json.dumps(["2025-12-25", "2025-12-26"]), encoding="utf-8")

        provider = FileHolidayProvider(path)

        assert [h.to_date_string() for h in provider.get_holidays()] == ["2025-12-25", "2025-12-26"]

    def test_yaml_mapping(self, tmp_path: Path):
        path = tmp_path / "holidays.yaml"
        path.write_text("holidays:\n  - 2025-01-01\n  - '2025-05-01'\n", encoding="utf-8")

        provider = FileHolidayProvider(path)

        assert [h.to_date_string() for h in provider.get_holidays()] == ["2025-01-01", "2025-05-01"]

    def test_empty_yaml(self, tmp_path: Path):
        path = tmp_path / "holidays.yaml"
        path.write_text("", encoding="utf-8")

        assert FileHolidayProvider(path).get_holidays() == []

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError, match="Holiday file not found"):
            FileHolidayProvider(tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path: Path):
        path = tmp_path / "holidays.json"
        path.write_text("[2025-12-25", encoding="utf-8")

        with pytest.raises(ValueError, match="Invalid holiday file"):
            FileHolidayProvider(path)

    def test_wrong_shape(self, tmp_path: Path):
        path = tmp_path / "holidays.yaml"
        path.write_text("holidays: 2025-12-25\n", encoding="utf-8")

        with pytest.raises(ValueError, match="must contain a list of dates"):
            FileHolidayProvider(path)
