"""
Tests for batch timezone conversion.
"""

import logging

import pendulum
import pytest

from chronorange.domain.exceptions import MalformedInputError, UnknownTimezoneError
from chronorange.domain.timezone_converter import convert_all


class TestConvertAll:
    """Tests for convert_all."""

    def test_converts_every_instant(self):
        instants = [
            "2025-06-10T12:00:00+00:00",
            pendulum.datetime(2025, 6, 10, 9, tz="America/New_York"),
            1749513600,
        ]

        result = convert_all(instants, "Asia/Tokyo", "YYYY-MM-DD HH:mm")

        assert result == ["2025-06-10 21:00", "2025-06-10 22:00", "2025-06-10 09:00"]

    def test_default_format(self):
        result = convert_all(["2025-06-10T12:00:00Z"], "Asia/Tokyo")

        assert len(result) == 1
        assert result[0].startswith("2025-06-10 21:00:00")

    def test_unresolvable_instants_are_dropped(self, caplog):
        instants = ["not a date", "2025-06-10T12:00:00Z", None, "2025-02-30"]

        with caplog.at_level(logging.WARNING):
            result = convert_all(instants, "Europe/Berlin", "HH:mm")

        assert result == ["14:00"]
        assert caplog.text.count("Dropping unresolvable instant") == 3

    def test_empty_batch(self):
        assert convert_all([], "UTC") == []

    def test_unknown_zone_fails_whole_call(self):
        with pytest.raises(UnknownTimezoneError):
            convert_all(["2025-06-10T12:00:00Z"], "Mars/Olympus")

    def test_unknown_zone_fails_even_for_empty_batch(self):
        with pytest.raises(UnknownTimezoneError):
            convert_all([], "Mars/Olympus")

    @pytest.mark.parametrize("value", ["2025-06-10T12:00:00Z", 42, None])
    def test_rejects_non_collections(self, value):
        with pytest.raises(MalformedInputError, match="Expected a collection of instants"):
            convert_all(value, "UTC")
