"""
Tests for duration aggregation.
"""

import pendulum
import pytest

from chronorange.domain.exceptions import InvalidRangeError, MalformedInputError
from chronorange.domain.models import TimeRange
from chronorange.domain.range_aggregator import aggregate


class TestAggregate:
    """Tests for aggregate."""

    def test_empty_collection_is_zero(self):
        assert aggregate([], "day") == 0

    def test_fractional_days(self):
        assert aggregate([("2025-06-10T00:00", "2025-06-11T12:00")], "days") == 1.5

    def test_sums_mixed_representations(self):
        ranges = [
            TimeRange(start=pendulum.datetime(2025, 6, 10, 9), end=pendulum.datetime(2025, 6, 10, 17)),
            ("2025-06-11T09:00", "2025-06-11T12:30"),
            {"start": "2025-06-12T13:00", "end": "2025-06-12T13:00"},
        ]

        assert aggregate(ranges, "hour") == 11.5
        assert aggregate(ranges, "minute") == 690

    def test_overlapping_ranges_are_counted_per_range(self):
        ranges = [("2025-06-10T09:00", "2025-06-10T11:00"), ("2025-06-10T10:00", "2025-06-10T12:00")]

        assert aggregate(ranges, "hour") == 4

    def test_months(self):
        ranges = [("2025-01-15", "2025-03-15"), ("2025-06-01", "2025-07-01")]

        assert aggregate(ranges, "month") == 3.0

    def test_accepts_generator(self):
        ranges = (("2025-06-10", "2025-06-11") for _ in range(3))

        assert aggregate(ranges, "day") == 3.0

    def test_one_inverted_range_fails_the_batch(self):
        ranges = [("2025-06-10", "2025-06-11"), ("2025-06-12", "2025-06-11")]

        with pytest.raises(InvalidRangeError):
            aggregate(ranges, "day")

    def test_one_unparsable_range_fails_the_batch(self):
        ranges = [("2025-06-10", "2025-06-11"), ("2025-06-12", "someday")]

        with pytest.raises(MalformedInputError):
            aggregate(ranges, "day")

    @pytest.mark.parametrize("value", ["2025-06-10", 42, None, {"start": "2025-06-10", "end": "2025-06-11"}])
    def test_rejects_non_collections(self, value):
        with pytest.raises(MalformedInputError, match="Expected a collection of ranges"):
            aggregate(value, "day")
