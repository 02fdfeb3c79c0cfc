"""
Tests for domain models.
"""

import pendulum
import pytest
from datetime import time

from chronorange.domain.exceptions import (
    InvalidRangeError,
    MalformedInputError,
    NonPositiveStepError,
)
from chronorange.domain.models import (
    SlotConstraints,
    TimeRange,
    Unit,
    require_positive_int,
)


class TestTimeRange:
    """Tests for TimeRange model."""

    def test_create_valid_time_range(self):
        """Test creating a valid time range."""
        start = pendulum.parse("2025-06-10 09:00", tz="Europe/Berlin")
        end = pendulum.parse("2025-06-10 17:00", tz="Europe/Berlin")

        tr = TimeRange(start=start, end=end)

        assert tr.start == start
        assert tr.end == end
        assert tr.duration_minutes() == 480  # 8 hours

    def test_zero_length_range_is_valid(self):
        """A range whose start equals its end is valid."""
        instant = pendulum.parse("2025-06-10 09:00", tz="Europe/Berlin")

        tr = TimeRange(start=instant, end=instant)

        assert tr.duration_minutes() == 0

    def test_invalid_time_range_raises_error(self):
        """Test that an inverted range raises InvalidRangeError."""
        start = pendulum.parse("2025-06-10 17:00", tz="Europe/Berlin")
        end = pendulum.parse("2025-06-10 09:00", tz="Europe/Berlin")

        with pytest.raises(InvalidRangeError, match="must not be after end time"):
            TimeRange(start=start, end=end)

    def test_invalid_range_is_a_value_error(self):
        """Callers catching ValueError still see range errors."""
        start = pendulum.parse("2025-06-10 17:00")
        end = pendulum.parse("2025-06-10 09:00")

        with pytest.raises(ValueError):
            TimeRange(start=start, end=end)

    def test_overlaps_includes_touching_ranges(self):
        """Closed ranges sharing an endpoint overlap."""
        tr1 = TimeRange(
            start=pendulum.parse("2025-06-10 09:00"),
            end=pendulum.parse("2025-06-10 12:00"),
        )
        tr2 = TimeRange(
            start=pendulum.parse("2025-06-10 12:00"),
            end=pendulum.parse("2025-06-10 14:00"),
        )
        tr3 = TimeRange(
            start=pendulum.parse("2025-06-10 14:01"),
            end=pendulum.parse("2025-06-10 17:00"),
        )

        assert tr1.overlaps(tr2)
        assert tr2.overlaps(tr1)
        assert not tr1.overlaps(tr3)

    def test_contains(self):
        """Test containment check."""
        outer = TimeRange(
            start=pendulum.parse("2025-06-10 09:00"),
            end=pendulum.parse("2025-06-10 17:00"),
        )
        inner = TimeRange(
            start=pendulum.parse("2025-06-10 10:00"),
            end=pendulum.parse("2025-06-10 11:00"),
        )

        assert outer.contains(inner)
        assert not inner.contains(outer)


class TestUnit:
    """Tests for unit name resolution."""

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("day", Unit.DAY),
            ("days", Unit.DAY),
            ("Month", Unit.MONTH),
            (" hours ", Unit.HOUR),
            ("milliseconds", Unit.MILLISECOND),
            (Unit.WEEK, Unit.WEEK),
        ],
    )
    def test_parse_known_units(self, name, expected):
        """Singular, plural and mixed-case names resolve."""
        assert Unit.parse(name) is expected

    def test_parse_unknown_unit(self):
        """Unknown names are malformed input."""
        with pytest.raises(MalformedInputError, match="Unknown unit 'fortnight'"):
            Unit.parse("fortnight")

    def test_parse_non_string(self):
        """Non-string units are malformed input."""
        with pytest.raises(MalformedInputError):
            Unit.parse(3)


class TestSlotConstraints:
    """Tests for SlotConstraints model."""

    def test_defaults(self):
        """No excluded weekdays and a full-day window by default."""
        constraints = SlotConstraints()

        assert constraints.excluded_weekdays == frozenset()
        assert constraints.daily_window.start == time(0, 0)
        assert constraints.daily_window.end == time(23, 59)

    def test_parses_window_strings(self):
        """HH:MM strings are accepted for the daily window."""
        constraints = SlotConstraints.model_validate(
            {"excluded_weekdays": [0, 6], "daily_window": {"start": "09:00", "end": "17:30"}}
        )

        assert constraints.excluded_weekdays == frozenset({0, 6})
        assert constraints.daily_window.start == time(9, 0)
        assert constraints.daily_window.end == time(17, 30)

    def test_rejects_out_of_range_weekday(self):
        """Weekdays must be between 0 and 6."""
        with pytest.raises(ValueError, match="between 0 and 6"):
            SlotConstraints(excluded_weekdays=frozenset({7}))

    def test_accepts_camel_case_keys(self):
        constraints = SlotConstraints.model_validate(
            {"excludedWeekdays": [0, 6], "dailyWindow": {"start": "09:00", "end": "17:00"}}
        )

        assert constraints.excluded_weekdays == frozenset({0, 6})
        assert constraints.daily_window.end == time(17, 0)

    @pytest.mark.parametrize(
        "data",
        [
            {"excluded_days": [0]},
            {"daily_window": {"start": "09:00", "finish": "17:00"}},
        ],
    )
    def test_rejects_unknown_keys(self, data):
        with pytest.raises(ValueError):
            SlotConstraints.model_validate(data)


class TestRequirePositiveInt:
    """Tests for the loop step guard."""

    def test_accepts_positive(self):
        assert require_positive_int(3, "step") == 3

    @pytest.mark.parametrize("value", [0, -1])
    def test_rejects_non_positive(self, value):
        """Zero and negative steps are rejected."""
        with pytest.raises(NonPositiveStepError, match="step must be greater than zero"):
            require_positive_int(value, "step")

    @pytest.mark.parametrize("value", [1.5, "2", True, None])
    def test_rejects_non_integers(self, value):
        """Floats, strings and booleans are not steps."""
        with pytest.raises(MalformedInputError, match="step must be an integer"):
            require_positive_int(value, "step")
