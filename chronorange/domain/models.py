"""
Domain models for temporal range computations.
"""

from dataclasses import dataclass
from datetime import time
from enum import Enum
from typing import FrozenSet

from pendulum import DateTime
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .exceptions import InvalidRangeError, MalformedInputError, NonPositiveStepError


class Unit(str, Enum):
    """Calendar granularity used for arithmetic and truncation."""
    MILLISECOND = "millisecond"
    SECOND = "second"
    MINUTE = "minute"
    HOUR = "hour"
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"

    @classmethod
    def parse(cls, value: "Unit | str") -> "Unit":
        """
        Resolve a unit from an enum member or a singular/plural name.

        Raises:
            MalformedInputError: If the value does not name a known unit
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise MalformedInputError(f"Unit must be a string, got {type(value).__name__}")

        name = value.strip().lower()
        if name.endswith("s") and name[:-1] in cls._value2member_map_:
            name = name[:-1]

        try:
            return cls(name)
        except ValueError:
            known = ", ".join(member.value for member in cls)
            raise MalformedInputError(f"Unknown unit '{value}'. Expected one of: {known}") from None


@dataclass(frozen=True)
class TimeRange:
    """
    Represents an immutable closed range [start, end].

    Invariant: start must not be after end. A zero-length range is valid.
    """
    start: DateTime
    end: DateTime

    def __post_init__(self):
        if self.start > self.end:
            raise InvalidRangeError(f"Start time {self.start} must not be after end time {self.end}")

    def duration_minutes(self) -> float:
        """Return the duration in minutes."""
        return (self.end - self.start).total_seconds() / 60

    def contains(self, other: "TimeRange") -> bool:
        """Check if another range lies entirely within this one."""
        return self.start <= other.start and other.end <= self.end

    def overlaps(self, other: "TimeRange") -> bool:
        """Check if this range shares at least one instant with another."""
        return self.start <= other.end and other.start <= self.end

    def __str__(self) -> str:
        return f"{self.start.to_iso8601_string()} - {self.end.to_iso8601_string()}"


class DailyWindow(BaseModel):
    """Time-of-day window applied to every scheduling day."""
    model_config = ConfigDict(frozen=True, extra="forbid", alias_generator=to_camel, populate_by_name=True)

    start: time = time(0, 0)
    end: time = time(23, 59)


class SlotConstraints(BaseModel):
    """
    Constraints for slot generation.

    Weekdays are numbered 0 (Sunday) to 6 (Saturday).
    Keys may be given in snake_case or camelCase; unknown keys are rejected.
    """
    model_config = ConfigDict(frozen=True, extra="forbid", alias_generator=to_camel, populate_by_name=True)

    excluded_weekdays: FrozenSet[int] = frozenset()
    daily_window: DailyWindow = Field(default_factory=DailyWindow)

    @field_validator("excluded_weekdays")
    @classmethod
    def validate_weekdays(cls, value: FrozenSet[int]) -> FrozenSet[int]:
        """Ensure weekdays are in the 0-6 range."""
        invalid_days = sorted(day for day in value if day not in range(7))
        if invalid_days:
            raise ValueError(f"excluded_weekdays must be between 0 and 6, got {invalid_days}")
        return value


def require_positive_int(value: int, name: str) -> int:
    """
    Validate a loop step before any calendar iteration starts.

    Raises:
        MalformedInputError: If the value is not an integer
        NonPositiveStepError: If the value is zero or negative
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise MalformedInputError(f"{name} must be an integer, got {value!r}")
    if value <= 0:
        raise NonPositiveStepError(f"{name} must be greater than zero, got {value}")
    return value
