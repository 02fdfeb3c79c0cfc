"""
Domain layer - Pure temporal range logic without external integrations.
"""

from .business_days import is_business_day, next_business_day
from .exceptions import (
    ChronoRangeError,
    InvalidRangeError,
    MalformedInputError,
    NonPositiveStepError,
    UnknownTimezoneError,
)
from .models import DailyWindow, SlotConstraints, TimeRange, Unit
from .range_aggregator import aggregate
from .range_algebra import intersect, resolve_range, validate_range
from .range_splitter import split
from .recurrence import generate
from .slot_scheduler import SlotScheduler, generate_slots
from .timezone_converter import convert_all

__all__ = [
    "ChronoRangeError",
    "DailyWindow",
    "InvalidRangeError",
    "MalformedInputError",
    "NonPositiveStepError",
    "SlotConstraints",
    "SlotScheduler",
    "TimeRange",
    "Unit",
    "UnknownTimezoneError",
    "aggregate",
    "convert_all",
    "generate",
    "generate_slots",
    "intersect",
    "is_business_day",
    "next_business_day",
    "resolve_range",
    "split",
    "validate_range",
]
