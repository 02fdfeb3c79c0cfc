"""
Application service binding configuration defaults to the range operations.

The engine itself holds no mutable state: every call resolves its inputs,
delegates to a pure domain function and returns a fresh result. Holidays are
pulled through a provider protocol so a file-backed or in-memory source can be
plugged in (or stubbed in tests).
"""

from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Optional

from pendulum import DateTime

from ..adapters.holiday_source import FileHolidayProvider, HolidayProviderProtocol
from ..config import EngineConfig
from ..domain import (
    business_days,
    range_aggregator,
    range_algebra,
    range_splitter,
    recurrence,
    slot_scheduler,
    timezone_converter,
)
from ..domain.models import SlotConstraints, TimeRange, Unit


class TemporalEngine:
    """
    Facade over the domain operations with configured defaults.

    Explicit arguments always win over configuration: the configured zone,
    slot constraints, slot length and output format only fill in what the
    caller leaves out.
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        holiday_provider: Optional[HolidayProviderProtocol] = None,
    ) -> None:
        self._config = config or EngineConfig()
        if holiday_provider is None and self._config.holidays_file is not None:
            holiday_provider = FileHolidayProvider(self._config.holidays_file)
        self._holiday_provider = holiday_provider

    @property
    def config(self) -> EngineConfig:
        return self._config

    def recurrences(
        self,
        *,
        start: Any,
        end: Any,
        unit: "Unit | str",
        interval_value: int,
        timezone: Optional[str] = None,
    ) -> List[DateTime]:
        """Occurrences from start to end, normalized into the configured zone by default."""
        return recurrence.generate(
            start,
            end,
            unit,
            interval_value,
            timezone=timezone or self._config.timezone,
        )

    def intersect(self, range_a: Any, range_b: Any) -> Optional[TimeRange]:
        """Intersection of two ranges, None when disjoint."""
        return range_algebra.intersect(range_a, range_b)

    def split(self, time_range: Any, unit: "Unit | str", chunk_size: int) -> List[TimeRange]:
        """Unit-aligned chunks of a range."""
        return range_splitter.split(time_range, unit, chunk_size)

    def aggregate(self, ranges: Iterable[Any], unit: "Unit | str") -> float:
        """Summed duration of all ranges."""
        return range_aggregator.aggregate(ranges, unit)

    def holidays(self, extra: Optional[Iterable[Any]] = ()) -> List[Any]:
        """Configured, provided and caller-supplied holidays, in that order."""
        combined: List[Any] = list(self._config.holidays)
        if self._holiday_provider is not None:
            combined.extend(self._holiday_provider.get_holidays())
        combined.extend(business_days.holiday_list(extra))
        return combined

    def next_business_day(self, date: Any, holidays: Optional[Iterable[Any]] = ()) -> DateTime:
        """First business day after date, honouring every known holiday."""
        return business_days.next_business_day(date, self.holidays(holidays))

    def slots(
        self,
        *,
        start: Any,
        end: Any,
        slot_duration_minutes: Optional[int] = None,
        constraints: "SlotConstraints | Mapping[str, Any] | None" = None,
        timezone: Optional[str] = None,
    ) -> List[TimeRange]:
        """Bookable slots, defaulting length and constraints from configuration."""
        if constraints is None:
            constraints = self._config.slots.to_constraints()

        duration = slot_duration_minutes
        if duration is None:
            duration = self._config.slots.duration_minutes

        return slot_scheduler.generate_slots(
            start,
            end,
            duration,
            constraints=constraints,
            timezone=timezone or self._config.timezone,
        )

    def convert(
        self,
        instants: Iterable[Any],
        target_zone: str,
        fmt: Optional[str] = None,
    ) -> List[str]:
        """Instants formatted in target_zone; unresolvable ones are dropped."""
        return timezone_converter.convert_all(instants, target_zone, fmt or self._config.output_format)
