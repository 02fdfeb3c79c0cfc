"""
Appointment slot generation.

Pure domain logic: equal-length, non-overlapping slots inside a range,
restricted to allowed weekdays and a daily time window.
"""

import logging
from collections.abc import Mapping
from typing import Any, List, Optional, Tuple

from pendulum import DateTime
from pydantic import ValidationError

from . import calendar
from .exceptions import MalformedInputError
from .models import SlotConstraints, TimeRange, require_positive_int

logger = logging.getLogger(__name__)


class SlotScheduler:
    """
    Generates bookable slots based on weekday and daily-window constraints.

    Algorithm:
    1. Walk whole calendar days from start to end in the active zone
    2. Skip days whose weekday is excluded
    3. Skip days whose window opens after the overall end
    4. Fill the day's window with back-to-back slots
    5. Drop any slot that would not fit entirely in the window and the range
    """

    def __init__(self, constraints: Optional[SlotConstraints] = None):
        self.constraints = constraints or SlotConstraints()

    def generate_slots(
        self,
        start: Any,
        end: Any,
        slot_duration_minutes: int,
        timezone: Optional[str] = None,
    ) -> List[TimeRange]:
        """
        Generate all slots between start and end.

        Args:
            start: Beginning of the scheduling range
            end: End of the scheduling range
            slot_duration_minutes: Length of every slot
            timezone: Optional IANA zone that defines day boundaries

        Returns:
            Slots in chronological order; empty when start is after end

        Raises:
            NonPositiveStepError: If slot_duration_minutes is not > 0
            UnknownTimezoneError: If timezone is not recognized
            MalformedInputError: If start or end cannot be resolved
        """
        require_positive_int(slot_duration_minutes, "slot_duration_minutes")
        if timezone is not None:
            calendar.require_zone(timezone)

        range_start = calendar.resolve_instant(start, timezone)
        range_end = calendar.resolve_instant(end, timezone)

        slots: List[TimeRange] = []
        current = range_start

        while current <= range_end:
            day_start, day_end = self._get_day_window(current)

            if self._is_excluded_day(current):
                logger.debug("Skipping %s: weekday excluded", current.to_date_string())
            elif day_start > range_end:
                logger.debug("Skipping %s: window opens after range end", current.to_date_string())
            else:
                slots.extend(
                    self._fill_window(
                        day_start=day_start,
                        day_end=day_end,
                        range_start=range_start,
                        range_end=range_end,
                        slot_duration_minutes=slot_duration_minutes,
                    )
                )

            current = current.add(days=1).start_of("day")

        logger.debug(
            "Generated %d slot(s) of %d minutes between %s and %s",
            len(slots),
            slot_duration_minutes,
            range_start,
            range_end,
        )

        return slots

    def _is_excluded_day(self, day: DateTime) -> bool:
        return calendar.weekday(day) in self.constraints.excluded_weekdays

    def _get_day_window(self, day: DateTime) -> Tuple[DateTime, DateTime]:
        """Combine the day's date with the window's time-of-day bounds."""
        window = self.constraints.daily_window
        day_start = day.at(window.start.hour, window.start.minute, window.start.second)
        day_end = day.at(window.end.hour, window.end.minute, window.end.second)
        return day_start, day_end

    def _fill_window(
        self,
        *,
        day_start: DateTime,
        day_end: DateTime,
        range_start: DateTime,
        range_end: DateTime,
        slot_duration_minutes: int,
    ) -> List[TimeRange]:
        """
        Emit consecutive slots from the window start.

        Example (30 min, window 09:00 - 10:45):
        Result: [09:00-09:30, 09:30-10:00, 10:00-10:30]
        """
        slots: List[TimeRange] = []
        slot_start = day_start

        while slot_start <= day_end and slot_start <= range_end:
            slot_end = slot_start.add(minutes=slot_duration_minutes)

            if slot_end > day_end or slot_end > range_end:
                break

            # Window may open before a mid-day range start
            if slot_start >= range_start:
                slots.append(TimeRange(start=slot_start, end=slot_end))

            slot_start = slot_end

        return slots


def resolve_constraints(constraints: Any) -> SlotConstraints:
    """
    Normalize a constraints argument into ``SlotConstraints``.

    Raises:
        MalformedInputError: If a mapping fails validation
    """
    if constraints is None:
        return SlotConstraints()
    if isinstance(constraints, SlotConstraints):
        return constraints
    if isinstance(constraints, Mapping):
        try:
            return SlotConstraints.model_validate(dict(constraints))
        except ValidationError as exc:
            raise MalformedInputError(f"Invalid slot constraints: {exc}") from exc

    raise MalformedInputError(f"Cannot use {type(constraints).__name__} as slot constraints")


def generate_slots(
    start: Any,
    end: Any,
    slot_duration_minutes: int,
    constraints: "SlotConstraints | Mapping[str, Any] | None" = None,
    timezone: Optional[str] = None,
) -> List[TimeRange]:
    """Generate slots with a one-off scheduler built from ``constraints``."""
    scheduler = SlotScheduler(constraints=resolve_constraints(constraints))
    return scheduler.generate_slots(start, end, slot_duration_minutes, timezone=timezone)
