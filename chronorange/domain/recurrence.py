"""
Occurrences of a periodic event between two instants.
"""

import logging
from typing import Any, List, Optional

from pendulum import DateTime

from . import calendar
from .models import Unit, require_positive_int

logger = logging.getLogger(__name__)


def generate(
    start: Any,
    end: Any,
    unit: "Unit | str",
    interval_value: int,
    timezone: Optional[str] = None,
) -> List[DateTime]:
    """
    Generate every occurrence from ``start`` to ``end`` inclusive.

    Occurrence ``k`` is ``start + k * interval_value`` units, so month and
    year steps do not drift after a short month (Jan 31, Feb 28, Mar 31).

    Args:
        start: First occurrence
        end: Last instant an occurrence may fall on
        unit: Step unit
        interval_value: Number of units between occurrences
        timezone: Optional IANA zone both endpoints are normalized into

    Returns:
        Occurrences in increasing order; empty when start is after end

    Raises:
        NonPositiveStepError: If interval_value is not > 0
        UnknownTimezoneError: If timezone is not recognized
        MalformedInputError: If start or end cannot be resolved
    """
    require_positive_int(interval_value, "interval_value")
    unit = Unit.parse(unit)
    if timezone is not None:
        calendar.require_zone(timezone)

    first = calendar.resolve_instant(start, timezone)
    last = calendar.resolve_instant(end, timezone)

    occurrences: List[DateTime] = []
    current = first
    step = 0

    while current <= last:
        occurrences.append(current)
        step += 1
        current = calendar.add(first, step * interval_value, unit)

    logger.debug(
        "Generated %d occurrence(s) every %d %s(s) from %s",
        len(occurrences),
        interval_value,
        unit.value,
        first,
    )

    return occurrences
