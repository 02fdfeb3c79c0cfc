"""
Partition a range into unit-aligned chunks.
"""

import logging
from typing import Any, List

from . import calendar
from .models import TimeRange, Unit, require_positive_int
from .range_algebra import resolve_range

logger = logging.getLogger(__name__)


def split(time_range: Any, unit: "Unit | str", chunk_size: int) -> List[TimeRange]:
    """
    Split a range into consecutive chunks of ``chunk_size`` units.

    The first chunk starts at the range start. Every chunk ends at the end of
    the unit reached after ``chunk_size - 1`` steps and the next one starts at
    the beginning of the following unit, so chunks never overlap. The final
    chunk is clipped to the range end.

    Example (unit=day, chunk_size=2):
    Range: 2025-06-10 12:00 - 2025-06-14 08:00
    Result: [06-10 12:00 - 06-11 23:59:59.999999,
             06-12 00:00 - 06-13 23:59:59.999999,
             06-14 00:00 - 06-14 08:00]

    Raises:
        NonPositiveStepError: If chunk_size is not > 0
        InvalidRangeError: If the range has start after end
    """
    require_positive_int(chunk_size, "chunk_size")
    unit = Unit.parse(unit)
    bounds = resolve_range(time_range)

    chunks: List[TimeRange] = []
    chunk_start = bounds.start

    while chunk_start <= bounds.end:
        chunk_end = calendar.end_of(calendar.add(chunk_start, chunk_size - 1, unit), unit)

        if chunk_end >= bounds.end:
            chunks.append(TimeRange(start=chunk_start, end=bounds.end))
            break

        chunks.append(TimeRange(start=chunk_start, end=chunk_end))
        chunk_start = calendar.start_of(calendar.add(chunk_start, chunk_size, unit), unit)

    logger.debug("Split %s into %d %s chunk(s) of %d", bounds, len(chunks), unit.value, chunk_size)

    return chunks
