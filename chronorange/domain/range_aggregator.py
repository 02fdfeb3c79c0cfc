"""
Sum the durations of a collection of ranges.
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from . import calendar
from .exceptions import MalformedInputError
from .models import Unit
from .range_algebra import resolve_range

logger = logging.getLogger(__name__)


def aggregate(ranges: Iterable[Any], unit: "Unit | str") -> float:
    """
    Total duration of all ranges, in ``unit``, with fractional precision.

    Every range is resolved before anything is summed: a single malformed or
    inverted range fails the whole call. Overlapping ranges are counted
    once per range.

    Returns:
        The summed duration, 0 for an empty collection

    Raises:
        MalformedInputError: If ``ranges`` is not a collection or a range
            cannot be resolved
        InvalidRangeError: If any range has start after end
    """
    unit = Unit.parse(unit)
    if isinstance(ranges, (str, bytes, Mapping)) or not isinstance(ranges, Iterable):
        raise MalformedInputError(f"Expected a collection of ranges, got {type(ranges).__name__}")

    resolved = [resolve_range(item) for item in ranges]

    total = sum(
        (calendar.diff(item.end, item.start, unit, fractional=True) for item in resolved),
        0.0,
    )

    logger.debug("Aggregated %d range(s): %s %s(s)", len(resolved), total, unit.value)

    return total
