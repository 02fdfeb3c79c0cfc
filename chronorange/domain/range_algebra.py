"""
Range validity checks and intersection.
"""

import logging
from collections.abc import Mapping
from typing import Any, Optional

from .calendar import resolve_instant
from .exceptions import MalformedInputError
from .models import TimeRange

logger = logging.getLogger(__name__)


def resolve_range(value: Any, tz: Optional[str] = None) -> TimeRange:
    """
    Normalize a range argument into a ``TimeRange``.

    Accepts a ``TimeRange``, a ``(start, end)`` pair or a mapping with
    ``start``/``end`` keys; endpoints go through ``resolve_instant``.

    Raises:
        MalformedInputError: If the value is not range-shaped or an endpoint
            cannot be resolved
        InvalidRangeError: If start is after end
    """
    if isinstance(value, TimeRange):
        start, end = value.start, value.end
    elif isinstance(value, Mapping):
        try:
            start, end = value["start"], value["end"]
        except KeyError as exc:
            raise MalformedInputError(f"Range mapping is missing key {exc}") from None
    elif isinstance(value, (tuple, list)) and len(value) == 2:
        start, end = value
    else:
        raise MalformedInputError(f"Cannot resolve {type(value).__name__} into a range: {value!r}")

    return TimeRange(start=resolve_instant(start, tz), end=resolve_instant(end, tz))


def validate_range(value: Any, tz: Optional[str] = None) -> bool:
    """Check if a value resolves to a range with start <= end."""
    try:
        resolve_range(value, tz)
    except MalformedInputError:
        return False
    return True


def intersect(range_a: Any, range_b: Any) -> Optional[TimeRange]:
    """
    Calculate the intersection of two closed ranges.

    Both ranges must be valid on their own. Touching ranges intersect in a
    zero-length range.

    Returns:
        The common range, or None when the ranges are disjoint

    Raises:
        InvalidRangeError: If either range has start after end
    """
    first = resolve_range(range_a)
    second = resolve_range(range_b)

    start = max(first.start, second.start)
    end = min(first.end, second.end)

    if start > end:
        logger.debug("Ranges %s and %s are disjoint", first, second)
        return None

    return TimeRange(start=start, end=end)

