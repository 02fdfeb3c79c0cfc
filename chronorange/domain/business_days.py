"""
Next-business-day resolution against weekends and a holiday set.
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Any, List, Optional, Set

from pendulum import DateTime

from . import calendar
from .exceptions import MalformedInputError

logger = logging.getLogger(__name__)


WEEKEND_DAYS = frozenset({0, 6})  # Sunday, Saturday


def holiday_list(holidays: Optional[Iterable[Any]]) -> List[Any]:
    """
    Materialize a holidays argument, treating ``None`` as no holidays.

    Raises:
        MalformedInputError: If ``holidays`` is not a collection
    """
    if holidays is None:
        return []
    if isinstance(holidays, (str, bytes, Mapping)) or not isinstance(holidays, Iterable):
        raise MalformedInputError(f"Expected a collection of holidays, got {type(holidays).__name__}")
    return list(holidays)


def holiday_keys(holidays: Optional[Iterable[Any]]) -> Set[str]:
    """
    Reduce holidays to ``YYYY-MM-DD`` keys.

    The key is the holiday's own wall-clock date, so any time-of-day or zone
    collapses to the same day. Entries that cannot be resolved are skipped.
    """
    keys: Set[str] = set()

    for holiday in holiday_list(holidays):
        try:
            keys.add(calendar.date_key(calendar.resolve_instant(holiday)))
        except MalformedInputError as exc:
            logger.warning("Skipping unparsable holiday %r: %s", holiday, exc)

    return keys


def is_business_day(date: Any, holidays: Optional[Iterable[Any]] = ()) -> bool:
    """Check if a date is neither a weekend day nor a holiday."""
    instant = calendar.resolve_instant(date)
    return _is_business_day(instant, holiday_keys(holidays))


def next_business_day(date: Any, holidays: Optional[Iterable[Any]] = ()) -> DateTime:
    """
    Find the first business day strictly after ``date``.

    The result keeps the time-of-day and zone of the input. It is always
    later than the input, even when the input itself is a business day.

    Raises:
        MalformedInputError: If date cannot be resolved or holidays is not
            a collection
    """
    instant = calendar.resolve_instant(date)
    keys = holiday_keys(holidays)

    candidate = instant.add(days=1)
    while not _is_business_day(candidate, keys):
        candidate = candidate.add(days=1)

    logger.debug("Next business day after %s is %s", instant, candidate)

    return candidate


def _is_business_day(instant: DateTime, keys: Set[str]) -> bool:
    return calendar.weekday(instant) not in WEEKEND_DAYS and calendar.date_key(instant) not in keys
