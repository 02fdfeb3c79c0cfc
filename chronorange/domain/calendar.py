"""
Calendar primitives: the instant-level vocabulary the range operations are built on.

Instants are ``pendulum.DateTime`` values. They are immutable, so every helper
here returns a new value. ``resolve_instant`` is the single boundary through
which loosely-typed caller input (strings, epoch numbers, stdlib datetimes)
becomes a canonical, timezone-aware instant.
"""

import math
from datetime import date, datetime
from functools import lru_cache
from typing import Any, FrozenSet, Optional

import pendulum
from pendulum import DateTime

from .exceptions import MalformedInputError, UnknownTimezoneError
from .models import Unit


DEFAULT_TIMEZONE = "UTC"

# pendulum keyword and multiplier used when adding a unit
_ADD_KEYWORDS = {
    Unit.MILLISECOND: ("microseconds", 1000),
    Unit.SECOND: ("seconds", 1),
    Unit.MINUTE: ("minutes", 1),
    Unit.HOUR: ("hours", 1),
    Unit.DAY: ("days", 1),
    Unit.WEEK: ("weeks", 1),
    Unit.MONTH: ("months", 1),
    Unit.YEAR: ("years", 1),
}

_UNITS_PER_SECOND = {
    Unit.MILLISECOND: 1000,
    Unit.SECOND: 1,
}

_SECONDS_PER_UNIT = {
    Unit.MINUTE: 60,
    Unit.HOUR: 3600,
}


@lru_cache(maxsize=1)
def _known_zones() -> FrozenSet[str]:
    return frozenset(pendulum.timezones())


def zone_exists(name: Any) -> bool:
    """Check if a name is a recognized IANA timezone."""
    return isinstance(name, str) and name in _known_zones()


def require_zone(name: Any) -> str:
    """
    Return the zone name unchanged if it exists.

    Raises:
        UnknownTimezoneError: If the zone is not in the zone database
    """
    if not zone_exists(name):
        raise UnknownTimezoneError(f"Unknown timezone: {name!r}")
    return name


def now(tz: Optional[str] = None) -> DateTime:
    """Get the current instant, in ``tz`` or UTC."""
    return pendulum.now(require_zone(tz) if tz else DEFAULT_TIMEZONE)


def parse(value: str, fmt: Optional[str] = None, tz: Optional[str] = None) -> DateTime:
    """
    Parse a string into an instant.

    Zone-naive strings are bound to ``tz`` (UTC when omitted); strings that
    carry an offset keep it.

    Args:
        value: ISO 8601-like string, or any string matching ``fmt``
        fmt: Optional pendulum format pattern (e.g. ``DD.MM.YYYY``)
        tz: Zone for zone-naive input

    Raises:
        MalformedInputError: If the string cannot be parsed
    """
    zone = tz or DEFAULT_TIMEZONE

    try:
        if fmt:
            parsed = pendulum.from_format(value, fmt, tz=zone)
        else:
            parsed = pendulum.parse(value, tz=zone)
    except ValueError as exc:
        raise MalformedInputError(f"Could not parse datetime: {value!r} ({exc})") from exc

    if isinstance(parsed, DateTime):
        return parsed
    if isinstance(parsed, date):
        return pendulum.datetime(parsed.year, parsed.month, parsed.day, tz=zone)

    raise MalformedInputError(f"Could not parse datetime: {value!r} is not a calendar instant")


def resolve_instant(value: Any, tz: Optional[str] = None) -> DateTime:
    """
    Normalize any accepted representation into a canonical instant.

    Accepts pendulum/stdlib datetimes, dates, ISO-like strings and epoch
    seconds. Zone-naive input is bound to ``tz`` (UTC when omitted); when
    ``tz`` is given, aware input is converted into it.

    Raises:
        UnknownTimezoneError: If ``tz`` is not a known zone
        MalformedInputError: If the value cannot be resolved
    """
    if tz is not None:
        require_zone(tz)
    zone = tz or DEFAULT_TIMEZONE

    if isinstance(value, datetime):
        if value.tzinfo is None:
            instant = pendulum.instance(value, tz=zone)
        elif isinstance(value, DateTime):
            instant = value
        else:
            instant = pendulum.instance(value)
    elif isinstance(value, date):
        instant = pendulum.datetime(value.year, value.month, value.day, tz=zone)
    elif isinstance(value, bool):
        raise MalformedInputError(f"Cannot resolve a boolean into an instant: {value!r}")
    elif isinstance(value, (int, float)):
        try:
            instant = pendulum.from_timestamp(value, tz=zone)
        except (ValueError, OverflowError, OSError) as exc:
            raise MalformedInputError(f"Invalid epoch value: {value!r} ({exc})") from exc
    elif isinstance(value, str):
        instant = parse(value, tz=tz)
    else:
        raise MalformedInputError(
            f"Cannot resolve {type(value).__name__} into an instant: {value!r}"
        )

    if tz is not None:
        instant = instant.in_timezone(tz)

    return instant


def is_valid(value: Any) -> bool:
    """Check if a value resolves to a valid instant."""
    try:
        resolve_instant(value)
    except MalformedInputError:
        return False
    return True


def compare(a: DateTime, b: DateTime) -> int:
    """Return -1, 0 or 1 when ``a`` is before, the same as, or after ``b``."""
    if a < b:
        return -1
    if a > b:
        return 1
    return 0


def add(instant: DateTime, amount: int, unit: "Unit | str") -> DateTime:
    """Add ``amount`` units to an instant."""
    keyword, factor = _ADD_KEYWORDS[Unit.parse(unit)]
    return instant.add(**{keyword: amount * factor})


def subtract(instant: DateTime, amount: int, unit: "Unit | str") -> DateTime:
    """Subtract ``amount`` units from an instant."""
    keyword, factor = _ADD_KEYWORDS[Unit.parse(unit)]
    return instant.subtract(**{keyword: amount * factor})


def start_of(instant: DateTime, unit: "Unit | str") -> DateTime:
    """Truncate an instant to the first moment of its unit (weeks start on Monday)."""
    unit = Unit.parse(unit)
    if unit is Unit.MILLISECOND:
        return instant.set(microsecond=instant.microsecond // 1000 * 1000)
    return instant.start_of(unit.value)


def end_of(instant: DateTime, unit: "Unit | str") -> DateTime:
    """Move an instant to the last representable moment of its unit."""
    unit = Unit.parse(unit)
    if unit is Unit.MILLISECOND:
        return instant.set(microsecond=instant.microsecond // 1000 * 1000 + 999)
    return instant.end_of(unit.value)


def with_zone(instant: DateTime, name: str) -> DateTime:
    """Convert an instant into another zone."""
    return instant.in_timezone(require_zone(name))


def weekday(instant: DateTime) -> int:
    """Return the weekday with 0 = Sunday ... 6 = Saturday."""
    return instant.isoweekday() % 7


def date_key(instant: DateTime) -> str:
    """Return the wall-clock calendar date as ``YYYY-MM-DD``."""
    return instant.to_date_string()


def format_instant(instant: DateTime, pattern: str) -> str:
    """Format an instant with a pendulum token pattern."""
    return instant.format(pattern)


def diff(later: DateTime, earlier: DateTime, unit: "Unit | str", fractional: bool = True) -> float:
    """
    Express ``later - earlier`` in a unit.

    Sub-day units measure elapsed time. Days and weeks count calendar days
    in ``earlier``'s zone, each day weighted by its real length, so a
    23 or 25 hour DST day is still exactly one day and the difference is
    additive over contiguous pieces. Months and years are measured against
    the actual month lengths. Non-fractional results are truncated toward
    zero.
    """
    unit = Unit.parse(unit)

    if unit in (Unit.MONTH, Unit.YEAR):
        value = _month_difference(later, earlier)
        if unit is Unit.YEAR:
            value /= 12
    elif unit in (Unit.DAY, Unit.WEEK):
        value = _day_difference(later, earlier)
        if unit is Unit.WEEK:
            value /= 7
    else:
        seconds = _elapsed_seconds(later, earlier)
        if unit in _UNITS_PER_SECOND:
            value = seconds * _UNITS_PER_SECOND[unit]
        else:
            value = seconds / _SECONDS_PER_UNIT[unit]

    if not fractional:
        value = float(math.trunc(value))

    return value + 0.0


def _day_difference(later: DateTime, earlier: DateTime) -> float:
    """Fractional calendar days from ``earlier`` to ``later``."""
    later = later.in_timezone(earlier.timezone)
    whole = later.date().toordinal() - earlier.date().toordinal()
    return whole + (_day_fraction(later) - _day_fraction(earlier))


def _day_fraction(instant: DateTime) -> float:
    """Share of its local day that has elapsed at ``instant``."""
    midnight = instant.start_of("day")
    following = midnight.add(days=1).start_of("day")
    return _elapsed_seconds(instant, midnight) / _elapsed_seconds(following, midnight)


def _month_difference(a: DateTime, b: DateTime) -> float:
    """
    Fractional months from ``b`` to ``a``.

    Whole months are counted from ``a``'s day-of-month; the remainder is the
    fraction of the month surrounding ``b``.
    """
    if a.day < b.day:
        return -_month_difference(b, a)

    whole = (b.year - a.year) * 12 + (b.month - a.month)
    anchor = a.add(months=whole)
    remainder = _elapsed_seconds(b, anchor)

    if remainder < 0:
        previous = a.add(months=whole - 1)
        adjust = remainder / _elapsed_seconds(anchor, previous)
    else:
        following = a.add(months=whole + 1)
        adjust = remainder / _elapsed_seconds(following, anchor)

    return -(whole + adjust)


def _elapsed_seconds(later: DateTime, earlier: DateTime) -> float:
    """Signed elapsed seconds from ``earlier`` to ``later``."""
    if later >= earlier:
        return (later - earlier).total_seconds()
    return -(earlier - later).total_seconds()
