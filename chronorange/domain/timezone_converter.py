"""
Batch conversion of instants into a target timezone.
"""

import logging
from typing import Any, Iterable, List

from . import calendar
from .exceptions import MalformedInputError

logger = logging.getLogger(__name__)


DEFAULT_FORMAT = "YYYY-MM-DD HH:mm:ss zz"


def convert_all(instants: Iterable[Any], target_zone: str, fmt: str = DEFAULT_FORMAT) -> List[str]:
    """
    Format every instant in ``target_zone``.

    The zone is validated once, up front. Instants that cannot be resolved are
    dropped from the output instead of failing the batch, so the result may be
    shorter than the input.

    Raises:
        UnknownTimezoneError: If target_zone is not recognized
        MalformedInputError: If instants is not a collection
    """
    calendar.require_zone(target_zone)
    if isinstance(instants, (str, bytes)) or not isinstance(instants, Iterable):
        raise MalformedInputError(f"Expected a collection of instants, got {type(instants).__name__}")

    converted: List[str] = []

    for value in instants:
        try:
            instant = calendar.resolve_instant(value)
        except MalformedInputError as exc:
            logger.warning("Dropping unresolvable instant %r: %s", value, exc)
            continue

        converted.append(calendar.format_instant(calendar.with_zone(instant, target_zone), fmt))

    return converted
