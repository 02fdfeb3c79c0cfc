"""
Domain-specific exception hierarchy for chronorange.

"Nothing matched" is never an exception: operations signal a valid but empty
outcome with ``None`` or an empty list.
"""


class ChronoRangeError(Exception):
    """Base class for all library-level errors."""


class MalformedInputError(ChronoRangeError, ValueError):
    """Raised when an argument has the wrong kind or cannot be resolved."""


class UnknownTimezoneError(MalformedInputError):
    """Raised when a timezone name is not in the zone database."""


class InvalidRangeError(MalformedInputError):
    """Raised when a range has its start after its end."""


class NonPositiveStepError(MalformedInputError):
    """Raised when a loop step (interval, chunk size, slot length) is not > 0."""
