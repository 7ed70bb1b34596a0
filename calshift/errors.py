"""Exception types raised by calshift."""


class CalShiftError(Exception):
    """Base class for calshift errors."""


class OutOfRangeError(CalShiftError, OverflowError):
    """A calendar shift or duration addition left the host date range."""


class DurationParseError(CalShiftError, ValueError):
    """Text could not be parsed as an ISO-8601 duration."""
