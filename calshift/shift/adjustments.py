"""
Month and year shifting for date-like values.

Every function here rebuilds its input through ``replace``, so the
time-of-day, tzinfo and sub-second fields of the input carry over to the
result untouched. When the source day-of-month does not exist in the target
month, the last day of the target month is used instead.
"""

import calendar
import logging
import operator
from typing import Any, TypeVar

from calshift.conventions.types import DateLike
from calshift.errors import OutOfRangeError

logger = logging.getLogger(__name__)

D = TypeVar("D", bound=DateLike)


def _as_int(value: Any, name: str) -> int:
    try:
        return operator.index(value)
    except TypeError as exc:
        raise TypeError(f"{name} must be an integer, got {type(value).__name__}") from exc


def is_leap_year(year: int) -> bool:
    """True if ``year`` is a leap year under the Gregorian rule."""
    return calendar.isleap(year)


def days_in_month(year: int, month: int) -> int:
    """Number of days in the given month, for any integer year."""
    if not 1 <= month <= 12:
        raise ValueError(f"Month {month} not in range 1-12")
    return calendar.monthrange(year, month)[1]


def is_end_of_month(dt: DateLike) -> bool:
    """Check if date is end of month."""
    return dt.day == days_in_month(dt.year, dt.month)


def _rebuild(dt: D, year: int, month: int, day: int) -> D:
    try:
        return dt.replace(year=year, month=month, day=day)
    except (ValueError, OverflowError) as exc:
        raise OutOfRangeError(
            f"{year:04d}-{month:02d}-{day:02d} is outside the range of {type(dt).__name__}"
        ) from exc


def get_month_end(dt: D) -> D:
    """Move a date to the last day of its month, keeping everything else."""
    return _rebuild(dt, dt.year, dt.month, days_in_month(dt.year, dt.month))


def shift_months(dt: D, months: int) -> D:
    """Shift a date by the given number of months.

    Ambiguous month-ends are shifted backwards as necessary, so one month
    after Jan 31st is the last day of February.

    Raises:
        OutOfRangeError: if the target year cannot be represented by the
            type of ``dt``.
    """
    months = _as_int(months, "months")
    total = dt.month - 1 + months
    year = dt.year + total // 12
    month = total % 12 + 1

    day = dt.day
    last_day = days_in_month(year, month)
    if day > last_day:
        logger.debug("Clamping day %s to %s for %04d-%02d", day, last_day, year, month)
        day = last_day

    return _rebuild(dt, year, month, day)


def shift_years(dt: D, years: int) -> D:
    """Shift a date by the given number of years.

    Only Feb 29th needs clamping, and lands on Feb 28th in common years.
    """
    return shift_months(dt, 12 * _as_int(years, "years"))


def with_day(dt: D, day: int) -> D:
    """Move a date to the given day of its month.

    Days past the end of the month are clamped to the final day, e.g. day 31
    in February gives Feb 28th or 29th. Days outside 1-31 are rejected.
    """
    day = _as_int(day, "day")
    if not 1 <= day <= 31:
        raise ValueError(f"Day {day} not in range 1-31")
    return _rebuild(dt, dt.year, dt.month, min(day, days_in_month(dt.year, dt.month)))


def with_month(dt: D, month: int) -> D:
    """Move a date to the given month of the same year, clamping the day."""
    month = _as_int(month, "month")
    if not 1 <= month <= 12:
        raise ValueError(f"Month {month} not in range 1-12")
    return shift_months(dt, month - dt.month)


def with_year(dt: D, year: int) -> D:
    """Move a date to the given year, clamping Feb 29th where needed."""
    return shift_years(dt, _as_int(year, "year") - dt.year)
