"""Calendar arithmetic for date-like values.

This package shifts dates by whole months and years, combines such shifts
with absolute durations, and generates evenly spaced dates.

Key modules:
- shift: month/year shifting with end-of-month clamping
- duration: RelativeDuration (months plus a timedelta) and its ISO-8601 codec
- rule: DateRule, a lazy sequence of dates recomputed from its anchor
- conventions: the DateLike protocol, Frequency and the named-period registry
"""

from calshift.conventions import DateLike, Frequency
from calshift.conventions.registry import available_periods, get_period, register_period
from calshift.duration import RelativeDuration, format_iso8601, parse_iso8601
from calshift.errors import CalShiftError, DurationParseError, OutOfRangeError
from calshift.rule import DateRule, to_index
from calshift.shift import (
    days_in_month,
    get_month_end,
    is_end_of_month,
    is_leap_year,
    shift_months,
    shift_years,
    with_day,
    with_month,
    with_year,
)

__version__ = "1.0.0"

__all__ = [
    "__version__",
    "CalShiftError",
    "DateLike",
    "DateRule",
    "DurationParseError",
    "Frequency",
    "OutOfRangeError",
    "RelativeDuration",
    "available_periods",
    "days_in_month",
    "format_iso8601",
    "get_month_end",
    "get_period",
    "is_end_of_month",
    "is_leap_year",
    "parse_iso8601",
    "register_period",
    "shift_months",
    "shift_years",
    "to_index",
    "with_day",
    "with_month",
    "with_year",
]
