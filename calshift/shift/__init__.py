# Re-export shift functions
from .adjustments import (
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

__all__ = [
    "days_in_month",
    "get_month_end",
    "is_end_of_month",
    "is_leap_year",
    "shift_months",
    "shift_years",
    "with_day",
    "with_month",
    "with_year",
]
