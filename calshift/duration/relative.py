"""
Relative durations: a whole number of calendar months plus an absolute
``timedelta``.

Adding a ``RelativeDuration`` to a date-like value happens in two steps, in
this order:

1. shift by ``months`` with :func:`calshift.shift.shift_months`, clamping the
   day to the end of the target month where it does not exist;
2. add ``duration`` with the date type's own timedelta arithmetic.

The shifted date keeps no memory of the day it came from, so applying a
duration twice is not the same as applying its double::

    >>> start = date(2020, 1, 31)
    >>> one_month = RelativeDuration(months=1)
    >>> (start + one_month) + one_month
    datetime.date(2020, 3, 29)
    >>> start + (one_month + one_month)
    datetime.date(2020, 3, 31)

Use :class:`calshift.rule.DateRule` for stable sequences of dates.
"""

from __future__ import annotations

import operator
from datetime import timedelta
from functools import total_ordering
from typing import Any, Tuple, TypeVar

import numpy as np
import pandas as pd
from dateutil.relativedelta import relativedelta

from calshift.conventions.types import DateLike
from calshift.errors import OutOfRangeError
from calshift.shift.adjustments import _as_int, shift_months

D = TypeVar("D", bound=DateLike)

_DURATION_TYPES = (timedelta, np.timedelta64)


def _to_timedelta(value: Any) -> timedelta:
    """Normalise ``timedelta``, ``pandas.Timedelta`` or ``numpy.timedelta64``."""
    if isinstance(value, np.timedelta64) or isinstance(value, pd.Timedelta):
        converted = pd.Timedelta(value)
        if pd.isna(converted):
            raise ValueError("Cannot build a RelativeDuration from NaT")
        return converted.to_pytimedelta()
    if isinstance(value, timedelta):
        return value
    raise TypeError(f"Unsupported duration type: {type(value).__name__}")


@total_ordering
class RelativeDuration:
    """A calendar-aware span of ``months`` months plus an absolute ``duration``.

    Instances are immutable and hashable. ``years`` is folded into
    ``months``; weeks, days, hours, minutes, seconds and microseconds are
    folded into ``duration``. The two parts are never normalised into each
    other: 40 days stays 40 days, it does not become a month and change.
    """

    __slots__ = ("_months", "_duration")

    def __init__(
        self,
        *,
        years: int = 0,
        months: int = 0,
        weeks: float = 0,
        days: float = 0,
        hours: float = 0,
        minutes: float = 0,
        seconds: float = 0,
        microseconds: float = 0,
    ):
        total_months = 12 * _as_int(years, "years") + _as_int(months, "months")
        duration = timedelta(
            weeks=weeks,
            days=days,
            hours=hours,
            minutes=minutes,
            seconds=seconds,
            microseconds=microseconds,
        )
        object.__setattr__(self, "_months", total_months)
        object.__setattr__(self, "_duration", duration)

    @classmethod
    def _make(cls, months: int, duration: timedelta) -> "RelativeDuration":
        instance = cls.__new__(cls)
        object.__setattr__(instance, "_months", months)
        object.__setattr__(instance, "_duration", duration)
        return instance

    # ------------------------------------------------------------------
    # Alternative constructors
    # ------------------------------------------------------------------

    @classmethod
    def zero(cls) -> "RelativeDuration":
        return cls._make(0, timedelta(0))

    @classmethod
    def from_duration(cls, duration: Any) -> "RelativeDuration":
        """Wrap an absolute duration with zero months."""
        return cls._make(0, _to_timedelta(duration))

    @classmethod
    def from_relativedelta(cls, delta: relativedelta) -> "RelativeDuration":
        """Convert a ``dateutil.relativedelta`` holding only relative fields.

        Absolute fields (``year=``, ``day=``, ``weekday=`` ...) and leap days
        have no counterpart here and are rejected.
        """
        absolute = ("year", "month", "day", "weekday", "hour", "minute", "second", "microsecond")
        present = [name for name in absolute if getattr(delta, name, None) is not None]
        if present or getattr(delta, "leapdays", 0):
            raise ValueError(
                f"relativedelta has absolute fields {present or ['leapdays']}; "
                "only relative fields can be converted"
            )
        return cls(
            years=delta.years,
            months=delta.months,
            days=delta.days,
            hours=delta.hours,
            minutes=delta.minutes,
            seconds=delta.seconds,
            microseconds=delta.microseconds,
        )

    @classmethod
    def from_iso8601(cls, text: str) -> "RelativeDuration":
        """Parse an ISO-8601 duration such as ``P1Y2M3DT4H``."""
        from calshift.duration.iso8601 import parse_iso8601

        return parse_iso8601(text)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def months(self) -> int:
        return self._months

    @property
    def duration(self) -> timedelta:
        return self._duration

    def with_duration(self, duration: Any) -> "RelativeDuration":
        """Replace the absolute part, keeping the months."""
        return self._make(self._months, _to_timedelta(duration))

    def to_relativedelta(self) -> relativedelta:
        """Equivalent ``dateutil.relativedelta`` (months first, then the rest)."""
        return relativedelta(
            months=self._months,
            days=self._duration.days,
            seconds=self._duration.seconds,
            microseconds=self._duration.microseconds,
        )

    def to_iso8601(self) -> str:
        from calshift.duration.iso8601 import format_iso8601

        return format_iso8601(self)

    # ------------------------------------------------------------------
    # Application to date-like values
    # ------------------------------------------------------------------

    def apply(self, dt: D) -> D:
        """Shift ``dt`` by the months, then add the absolute duration."""
        shifted = shift_months(dt, self._months)
        if not self._duration:
            return shifted
        try:
            return shifted + self._duration
        except (OverflowError, ValueError) as exc:
            raise OutOfRangeError(
                f"Adding {self._duration!r} to {shifted!r} leaves the supported range"
            ) from exc

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------

    def __add__(self, other: Any) -> Any:
        if isinstance(other, RelativeDuration):
            return self._make(self._months + other._months, self._duration + other._duration)
        if isinstance(other, _DURATION_TYPES):
            return self._make(self._months, self._duration + _to_timedelta(other))
        if isinstance(other, DateLike):
            return self.apply(other)
        return NotImplemented

    __radd__ = __add__

    def __sub__(self, other: Any) -> Any:
        if isinstance(other, RelativeDuration):
            return self._make(self._months - other._months, self._duration - other._duration)
        if isinstance(other, _DURATION_TYPES):
            return self._make(self._months, self._duration - _to_timedelta(other))
        return NotImplemented

    def __rsub__(self, other: Any) -> Any:
        if isinstance(other, _DURATION_TYPES):
            return self._make(-self._months, _to_timedelta(other) - self._duration)
        if isinstance(other, DateLike):
            return (-self).apply(other)
        return NotImplemented

    def __neg__(self) -> "RelativeDuration":
        return self._make(-self._months, -self._duration)

    def __pos__(self) -> "RelativeDuration":
        return self

    def __mul__(self, other: Any) -> Any:
        try:
            factor = operator.index(other)
        except TypeError:
            return NotImplemented
        return self._make(self._months * factor, self._duration * factor)

    __rmul__ = __mul__

    def __floordiv__(self, other: Any) -> Any:
        try:
            divisor = operator.index(other)
        except TypeError:
            return NotImplemented
        return self._make(self._months // divisor, self._duration // divisor)

    def __bool__(self) -> bool:
        return bool(self._months or self._duration)

    # ------------------------------------------------------------------
    # Comparison, hashing, immutability
    # ------------------------------------------------------------------

    def _key(self) -> Tuple[int, timedelta]:
        return (self._months, self._duration)

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, RelativeDuration):
            return self._key() == other._key()
        return NotImplemented

    def __lt__(self, other: Any) -> bool:
        if isinstance(other, RelativeDuration):
            return self._key() < other._key()
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._key())

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __reduce__(self):
        return (self._make, (self._months, self._duration))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(months={self._months}, duration={self._duration!r})"
