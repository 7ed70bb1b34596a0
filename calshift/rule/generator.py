"""
DateRule: an iterator yielding evenly spaced dates.

Element ``k`` of a rule is always ``anchor + step * k``, computed directly
from the anchor. Nothing is carried over from the previously yielded date,
so month-end clamping at one step never leaks into the next:

    >>> rule = DateRule.monthly(date(2020, 1, 31))
    >>> [next(rule) for _ in range(3)]
    [datetime.date(2020, 1, 31), datetime.date(2020, 2, 29), datetime.date(2020, 3, 31)]
"""

from __future__ import annotations

import logging
import operator
from datetime import timedelta
from typing import Any, Generic, List, Optional, TypeVar, Union

from calshift.conventions.registry import get_period
from calshift.conventions.types import DateLike, Frequency
from calshift.duration.relative import RelativeDuration
from calshift.errors import OutOfRangeError
from calshift.shift.adjustments import with_day

logger = logging.getLogger(__name__)

D = TypeVar("D", bound=DateLike)


def _validate_count(count: Any) -> Optional[int]:
    if count is None:
        return None
    count = operator.index(count)
    if count < 0:
        raise ValueError(f"Count must be non-negative, got {count}")
    return count


def _validate_rolling_day(rolling_day: Any) -> Optional[int]:
    if rolling_day is None:
        return None
    rolling_day = operator.index(rolling_day)
    if not 1 <= rolling_day <= 31:
        raise ValueError(f"Rolling day {rolling_day} not in range 1-31")
    return rolling_day


class DateRule(Generic[D]):
    """Lazy sequence of dates spaced by a :class:`RelativeDuration`.

    The first element is the anchor itself. The sequence is unbounded unless
    limited with :meth:`with_count` and/or :meth:`with_end`.

    Args:
        anchor: Date-like value the sequence is computed from.
        step: Spacing between elements. A plain ``timedelta`` is accepted
            and wrapped with zero months.
        count: Maximum number of elements to yield.
        end: Inclusive bound on the yielded dates.
        rolling_day: Day of month every element is moved to (clamped to the
            month end).
    """

    def __init__(
        self,
        anchor: D,
        step: Union[RelativeDuration, timedelta],
        *,
        count: Optional[int] = None,
        end: Optional[D] = None,
        rolling_day: Optional[int] = None,
    ):
        if not isinstance(anchor, DateLike):
            raise TypeError(f"Unsupported anchor type: {type(anchor).__name__}")
        if not isinstance(step, RelativeDuration):
            step = RelativeDuration.from_duration(step)

        self._anchor = anchor
        self._step = step
        self._count = _validate_count(count)
        self._end = end
        self._rolling_day = _validate_rolling_day(rolling_day)
        self._cursor = 0

    # ------------------------------------------------------------------
    # Named constructors
    # ------------------------------------------------------------------

    @classmethod
    def from_frequency(cls, anchor: D, frequency: Union[Frequency, str]) -> "DateRule[D]":
        """Create a rule stepping by a registered named period."""
        return cls(anchor, get_period(frequency))

    @classmethod
    def secondly(cls, anchor: D) -> "DateRule[D]":
        return cls(anchor, RelativeDuration(seconds=1))

    @classmethod
    def minutely(cls, anchor: D) -> "DateRule[D]":
        return cls(anchor, RelativeDuration(minutes=1))

    @classmethod
    def hourly(cls, anchor: D) -> "DateRule[D]":
        return cls(anchor, RelativeDuration(hours=1))

    @classmethod
    def daily(cls, anchor: D) -> "DateRule[D]":
        return cls(anchor, RelativeDuration(days=1))

    @classmethod
    def weekly(cls, anchor: D) -> "DateRule[D]":
        return cls(anchor, RelativeDuration(weeks=1))

    @classmethod
    def monthly(cls, anchor: D) -> "DateRule[D]":
        """Dates one month apart; ambiguous month-ends are shifted backwards."""
        return cls(anchor, RelativeDuration(months=1))

    @classmethod
    def quarterly(cls, anchor: D) -> "DateRule[D]":
        return cls(anchor, RelativeDuration(months=3))

    @classmethod
    def semiannually(cls, anchor: D) -> "DateRule[D]":
        return cls(anchor, RelativeDuration(months=6))

    @classmethod
    def yearly(cls, anchor: D) -> "DateRule[D]":
        """Dates one year apart; Feb 29th falls back to Feb 28th."""
        return cls(anchor, RelativeDuration(years=1))

    # ------------------------------------------------------------------
    # Limits
    # ------------------------------------------------------------------

    def _replace(self, **changes: Any) -> "DateRule[D]":
        params = {
            "count": self._count,
            "end": self._end,
            "rolling_day": self._rolling_day,
        }
        params.update(changes)
        return type(self)(self._anchor, self._step, **params)

    def with_count(self, count: int) -> "DateRule[D]":
        """Limit the rule to ``count`` dates, the anchor included."""
        return self._replace(count=count)

    def with_end(self, end: D) -> "DateRule[D]":
        """Limit the rule to dates up to and including ``end``.

        If ``end`` is before the anchor the rule is treated as running
        backwards and stops at the first date earlier than ``end``. A step
        moving away from ``end`` never reaches it, and the rule does not
        terminate unless it also has a count.
        """
        return self._replace(end=end)

    def with_rolling_day(self, rolling_day: int) -> "DateRule[D]":
        """Move every yielded date to ``rolling_day`` of its month.

        Days past the end of a month are shifted back to the month end, so
        a monthly rule from Feb 29th with rolling day 31 yields Feb 29th,
        Mar 31st, Apr 30th, ...
        """
        return self._replace(rolling_day=rolling_day)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def anchor(self) -> D:
        return self._anchor

    @property
    def step(self) -> RelativeDuration:
        return self._step

    @property
    def count(self) -> Optional[int]:
        return self._count

    @property
    def end(self) -> Optional[D]:
        return self._end

    @property
    def rolling_day(self) -> Optional[int]:
        return self._rolling_day

    @property
    def cursor(self) -> int:
        """Number of dates yielded so far."""
        return self._cursor

    @property
    def is_bounded(self) -> bool:
        return self._count is not None or self._end is not None

    # ------------------------------------------------------------------
    # Element computation
    # ------------------------------------------------------------------

    def _compute(self, index: int) -> D:
        try:
            offset = self._step * index
        except OverflowError as exc:
            raise OutOfRangeError(f"Step {self._step!r} times {index} overflows") from exc
        element = self._anchor + offset
        if self._rolling_day is not None:
            element = with_day(element, self._rolling_day)
        return element

    def _past_end(self, element: D) -> bool:
        if self._end is None:
            return False
        if self._end >= self._anchor:
            return element > self._end
        return element < self._end

    def nth(self, index: int) -> D:
        """Return element ``index`` (0 is the anchor) without moving the cursor.

        Raises:
            IndexError: if ``index`` is negative or lies beyond the count or
                the end bound.
        """
        index = operator.index(index)
        if index < 0:
            raise IndexError(f"DateRule index must be non-negative, got {index}")
        if self._count is not None and index >= self._count:
            raise IndexError(f"DateRule index {index} beyond count {self._count}")
        element = self._compute(index)
        if self._past_end(element):
            raise IndexError(f"DateRule index {index} beyond end {self._end!r}")
        return element

    def __iter__(self) -> "DateRule[D]":
        return self

    def __next__(self) -> D:
        if self._count is not None and self._cursor >= self._count:
            raise StopIteration

        element = self._compute(self._cursor)
        if self._past_end(element):
            logger.debug("DateRule reached end %r after %s dates", self._end, self._cursor)
            raise StopIteration

        self._cursor += 1
        return element

    # ------------------------------------------------------------------
    # Cursor control
    # ------------------------------------------------------------------

    def copy(self) -> "DateRule[D]":
        """Independent rule sharing anchor and limits, at the same position."""
        clone = self._replace()
        clone._cursor = self._cursor
        return clone

    __copy__ = copy

    def reset(self) -> None:
        self._cursor = 0

    def seek(self, position: int) -> None:
        """Move the cursor so the next date yielded is element ``position``."""
        position = operator.index(position)
        if position < 0:
            raise ValueError(f"Position must be non-negative, got {position}")
        self._cursor = position

    def to_list(self) -> List[D]:
        """All dates of a bounded rule, starting from the anchor."""
        if not self.is_bounded:
            raise ValueError("Cannot materialise an unbounded DateRule; use with_count or with_end")
        fresh = self._replace()
        return list(fresh)

    # ------------------------------------------------------------------
    # Dunder helpers
    # ------------------------------------------------------------------

    def _key(self):
        return (self._anchor, self._step, self._count, self._end, self._rolling_day, self._cursor)

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, DateRule):
            return self._key() == other._key()
        return NotImplemented

    __hash__ = None

    def __repr__(self) -> str:
        parts = [f"anchor={self._anchor!r}", f"step={self._step!r}"]
        if self._count is not None:
            parts.append(f"count={self._count}")
        if self._end is not None:
            parts.append(f"end={self._end!r}")
        if self._rolling_day is not None:
            parts.append(f"rolling_day={self._rolling_day}")
        parts.append(f"cursor={self._cursor}")
        return f"{type(self).__name__}({', '.join(parts)})"
