"""
Basic types and enums used across the shifting and rule modules.
"""

from datetime import timedelta
from enum import Enum
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class DateLike(Protocol):
    """A value exposing year/month/day that can be rebuilt and shifted.

    ``datetime.date``, ``datetime.datetime`` and ``pandas.Timestamp`` all
    satisfy this protocol.
    """

    @property
    def year(self) -> int: ...

    @property
    def month(self) -> int: ...

    @property
    def day(self) -> int: ...

    def replace(self, *args: Any, **kwargs: Any) -> Any: ...

    def __add__(self, other: timedelta) -> Any: ...


class Frequency(Enum):
    """Named recurrence periods as (months, seconds) pairs."""

    SECONDLY = (0, 1)
    MINUTELY = (0, 60)
    HOURLY = (0, 3600)
    DAILY = (0, 86400)
    WEEKLY = (0, 7 * 86400)
    MONTHLY = (1, 0)
    QUARTERLY = (3, 0)
    SEMIANNUAL = (6, 0)
    ANNUAL = (12, 0)

    def months(self) -> int:
        return self.value[0]

    def duration(self) -> timedelta:
        return timedelta(seconds=self.value[1])
