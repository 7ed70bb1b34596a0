"""
ISO-8601 duration text for :class:`RelativeDuration`.

Accepted form: ``P[nY][nM][nW][nD][T[nH][nM][nS]]`` where every ``n`` is a
signed integer. Years fold into months and weeks into days. Formatting emits
only the non-zero components and drops sub-second precision.
"""

import re

from calshift.duration.relative import RelativeDuration
from calshift.errors import DurationParseError

_INT = r"([+-]?\d+)"

_PATTERN = re.compile(
    rf"""
    ^P
    (?:{_INT}Y)?
    (?:{_INT}M)?
    (?:{_INT}W)?
    (?:{_INT}D)?
    (?:T
        (?:{_INT}H)?
        (?:{_INT}M)?
        (?:{_INT}S)?
    )?$
    """,
    re.VERBOSE,
)

_SECONDS_PER_DAY = 24 * 60 * 60


def parse_iso8601(text: str) -> RelativeDuration:
    """Parse ``text`` into a ``RelativeDuration``.

    Raises:
        DurationParseError: if ``text`` is not of the accepted form.
    """
    if not isinstance(text, str):
        raise TypeError(f"Expected str, got {type(text).__name__}")
    if not text.startswith("P"):
        raise DurationParseError(f"Duration {text!r} was not prefixed with P")

    match = _PATTERN.match(text)
    if match is None:
        raise DurationParseError(f"Unsupported ISO-8601 duration: {text!r}")

    years, months, weeks, days, hours, minutes, seconds = (
        int(group) if group is not None else 0 for group in match.groups()
    )
    try:
        return RelativeDuration(
            years=years,
            months=months,
            days=weeks * 7 + days,
            hours=hours,
            minutes=minutes,
            seconds=seconds,
        )
    except (OverflowError, ValueError) as exc:
        raise DurationParseError(f"Duration {text!r} is out of range") from exc


def _format_spec(values, designators) -> str:
    return "".join(
        f"{value}{designator}" for value, designator in zip(values, designators) if value
    )


def _split_signed(total: int, unit: int):
    sign = -1 if total < 0 else 1
    quotient, remainder = divmod(abs(total), unit)
    return sign * quotient, sign * remainder


def format_iso8601(delta: RelativeDuration) -> str:
    """Format ``delta`` as ISO-8601 text, e.g. ``P1YT1S``.

    Components take the sign of the field they come from, truncated toward
    zero, so ``-13`` months formats as ``P-1Y-1M``.
    """
    years, months = _split_signed(delta.months, 12)

    duration = delta.duration
    whole_seconds = duration.days * _SECONDS_PER_DAY + duration.seconds
    total_seconds, _ = _split_signed(whole_seconds * 1_000_000 + duration.microseconds, 1_000_000)
    days, remaining = _split_signed(total_seconds, _SECONDS_PER_DAY)
    hours, remaining = _split_signed(remaining, 60 * 60)
    minutes, seconds = _split_signed(remaining, 60)

    date_spec = _format_spec((years, months, days), "YMD")
    time_spec = _format_spec((hours, minutes, seconds), "HMS")

    if not date_spec and not time_spec:
        return "P0D"
    if time_spec:
        return f"P{date_spec}T{time_spec}"
    return f"P{date_spec}"
