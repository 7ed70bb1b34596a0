"""Named recurrence periods used by ``DateRule.from_frequency``."""

from __future__ import annotations

import logging
from typing import Dict, List, Union

from calshift.conventions.types import Frequency
from calshift.duration.relative import RelativeDuration

logger = logging.getLogger(__name__)


def _from_frequency(freq: Frequency) -> RelativeDuration:
    return RelativeDuration(months=freq.months()) + freq.duration()


_REGISTRY: Dict[str, RelativeDuration] = {freq.name: _from_frequency(freq) for freq in Frequency}
_REGISTRY["YEARLY"] = _REGISTRY[Frequency.ANNUAL.name]
_REGISTRY["SEMIANNUALLY"] = _REGISTRY[Frequency.SEMIANNUAL.name]


def get_period(name: Union[str, Frequency]) -> RelativeDuration:
    """Return the step registered under ``name`` (case-insensitive)."""
    key = name.name if isinstance(name, Frequency) else name.upper()
    try:
        return _REGISTRY[key]
    except KeyError as exc:
        raise ValueError(f"Unsupported period: {name}") from exc


def register_period(name: str, step: RelativeDuration) -> None:
    """Register a custom named period."""
    if not isinstance(step, RelativeDuration):
        raise TypeError(f"step must be a RelativeDuration, got {type(step).__name__}")
    key = name.upper()
    if key in _REGISTRY:
        raise ValueError(f"Period '{name}' already registered")
    logger.debug("Registering period %s as %r", key, step)
    _REGISTRY[key] = step


def available_periods() -> List[str]:
    return sorted(_REGISTRY)
