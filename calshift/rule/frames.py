"""pandas export of bounded date rules."""

from typing import Optional

import pandas as pd

from calshift.rule.generator import DateRule


def to_index(rule: DateRule, name: Optional[str] = None) -> pd.DatetimeIndex:
    """Return every date of a bounded ``rule`` as a ``DatetimeIndex``."""
    return pd.DatetimeIndex(rule.to_list(), name=name)
