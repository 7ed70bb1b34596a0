# Re-export convention types; the named-period registry lives in .registry
from .types import DateLike, Frequency

__all__ = ["DateLike", "Frequency"]
