# Re-export rule components
from .frames import to_index
from .generator import DateRule

__all__ = ["DateRule", "to_index"]
