# Re-export relative duration and its ISO-8601 codec
from .relative import RelativeDuration

from .iso8601 import format_iso8601, parse_iso8601

__all__ = ["RelativeDuration", "format_iso8601", "parse_iso8601"]
