"""Small helpers used by the presentation layer."""

from .time import relative_time

__all__ = ["relative_time"]
