"""SQLAlchemy models for dirtag."""

from .base import Base, TimestampMixin, utc_now
from .directory import Directory
from .directory_tag import directory_tags
from .tag import Tag

__all__ = [
    "Base",
    "TimestampMixin",
    "utc_now",
    "Tag",
    "Directory",
    "directory_tags",
]
