"""Repository layer for data access."""

from .base import BaseRepository
from .directory import DirectoryRepository
from .directory_tag import DirectoryTagRepository
from .tag import TagRepository

__all__ = [
    "BaseRepository",
    "DirectoryRepository",
    "DirectoryTagRepository",
    "TagRepository",
]
