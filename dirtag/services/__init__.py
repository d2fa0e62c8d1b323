"""Service layer with business logic."""

from .directory import DirectoryService, RetagResult
from .search import SearchService
from .tag import TagService, clean_tag_name, clean_tag_names

__all__ = [
    "DirectoryService",
    "RetagResult",
    "SearchService",
    "TagService",
    "clean_tag_name",
    "clean_tag_names",
]
