"""Directory-Tag junction table."""

from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, Table

from .base import Base, utc_now

# Many-to-many junction table for directories and tags.
# Rows are inserted and deleted, never updated in place.
directory_tags = Table(
    "directory_tags",
    Base.metadata,
    Column(
        "dir_id", Integer, ForeignKey("directories.id", ondelete="CASCADE"), primary_key=True
    ),
    Column("tag_id", Integer, ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True),
    Column("created_at", DateTime, default=utc_now, nullable=False),
    Column("updated_at", DateTime, default=utc_now, onupdate=utc_now, nullable=False),
    Index("idx_dir_tags_tag", "tag_id"),
    Index("idx_dir_tags_dir", "dir_id"),
)
