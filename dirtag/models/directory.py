"""Directory model."""

from sqlalchemy import Index, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin


class Directory(Base, TimestampMixin):
    """Tracked directory, identified by its canonical absolute path."""

    __tablename__ = "directories"
    __table_args__ = (Index("idx_directories_path", "path", unique=True),)

    id: Mapped[int] = mapped_column(primary_key=True)
    path: Mapped[str] = mapped_column(Text, nullable=False)

    # Tags relationship (many-to-many), always sorted by name
    tags: Mapped[list["Tag"]] = relationship(
        "Tag",
        secondary="directory_tags",
        back_populates="directories",
        order_by="Tag.name",
        viewonly=True,
    )

    def __repr__(self) -> str:
        return f"<Directory(id={self.id}, path='{self.path}')>"
