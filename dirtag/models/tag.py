"""Tag model."""

from sqlalchemy import Index, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin


class Tag(Base, TimestampMixin):
    """Label attached to directories. Names are unique and case-sensitive."""

    __tablename__ = "tags"
    __table_args__ = (Index("idx_tags_name", "name", unique=True),)

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Relationships (read side only, links are written through directory_tags)
    directories: Mapped[list["Directory"]] = relationship(
        "Directory",
        secondary="directory_tags",
        back_populates="tags",
        order_by="Directory.path",
        viewonly=True,
    )

    def __repr__(self) -> str:
        return f"<Tag(id={self.id}, name='{self.name}')>"
