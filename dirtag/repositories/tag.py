"""Tag repository with specific queries."""

from sqlalchemy import delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.errors import ConstraintViolation
from ..core.logging import get_logger
from ..models import Tag, directory_tags
from .base import BaseRepository

logger = get_logger(__name__)


class TagRepository(BaseRepository[Tag]):
    """
    Repository for tags.

    Tag names are unique and compared exactly (case-sensitive).
    """

    def __init__(self, db: AsyncSession):
        super().__init__(Tag, db)

    async def get_by_name(self, name: str) -> Tag | None:
        """
        Get a tag by its name.

        Args:
            name: Tag name (e.g. "frontend", "backend")

        Returns:
            Tag or None

        SQL equivalent:
            SELECT * FROM tags WHERE name = {name};
        """
        result = await self.db.execute(select(Tag).where(Tag.name == name))
        return result.scalar_one_or_none()

    async def get_all(self, skip: int = 0, limit: int | None = None) -> list[Tag]:
        """Get all tags ordered by name."""
        stmt = select(Tag).order_by(Tag.name).offset(skip)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def get_or_create(self, name: str) -> Tag:
        """
        Get a tag by name, creating it if it does not exist.

        Args:
            name: Tag name

        Returns:
            Existing or new tag

        Race tolerant: if another writer inserts the same name between our
        SELECT and INSERT, the unique index rejects our row and we re-select
        the winner instead of failing.
        """
        tag = await self.get_by_name(name)
        if tag:
            return tag

        try:
            return await self.create(Tag(name=name))
        except ConstraintViolation:
            tag = await self.get_by_name(name)
            if tag is None:
                raise
            logger.debug("Tag created concurrently, reusing it", extra={"tag": name})
            return tag

    async def search(self, search_term: str) -> list[Tag]:
        """
        Search tags by name or description (case-insensitive substring).

        SQL equivalent:
            SELECT * FROM tags
            WHERE casefold(name) LIKE '%{term}%' OR casefold(description) LIKE '%{term}%'
            ORDER BY name;
        """
        term = search_term.casefold()
        result = await self.db.execute(
            select(Tag)
            .where(
                or_(
                    func.casefold(Tag.name).contains(term, autoescape=True),
                    func.casefold(Tag.description).contains(term, autoescape=True),
                )
            )
            .order_by(Tag.name)
        )
        return list(result.scalars().all())

    async def rename(self, id: int, new_name: str) -> Tag | None:
        """
        Rename a tag. Links to directories follow the tag id, so they survive.

        Raises:
            ConstraintViolation: new_name is already taken
        """
        return await self.update(id, name=new_name)

    async def delete_by_name(self, name: str) -> bool:
        """
        Delete a tag by name. ON DELETE CASCADE removes its directory links.

        SQL equivalent:
            DELETE FROM tags WHERE name = {name};
        """
        result = await self.db.execute(delete(Tag).where(Tag.name == name))
        return result.rowcount > 0

    async def get_with_usage(self) -> list[tuple[Tag, int]]:
        """
        Get all tags with the number of directories using each one.

        Returns:
            List of (tag, directory_count) tuples ordered by tag name

        SQL equivalent:
            SELECT tags.*, COUNT(directory_tags.dir_id) AS usage_count
            FROM tags
            LEFT JOIN directory_tags ON tags.id = directory_tags.tag_id
            GROUP BY tags.id
            ORDER BY tags.name;
        """
        result = await self.db.execute(
            select(Tag, func.count(directory_tags.c.dir_id).label("usage_count"))
            .outerjoin(directory_tags, Tag.id == directory_tags.c.tag_id)
            .group_by(Tag.id)
            .order_by(Tag.name)
        )
        return [(row[0], row[1]) for row in result.all()]

    async def get_unused(self) -> list[Tag]:
        """
        Get tags not linked to any directory.

        SQL equivalent:
            SELECT tags.*
            FROM tags
            LEFT JOIN directory_tags ON tags.id = directory_tags.tag_id
            WHERE directory_tags.tag_id IS NULL;
        """
        result = await self.db.execute(
            select(Tag)
            .outerjoin(directory_tags, Tag.id == directory_tags.c.tag_id)
            .where(directory_tags.c.tag_id.is_(None))
            .order_by(Tag.name)
        )
        return list(result.scalars().all())
