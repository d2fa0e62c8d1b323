"""Repository for the directory_tags association table."""

from sqlalchemy import and_, delete, func, insert, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.errors import ConstraintViolation
from ..core.logging import get_logger
from ..models import Tag, directory_tags

logger = get_logger(__name__)


class DirectoryTagRepository:
    """
    Link/unlink primitives for the many-to-many table.

    directory_tags is a plain Table, not a model, so this does not extend
    BaseRepository.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    def _row(self, dir_id: int, tag_id: int):
        return and_(directory_tags.c.dir_id == dir_id, directory_tags.c.tag_id == tag_id)

    async def link(self, dir_id: int, tag_id: int) -> None:
        """
        Insert an association row.

        Raises:
            ConstraintViolation: The link already exists, or dir_id / tag_id
                does not reference an existing row

        SQL equivalent:
            INSERT INTO directory_tags (dir_id, tag_id, created_at, updated_at)
            VALUES ({dir_id}, {tag_id}, now, now);
        """
        try:
            async with self.db.begin_nested():
                await self.db.execute(insert(directory_tags).values(dir_id=dir_id, tag_id=tag_id))
        except IntegrityError as exc:
            logger.debug(
                "Link rejected", extra={"dir_id": dir_id, "tag_id": tag_id, "error": str(exc.orig)}
            )
            raise ConstraintViolation(
                f"Cannot link directory {dir_id} to tag {tag_id}: {exc.orig}", orig=exc
            ) from exc

    async def unlink(self, dir_id: int, tag_id: int) -> bool:
        """
        Delete one association row.

        Returns:
            True if the link existed
        """
        result = await self.db.execute(delete(directory_tags).where(self._row(dir_id, tag_id)))
        return result.rowcount > 0

    async def unlink_all(self, dir_id: int) -> int:
        """
        Delete every link of a directory.

        Returns:
            Number of removed links
        """
        result = await self.db.execute(
            delete(directory_tags).where(directory_tags.c.dir_id == dir_id)
        )
        return result.rowcount

    async def exists(self, dir_id: int, tag_id: int) -> bool:
        """Check whether the directory is linked to the tag."""
        result = await self.db.execute(
            select(func.count()).select_from(directory_tags).where(self._row(dir_id, tag_id))
        )
        return result.scalar_one() > 0

    async def get_tags(self, dir_id: int) -> list[Tag]:
        """
        Tags linked to a directory, ordered by name.

        SQL equivalent:
            SELECT tags.* FROM tags
            JOIN directory_tags ON tags.id = directory_tags.tag_id
            WHERE directory_tags.dir_id = {dir_id}
            ORDER BY tags.name;
        """
        result = await self.db.execute(
            select(Tag)
            .join(directory_tags, Tag.id == directory_tags.c.tag_id)
            .where(directory_tags.c.dir_id == dir_id)
            .order_by(Tag.name)
        )
        return list(result.scalars().all())

    async def count(self, dir_id: int | None = None) -> int:
        """Count association rows, optionally for one directory."""
        stmt = select(func.count()).select_from(directory_tags)
        if dir_id is not None:
            stmt = stmt.where(directory_tags.c.dir_id == dir_id)
        result = await self.db.execute(stmt)
        return result.scalar_one()
