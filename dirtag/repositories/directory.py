"""Directory repository with specific queries."""

from collections.abc import Collection

from sqlalchemy import delete, distinct, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ..models import Directory, Tag, directory_tags
from .base import BaseRepository


class DirectoryRepository(BaseRepository[Directory]):
    """
    Repository for tracked directories.

    Methods named *_with_tags eager-load Directory.tags (sorted by name).
    They use populate_existing because links are written with Core
    statements and an already loaded Directory may hold a stale collection.
    """

    def __init__(self, db: AsyncSession):
        super().__init__(Directory, db)

    def _select_with_tags(self):
        return (
            select(Directory)
            .options(selectinload(Directory.tags))
            .execution_options(populate_existing=True)
        )

    async def get_by_path(self, path: str) -> Directory | None:
        """
        Get a directory by its canonical path.

        SQL equivalent:
            SELECT * FROM directories WHERE path = {path};
        """
        result = await self.db.execute(select(Directory).where(Directory.path == path))
        return result.scalar_one_or_none()

    async def get_by_path_with_tags(self, path: str) -> Directory | None:
        """Get a directory by path together with its tags."""
        result = await self.db.execute(self._select_with_tags().where(Directory.path == path))
        return result.scalar_one_or_none()

    async def get_all_with_tags(self, query: str | None = None) -> list[Directory]:
        """
        Get all directories with their tags, ordered by path.

        Args:
            query: Keep only paths containing this substring (case-insensitive)

        SQL equivalent:
            SELECT * FROM directories
            WHERE casefold(path) LIKE '%{query}%'
            ORDER BY path;
            -- then one SELECT ... IN (...) for the tags (selectinload)
        """
        stmt = self._select_with_tags().order_by(Directory.path)
        if query:
            stmt = stmt.where(
                func.casefold(Directory.path).contains(query.casefold(), autoescape=True)
            )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def delete_by_path(self, path: str) -> bool:
        """
        Delete a directory by path. ON DELETE CASCADE removes its links.

        SQL equivalent:
            DELETE FROM directories WHERE path = {path};
        """
        result = await self.db.execute(delete(Directory).where(Directory.path == path))
        return result.rowcount > 0

    async def find_by_all_tags(self, tag_names: Collection[str]) -> list[Directory]:
        """
        Directories linked to every one of the given tags (AND).

        Args:
            tag_names: Tag names, duplicates are ignored

        Returns:
            Matching directories with their complete tag lists, ordered by path

        SQL equivalent:
            SELECT * FROM directories WHERE id IN (
                SELECT directory_tags.dir_id
                FROM directory_tags JOIN tags ON tags.id = directory_tags.tag_id
                WHERE tags.name IN ({names})
                GROUP BY directory_tags.dir_id
                HAVING COUNT(DISTINCT tags.id) = {len(names)}
            )
            ORDER BY path;
        """
        names = set(tag_names)
        if not names:
            return []

        matched_ids = (
            select(directory_tags.c.dir_id)
            .join(Tag, Tag.id == directory_tags.c.tag_id)
            .where(Tag.name.in_(sorted(names)))
            .group_by(directory_tags.c.dir_id)
            .having(func.count(distinct(Tag.id)) == len(names))
        )
        result = await self.db.execute(
            self._select_with_tags().where(Directory.id.in_(matched_ids)).order_by(Directory.path)
        )
        return list(result.scalars().all())

    async def find_by_any_tag(self, tag_names: Collection[str]) -> list[Directory]:
        """
        Directories linked to at least one of the given tags (OR).

        Returns:
            Matching directories (each once) with their complete tag lists,
            ordered by path

        SQL equivalent:
            SELECT * FROM directories WHERE id IN (
                SELECT directory_tags.dir_id
                FROM directory_tags JOIN tags ON tags.id = directory_tags.tag_id
                WHERE tags.name IN ({names})
            )
            ORDER BY path;
        """
        names = set(tag_names)
        if not names:
            return []

        matched_ids = (
            select(directory_tags.c.dir_id)
            .join(Tag, Tag.id == directory_tags.c.tag_id)
            .where(Tag.name.in_(sorted(names)))
        )
        result = await self.db.execute(
            self._select_with_tags().where(Directory.id.in_(matched_ids)).order_by(Directory.path)
        )
        return list(result.scalars().all())
