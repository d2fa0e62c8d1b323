"""Directory service with business logic."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from sqlalchemy.ext.asyncio import AsyncSession

from ..core.errors import (
    ConflictError,
    ConstraintViolation,
    InvalidPathError,
    NoChangesError,
    NotFoundError,
)
from ..core.logging import get_logger
from ..core.paths import canonical
from ..models import Directory
from ..repositories import DirectoryRepository, DirectoryTagRepository, TagRepository
from .tag import clean_tag_names

logger = get_logger(__name__)


@dataclass
class RetagResult:
    """Outcome of retag_directory."""

    path: str
    added: list[str] = field(default_factory=list)
    removed: list[str] = field(default_factory=list)

    @property
    def changes(self) -> list[str]:
        """Human-readable list, e.g. ["removed 'old'", "added 'new'"]."""
        return [f"removed '{name}'" for name in self.removed] + [
            f"added '{name}'" for name in self.added
        ]


class DirectoryService:
    """
    Service for tracked directories.

    Coordinates DirectoryRepository, TagRepository and
    DirectoryTagRepository. Compound writes (add with tags, retag) run in
    one SAVEPOINT: either every link is written or none is.

    State of a directory: absent -> tracked (add) -> absent (remove).
    """

    def __init__(self, db: AsyncSession):
        self.db = db
        self.dir_repo = DirectoryRepository(db)
        self.tag_repo = TagRepository(db)
        self.link_repo = DirectoryTagRepository(db)

    async def add_directory(self, path: str, tag_names: Iterable[str] = ()) -> Directory:
        """
        Start tracking a directory.

        Args:
            path: Directory path, canonicalized before storing
            tag_names: Tags to attach, created on first use

        Returns:
            Directory with its tags loaded

        Raises:
            InvalidPathError: Path missing or not a directory
            ConflictError: Directory is already tracked
            BadRequestError: A tag name is empty
        """
        canonical_path = canonical(path)
        names = clean_tag_names(tag_names)

        if await self.dir_repo.get_by_path(canonical_path):
            raise ConflictError("Directory", "path", canonical_path)

        async with self.db.begin_nested():
            try:
                directory = await self.dir_repo.create(Directory(path=canonical_path))
            except ConstraintViolation as exc:
                raise ConflictError("Directory", "path", canonical_path) from exc

            for name in names:
                await self._attach(directory.id, name)

        logger.info("Directory added", extra={"path": canonical_path, "tags": names})
        return await self.dir_repo.get_by_path_with_tags(canonical_path)

    async def get_directory(self, path: str) -> Directory:
        """
        Get a tracked directory with its tags.

        Raises:
            InvalidPathError: Path missing or not a directory
            NotFoundError: Directory is not tracked
        """
        canonical_path = canonical(path)
        directory = await self.dir_repo.get_by_path_with_tags(canonical_path)
        if not directory:
            raise NotFoundError("Directory", canonical_path)
        return directory

    async def list_directories(self, query: str | None = None) -> list[Directory]:
        """
        List tracked directories with their tags, ordered by path.

        Args:
            query: Keep paths containing this substring (case-insensitive)
        """
        return await self.dir_repo.get_all_with_tags(query.strip() if query else None)

    async def retag_directory(
        self,
        path: str,
        add: Iterable[str] = (),
        remove: Iterable[str] = (),
    ) -> RetagResult:
        """
        Add and/or remove tags of a tracked directory.

        Removals run first. Removing a tag that does not exist or is not
        linked is skipped. Adding an already linked tag is a no-op.

        Returns:
            RetagResult with the tags actually added and removed

        Raises:
            NotFoundError: Directory is not tracked
            NoChangesError: Nothing changed (a BadRequestError)
        """
        canonical_path = canonical(path)
        directory = await self.dir_repo.get_by_path(canonical_path)
        if not directory:
            raise NotFoundError("Directory", canonical_path)

        result = RetagResult(path=canonical_path)
        remove_names = clean_tag_names(remove)
        add_names = clean_tag_names(add)

        async with self.db.begin_nested():
            for name in remove_names:
                tag = await self.tag_repo.get_by_name(name)
                if tag and await self.link_repo.unlink(directory.id, tag.id):
                    result.removed.append(name)

            for name in add_names:
                if await self._attach(directory.id, name):
                    result.added.append(name)

        if not result.changes:
            raise NoChangesError()

        logger.info(
            "Directory retagged",
            extra={"path": canonical_path, "added": result.added, "removed": result.removed},
        )
        return result

    async def remove_directory(self, path: str) -> str:
        """
        Stop tracking a directory. Its tag links are removed by cascade,
        the tags themselves stay.

        A directory that was deleted from disk can still be removed by the
        absolute path it was tracked under.

        Returns:
            Canonical path of the removed directory

        Raises:
            NotFoundError: Directory is not tracked
        """
        try:
            canonical_path = canonical(path)
        except InvalidPathError:
            canonical_path = str(Path(path).expanduser().absolute())

        if not await self.dir_repo.delete_by_path(canonical_path):
            raise NotFoundError("Directory", canonical_path)

        logger.info("Directory removed", extra={"path": canonical_path})
        return canonical_path

    async def _attach(self, dir_id: int, tag_name: str) -> bool:
        """
        Get-or-create the tag and link it.

        Returns:
            False if the link already existed
        """
        tag = await self.tag_repo.get_or_create(tag_name)
        try:
            await self.link_repo.link(dir_id, tag.id)
        except ConstraintViolation:
            if await self.link_repo.exists(dir_id, tag.id):
                return False
            raise
        return True
