"""Tag service with business logic."""

from collections.abc import Iterable

from sqlalchemy.ext.asyncio import AsyncSession

from ..core.errors import BadRequestError, ConflictError, ConstraintViolation, NotFoundError
from ..core.logging import get_logger
from ..models import Tag
from ..repositories import TagRepository

logger = get_logger(__name__)


def clean_tag_name(name: str) -> str:
    """
    Validate a tag name.

    Surrounding whitespace is dropped, case is kept as typed.

    Raises:
        BadRequestError: If the name is empty
    """
    cleaned = (name or "").strip()
    if not cleaned:
        raise BadRequestError("Tag name cannot be empty")
    return cleaned


def clean_tag_names(names: Iterable[str]) -> list[str]:
    """
    Validate a list of tag names, dropping duplicates and keeping order.

    Example:
        clean_tag_names(["react", " web ", "react"])  # ["react", "web"]
    """
    seen: dict[str, None] = {}
    for name in names:
        seen.setdefault(clean_tag_name(name), None)
    return list(seen)


class TagService:
    """
    Service for tags.

    Business rules:
    1. Names are unique, case-sensitive, stored as typed (trimmed)
    2. Renaming keeps every directory link (links follow the tag id)
    3. Removing a tag removes its links, never the directories
    """

    def __init__(self, db: AsyncSession):
        self.db = db
        self.tag_repo = TagRepository(db)

    async def create_tag(self, name: str, description: str | None = None) -> Tag:
        """
        Create a new tag.

        Args:
            name: Tag name
            description: Optional free text

        Returns:
            Created tag

        Raises:
            BadRequestError: Empty name
            ConflictError: A tag with this name already exists
        """
        name = clean_tag_name(name)

        if await self.tag_repo.get_by_name(name):
            raise ConflictError("Tag", "name", name)

        try:
            tag = await self.tag_repo.create(Tag(name=name, description=description or None))
        except ConstraintViolation as exc:
            raise ConflictError("Tag", "name", name) from exc

        logger.info("Tag created", extra={"tag": name})
        return tag

    async def get_tag(self, name: str) -> Tag:
        """
        Get a tag by name.

        Raises:
            NotFoundError: If the tag does not exist
        """
        tag = await self.tag_repo.get_by_name(clean_tag_name(name))
        if not tag:
            raise NotFoundError("Tag", name)
        return tag

    async def get_or_create_tag(self, name: str) -> Tag:
        """Get a tag, creating it on first use."""
        return await self.tag_repo.get_or_create(clean_tag_name(name))

    async def list_tags(self, query: str | None = None) -> list[Tag]:
        """
        List tags ordered by name.

        Args:
            query: Keep tags whose name or description contains it
                (case-insensitive)
        """
        if query and query.strip():
            return await self.tag_repo.search(query.strip())
        return await self.tag_repo.get_all()

    async def list_tags_with_usage(self) -> list[tuple[Tag, int]]:
        """
        List tags with the number of directories using them.

        Example:
            [(Tag('backend'), 4), (Tag('frontend'), 7), (Tag('old'), 0)]
        """
        return await self.tag_repo.get_with_usage()

    async def rename_tag(self, old_name: str, new_name: str) -> Tag:
        """
        Rename a tag.

        Raises:
            NotFoundError: old_name does not exist
            ConflictError: new_name already exists (including old_name itself)
        """
        tag = await self.get_tag(old_name)
        new_name = clean_tag_name(new_name)

        if await self.tag_repo.get_by_name(new_name):
            raise ConflictError("Tag", "name", new_name)

        try:
            renamed = await self.tag_repo.rename(tag.id, new_name)
        except ConstraintViolation as exc:
            raise ConflictError("Tag", "name", new_name) from exc

        logger.info("Tag renamed", extra={"old_name": old_name, "new_name": new_name})
        return renamed

    async def describe_tag(self, name: str, description: str | None) -> Tag:
        """Set or clear (empty string / None) the description of a tag."""
        tag = await self.get_tag(name)
        return await self.tag_repo.update(tag.id, description=description or None)

    async def remove_tag(self, name: str) -> None:
        """
        Remove a tag and all of its directory links.

        Raises:
            NotFoundError: If the tag does not exist
        """
        name = clean_tag_name(name)
        deleted = await self.tag_repo.delete_by_name(name)
        if not deleted:
            raise NotFoundError("Tag", name)

        logger.info("Tag removed", extra={"tag": name})

    async def prune_unused_tags(self) -> list[str]:
        """
        Delete every tag that no directory uses.

        Returns:
            Names of the removed tags
        """
        unused = await self.tag_repo.get_unused()
        names = [tag.name for tag in unused]
        for tag in unused:
            await self.tag_repo.delete(tag.id)

        if names:
            logger.info("Unused tags pruned", extra={"tags": names})
        return names
