"""Search service: find directories by tags."""

from collections.abc import Iterable

from sqlalchemy.ext.asyncio import AsyncSession

from ..core.errors import BadRequestError
from ..core.logging import get_logger
from ..models import Directory
from ..repositories import DirectoryRepository
from .tag import clean_tag_names

logger = get_logger(__name__)


class SearchService:
    """
    Multi-tag directory search.

    Two modes:
    - AND (default): directory has every requested tag
    - OR (match_any=True): directory has at least one requested tag

    In both modes each result carries its complete tag list, not only the
    matched tags. Unknown tag names match nothing and are not an error.

    Example (/x: frontend, react; /y: backend; /z: frontend):
        search(["frontend"])                             # [/x, /z]
        search(["frontend", "react"])                    # [/x]
        search(["frontend", "backend"], match_any=True)  # [/x, /y, /z]
    """

    def __init__(self, db: AsyncSession):
        self.db = db
        self.dir_repo = DirectoryRepository(db)

    async def search(
        self, tag_names: Iterable[str], match_any: bool = False
    ) -> list[Directory]:
        """
        Search directories by tags.

        Args:
            tag_names: Requested tags, duplicates are collapsed
            match_any: OR semantics instead of AND

        Returns:
            Matching directories ordered by path

        Raises:
            BadRequestError: No tag names given
        """
        names = clean_tag_names(name for name in tag_names if name and name.strip())
        if not names:
            raise BadRequestError("At least one tag is required for search")

        if match_any:
            directories = await self.dir_repo.find_by_any_tag(names)
        else:
            directories = await self.dir_repo.find_by_all_tags(names)

        logger.debug(
            "Search finished",
            extra={
                "tags": names,
                "mode": "any" if match_any else "all",
                "matches": len(directories),
            },
        )
        return directories
