"""Base repository with common CRUD operations."""

from typing import Any, Generic, TypeVar

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.errors import ConstraintViolation
from ..core.logging import get_logger
from ..models.base import Base

logger = get_logger(__name__)

# TypeVar for the Generic class, works with any model
ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Base repository with CRUD operations.

    Every method is a single statement against the session. Nothing is
    committed here, the caller owns the transaction.

    Example:
        tag_repo = BaseRepository[Tag](Tag, db_session)
        tag = await tag_repo.get_by_id(1)
    """

    def __init__(self, model: type[ModelType], db: AsyncSession):
        """
        Args:
            model: SQLAlchemy model class (Tag, Directory)
            db: Async database session
        """
        self.model = model
        self.db = db

    async def create(self, obj: ModelType) -> ModelType:
        """
        Insert a new row.

        Args:
            obj: Model instance to persist

        Returns:
            The same object with id and timestamps filled in

        Raises:
            ConstraintViolation: Unique or foreign key constraint failed

        The INSERT runs inside a SAVEPOINT, so a failed insert leaves the
        surrounding transaction usable.
        """
        try:
            async with self.db.begin_nested():
                self.db.add(obj)
                await self.db.flush()
        except IntegrityError as exc:
            logger.debug(
                "Insert rejected", extra={"model": self.model.__name__, "error": str(exc.orig)}
            )
            raise ConstraintViolation(
                f"Cannot create {self.model.__name__}: {exc.orig}", orig=exc
            ) from exc

        await self.db.refresh(obj)
        return obj

    async def get_by_id(self, id: int) -> ModelType | None:
        """
        Get an object by primary key.

        SQL equivalent:
            SELECT * FROM table WHERE id = {id} LIMIT 1;
        """
        result = await self.db.execute(select(self.model).where(self.model.id == id))
        return result.scalar_one_or_none()

    async def get_all(self, skip: int = 0, limit: int | None = None) -> list[ModelType]:
        """
        Get all rows, optionally paginated.

        SQL equivalent:
            SELECT * FROM table OFFSET {skip} LIMIT {limit};
        """
        stmt = select(self.model).offset(skip)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def update(self, id: int, **kwargs: Any) -> ModelType | None:
        """
        Update a row by id.

        Args:
            id: Primary key
            **kwargs: Fields to change (name="backend", description=None)

        Returns:
            Updated object or None if not found

        Raises:
            ConstraintViolation: The new values break a unique constraint

        SQL equivalent:
            UPDATE table SET field1=value1 WHERE id={id};
        """
        obj = await self.get_by_id(id)
        if not obj:
            return None

        try:
            async with self.db.begin_nested():
                for key, value in kwargs.items():
                    if hasattr(obj, key):
                        setattr(obj, key, value)
                await self.db.flush()
        except IntegrityError as exc:
            logger.debug(
                "Update rejected", extra={"model": self.model.__name__, "error": str(exc.orig)}
            )
            raise ConstraintViolation(
                f"Cannot update {self.model.__name__}: {exc.orig}", orig=exc
            ) from exc

        await self.db.refresh(obj)
        return obj

    async def delete(self, id: int) -> bool:
        """
        Delete a row by id.

        Returns:
            True if a row was deleted, False if not found

        SQL equivalent:
            DELETE FROM table WHERE id={id};
        """
        result = await self.db.execute(delete(self.model).where(self.model.id == id))
        return result.rowcount > 0

    async def exists(self, id: int) -> bool:
        """Check whether a row with this id exists."""
        obj = await self.get_by_id(id)
        return obj is not None

    async def count(self) -> int:
        """
        Count rows.

        SQL equivalent:
            SELECT COUNT(*) FROM table;
        """
        result = await self.db.execute(select(func.count()).select_from(self.model))
        return result.scalar_one()
