"""Database connection and session management."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from .config import settings

_engine: AsyncEngine | None = None
_sessionmaker: async_sessionmaker[AsyncSession] | None = None


def _casefold(value: str | None) -> str | None:
    """SQL casefold(): Unicode-aware lowercasing, SQLite's lower() only folds ASCII."""
    return value.casefold() if value is not None else None


def build_engine(url: str, echo: bool = False) -> AsyncEngine:
    """
    Create an async SQLite engine with the connection hooks dirtag relies on.

    Args:
        url: sqlite+aiosqlite URL (file or :memory:)
        echo: Log SQL statements

    Hooks:
        - PRAGMA foreign_keys=ON, otherwise ON DELETE CASCADE is ignored
        - casefold(text) SQL function for case-insensitive substring filters
        - the driver's own BEGIN handling is switched off and SQLAlchemy
          emits BEGIN itself, so SAVEPOINT (session.begin_nested) works
    """
    connect_args = {"check_same_thread": False}
    if ":memory:" in url:
        # One shared connection, otherwise every checkout sees an empty db
        engine = create_async_engine(
            url, echo=echo, poolclass=StaticPool, connect_args=connect_args
        )
    else:
        engine = create_async_engine(url, echo=echo, connect_args=connect_args)

    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()
        dbapi_connection.create_function("casefold", 1, _casefold, deterministic=True)

    @event.listens_for(engine.sync_engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")

    return engine


def make_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create a session factory bound to the engine."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


def get_engine() -> AsyncEngine:
    """Return the process-wide engine, creating it from settings on first use."""
    global _engine
    if _engine is None:
        _engine = build_engine(settings.resolve_database_url(), echo=settings.DATABASE_ECHO)
    return _engine


def get_sessionmaker() -> async_sessionmaker[AsyncSession]:
    """Return the process-wide session factory."""
    global _sessionmaker
    if _sessionmaker is None:
        _sessionmaker = make_sessionmaker(get_engine())
    return _sessionmaker


@asynccontextmanager
async def session_scope(
    sessionmaker: async_sessionmaker[AsyncSession] | None = None,
) -> AsyncGenerator[AsyncSession, None]:
    """
    Provide a session for one unit of work.

    Commits when the block finishes, rolls back on any exception.

    Usage:
        async with session_scope() as db:
            await DirectoryService(db).add_directory(".", ["python"])
    """
    factory = sessionmaker or get_sessionmaker()
    async with factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def init_db(engine: AsyncEngine | None = None) -> None:
    """Create tables and indexes if they do not exist (idempotent)."""
    from ..models import Base

    engine = engine or get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def drop_db(engine: AsyncEngine | None = None) -> None:
    """Drop all tables (use with caution!)."""
    from ..models import Base

    engine = engine or get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


async def dispose_engine() -> None:
    """Close pooled connections and forget the process-wide engine."""
    global _engine, _sessionmaker
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _sessionmaker = None
