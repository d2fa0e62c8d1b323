"""
Pytest fixtures.

Provides:
- test_engine: isolated SQLite in-memory database for each test
- test_db: async session on that database
- make_dir: creates real directories under tmp_path (paths are canonicalized)
- cli_state: points the CLI at a throwaway state directory
"""

from pathlib import Path

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession

from dirtag.core import database
from dirtag.core.config import settings
from dirtag.core.database import build_engine, drop_db, init_db, make_sessionmaker

# Test database URL (SQLite in-memory)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def test_engine():
    """
    Async engine for the test database.

    Built with build_engine, so foreign keys (ON DELETE CASCADE) and
    SAVEPOINTs behave exactly as in production. Tables are recreated for
    every test.
    """
    engine = build_engine(TEST_DATABASE_URL)

    await drop_db(engine)
    await init_db(engine)

    yield engine

    await drop_db(engine)

    await engine.dispose()


@pytest_asyncio.fixture
async def test_db(test_engine) -> AsyncSession:
    """Async session for the test database, rolled back after the test."""
    TestSessionLocal = make_sessionmaker(test_engine)

    async with TestSessionLocal() as session:
        yield session
        await session.rollback()


@pytest.fixture
def make_dir(tmp_path):
    """
    Factory creating a real directory under tmp_path.

    Usage:
        x = make_dir("x")  # canonical path of tmp_path/x
    """

    def _make(name: str) -> str:
        path = tmp_path / "dirs" / name
        path.mkdir(parents=True, exist_ok=True)
        return str(path.resolve())

    return _make


@pytest.fixture
def cli_state(tmp_path, monkeypatch) -> Path:
    """Run CLI commands against a fresh database file in tmp_path/state."""
    state_dir = tmp_path / "state"
    # paths under tmp_path are printed as-is, not shortened to "~"
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.setattr(settings, "STATE_DIR", str(state_dir))
    monkeypatch.setattr(settings, "DATABASE_URL", None)
    monkeypatch.setattr(settings, "DB_FILENAME", "tag.db")
    monkeypatch.setattr(database, "_engine", None)
    monkeypatch.setattr(database, "_sessionmaker", None)
    return state_dir
