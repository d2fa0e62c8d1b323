"""Core application components."""

from .config import Settings, settings
from .database import (
    build_engine,
    dispose_engine,
    drop_db,
    get_engine,
    get_sessionmaker,
    init_db,
    make_sessionmaker,
    session_scope,
)
from .errors import (
    BadRequestError,
    ConflictError,
    ConstraintViolation,
    DirtagError,
    InvalidPathError,
    NoChangesError,
    NotFoundError,
)

__all__ = [
    "settings",
    "Settings",
    "build_engine",
    "make_sessionmaker",
    "get_engine",
    "get_sessionmaker",
    "session_scope",
    "init_db",
    "drop_db",
    "dispose_engine",
    "DirtagError",
    "NotFoundError",
    "ConflictError",
    "BadRequestError",
    "InvalidPathError",
    "NoChangesError",
    "ConstraintViolation",
]
