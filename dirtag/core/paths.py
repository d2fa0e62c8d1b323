"""Filesystem paths: state location and directory canonicalization."""

import os
from pathlib import Path

from .errors import InvalidPathError

APP_NAME = "dirtag"

# ~/.local/state/dirtag when XDG_STATE_HOME is not set
DEFAULT_STATE_DIR = Path(".local") / "state" / APP_NAME


def get_state_dir(override: str | None = None) -> Path:
    """
    Get the application state directory, creating it if needed.

    Args:
        override: Explicit directory (Settings.STATE_DIR)

    Returns:
        Absolute path of the state directory

    Lookup order:
        1. override
        2. $XDG_STATE_HOME/dirtag
        3. ~/.local/state/dirtag
    """
    if override:
        state_dir = Path(override).expanduser()
    elif os.environ.get("XDG_STATE_HOME"):
        state_dir = Path(os.environ["XDG_STATE_HOME"]) / APP_NAME
    else:
        state_dir = Path.home() / DEFAULT_STATE_DIR

    state_dir = state_dir.resolve()
    state_dir.mkdir(parents=True, exist_ok=True)
    return state_dir


def get_state_path(filename: str = "tag.db", override: str | None = None) -> Path:
    """Get the absolute path of the database file inside the state directory."""
    return get_state_dir(override) / filename


def canonical(path: str | Path) -> str:
    """
    Resolve a user-supplied path to its canonical form.

    Args:
        path: Relative or absolute path, "~" is expanded

    Returns:
        Absolute, symlink-resolved path as a string

    Raises:
        InvalidPathError: If the path does not exist or is not a directory

    Example:
        canonical(".")          # "/home/me/projects/app"
        canonical("~/link-dir") # "/srv/real-dir"
    """
    candidate = Path(path).expanduser().absolute()

    if not candidate.exists():
        raise InvalidPathError(str(path), "does not exist")

    if not candidate.is_dir():
        raise InvalidPathError(str(path), "is not a directory")

    return str(candidate.resolve(strict=True))


def replace_homedir(path: str) -> str:
    """Show the home directory prefix as "~"."""
    home = str(Path.home())
    if path == home:
        return "~"
    if path.startswith(home + os.sep):
        return "~" + path[len(home) :]
    return path
