"""Tests for path canonicalization and the state directory lookup."""

import os
from pathlib import Path

import pytest

from dirtag.core.errors import InvalidPathError
from dirtag.core.paths import canonical, get_state_dir, get_state_path, replace_homedir


def test_canonical_absolute(tmp_path):
    """Test: an existing directory comes back absolute and resolved."""
    target = tmp_path / "project"
    target.mkdir()

    assert canonical(target) == str(target.resolve())
    assert canonical(str(target / ".." / "project")) == str(target.resolve())


def test_canonical_relative(tmp_path, monkeypatch):
    """Test: relative paths are taken from the working directory."""
    (tmp_path / "sub").mkdir()
    monkeypatch.chdir(tmp_path)

    assert canonical("sub") == str((tmp_path / "sub").resolve())
    assert canonical(".") == str(tmp_path.resolve())


def test_canonical_follows_symlinks(tmp_path):
    """Test: a symlink resolves to its target."""
    target = tmp_path / "real"
    target.mkdir()
    link = tmp_path / "alias"
    os.symlink(target, link)

    assert canonical(link) == str(target.resolve())


def test_canonical_expands_home(tmp_path, monkeypatch):
    """Test: "~" is expanded."""
    monkeypatch.setenv("HOME", str(tmp_path))
    (tmp_path / "code").mkdir()

    assert canonical("~/code") == str((tmp_path / "code").resolve())


def test_canonical_missing(tmp_path):
    """Test: missing path -> InvalidPathError with exit code 6."""
    with pytest.raises(InvalidPathError, match="does not exist") as exc_info:
        canonical(tmp_path / "missing")

    assert exc_info.value.exit_code == 6


def test_canonical_not_a_directory(tmp_path):
    """Test: a regular file is rejected."""
    file_path = tmp_path / "notes.txt"
    file_path.write_text("hello")

    with pytest.raises(InvalidPathError, match="is not a directory"):
        canonical(file_path)


def test_get_state_dir_override(tmp_path):
    """Test: explicit override wins and is created."""
    state = get_state_dir(str(tmp_path / "custom" / "state"))

    assert state == (tmp_path / "custom" / "state").resolve()
    assert state.is_dir()


def test_get_state_dir_xdg(tmp_path, monkeypatch):
    """Test: $XDG_STATE_HOME/dirtag is used when set."""
    monkeypatch.setenv("XDG_STATE_HOME", str(tmp_path / "xdg"))

    assert get_state_dir() == (tmp_path / "xdg" / "dirtag").resolve()


def test_get_state_dir_default(tmp_path, monkeypatch):
    """Test: falls back to ~/.local/state/dirtag."""
    monkeypatch.delenv("XDG_STATE_HOME", raising=False)
    monkeypatch.setenv("HOME", str(tmp_path))

    assert get_state_dir() == (tmp_path / ".local" / "state" / "dirtag").resolve()


def test_get_state_path(tmp_path):
    """Test: database file lives inside the state directory."""
    path = get_state_path("tag.db", str(tmp_path))

    assert path == tmp_path.resolve() / "tag.db"


def test_replace_homedir(monkeypatch):
    """Test: home prefix is shown as "~", other paths are untouched."""
    monkeypatch.setattr(Path, "home", classmethod(lambda cls: Path("/home/me")))

    assert replace_homedir("/home/me") == "~"
    assert replace_homedir("/home/me/code/app") == "~/code/app"
    assert replace_homedir("/home/meow") == "/home/meow"
    assert replace_homedir("/srv/data") == "/srv/data"
