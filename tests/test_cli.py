"""
End-to-end tests for the command line.

Every test runs main([...]) against a fresh database file (cli_state
fixture) and checks the exit code and stdout / stderr.
"""

import json

import pytest

from dirtag import __version__
from dirtag.cli import main, output
from dirtag.cli.commands import split_tags


def run_json(capsys, *argv):
    """Run a command with --json and parse its stdout."""
    capsys.readouterr()
    assert main([*argv, "--json"]) == 0
    return json.loads(capsys.readouterr().out)


def test_split_tags():
    """Test: repeatable, comma-separated values are flattened."""
    values = ["frontend,react", " web ", "a,,b"]
    assert split_tags(values) == ["frontend", "react", "web", "a", "b"]
    assert split_tags(None) == []


def test_no_command_prints_help(capsys):
    """Test: bare invocation shows usage and exits 0."""
    assert main([]) == 0
    assert "usage: dirtag" in capsys.readouterr().out


def test_version(capsys):
    """Test: --version prints the package version."""
    with pytest.raises(SystemExit) as exc_info:
        main(["--version"])

    assert exc_info.value.code == 0
    assert __version__ in capsys.readouterr().out


def test_add_and_list(cli_state, make_dir, capsys):
    """Test: add prints a confirmation, list shows path and tags."""
    path = make_dir("app")

    assert main(["add", path, "--tags", "frontend,react"]) == 0
    assert f"Added {path} with tags: frontend, react" in capsys.readouterr().out

    assert main(["list"]) == 0
    assert f"{path} [frontend, react]" in capsys.readouterr().out


def test_database_created_in_state_dir(cli_state, make_dir):
    """Test: the database file lands in the configured state directory."""
    assert main(["add", make_dir("app")]) == 0
    assert (cli_state / "tag.db").is_file()


def test_list_empty(cli_state, capsys):
    """Test: empty database prints a friendly message."""
    assert main(["list"]) == 0
    assert "No directories found" in capsys.readouterr().out


def test_list_json(cli_state, make_dir, capsys):
    """Test: --json emits records with nested tags, ordered by path."""
    a, b = make_dir("a"), make_dir("b")
    main(["add", b, "-t", "web"])
    main(["add", a])

    records = run_json(capsys, "list")

    assert [r["path"] for r in records] == [a, b]
    assert records[0]["tags"] == []
    assert [t["name"] for t in records[1]["tags"]] == ["web"]
    assert {"id", "created_at", "updated_at"} <= set(records[0])


def test_list_table(cli_state, make_dir, capsys, monkeypatch):
    """Test: --table with --id renders headers and the id column."""
    monkeypatch.setattr(output.console, "width", 300)
    main(["add", make_dir("a"), "-t", "web"])
    capsys.readouterr()

    assert main(["list", "--table", "--id", "--created"]) == 0
    out = capsys.readouterr().out
    assert "Path" in out
    assert "Tags" in out
    assert "just now" in out


def test_add_twice_conflict(cli_state, make_dir, capsys):
    """Test: adding a tracked directory exits 4."""
    path = make_dir("app")
    main(["add", path])
    capsys.readouterr()

    assert main(["add", path, "-t", "x"]) == 4
    assert "already exists" in capsys.readouterr().err


def test_add_invalid_path(cli_state, tmp_path, capsys):
    """Test: missing directory exits 6."""
    assert main(["add", str(tmp_path / "missing")]) == 6
    assert "does not exist" in capsys.readouterr().err


def test_error_as_json(cli_state, tmp_path, capsys):
    """Test: --json turns the diagnostic into an error body."""
    assert main(["add", str(tmp_path / "missing"), "--json"]) == 6

    body = json.loads(capsys.readouterr().err)
    assert body["code"] == "INVALID_PATH"
    assert body["details"][0]["field"] == "path"


def test_retag(cli_state, make_dir, capsys):
    """Test: retag reports removed and added tags."""
    path = make_dir("app")
    main(["add", path, "-t", "old,keep"])
    capsys.readouterr()

    assert main(["retag", path, "--add", "new", "--remove", "old"]) == 0
    assert f"Retagged {path}: removed 'old', added 'new'" in capsys.readouterr().out

    result = run_json(capsys, "retag", path, "-a", "extra")
    assert result == {
        "path": path,
        "added": ["extra"],
        "removed": [],
        "changes": ["added 'extra'"],
    }


def test_retag_without_changes(cli_state, make_dir, capsys):
    """Test: retag with nothing to do exits 5."""
    path = make_dir("app")
    main(["add", path, "-t", "x"])

    assert main(["retag", path]) == 5
    assert main(["retag", path, "--add", "x"]) == 5
    assert "No changes specified. Use --add or --remove." in capsys.readouterr().err


def test_retag_untracked(cli_state, make_dir):
    """Test: retag of an untracked directory exits 3."""
    assert main(["retag", make_dir("app"), "--add", "x"]) == 3


def test_remove(cli_state, make_dir, capsys):
    """Test: remove untracks, a second remove exits 3."""
    path = make_dir("app")
    main(["add", path, "-t", "x"])
    capsys.readouterr()

    assert main(["rm", path]) == 0
    assert f"Removed {path}" in capsys.readouterr().out
    assert main(["remove", path]) == 3

    tags = run_json(capsys, "tags", "list")
    assert [t["name"] for t in tags] == ["x"]


def test_search(cli_state, make_dir, capsys):
    """Test: AND and OR search from the command line."""
    x, y, z = make_dir("x"), make_dir("y"), make_dir("z")
    main(["add", x, "-t", "frontend,react"])
    main(["add", y, "-t", "backend"])
    main(["add", z, "-t", "frontend"])

    found = run_json(capsys, "search", "-t", "frontend", "-t", "react")
    assert [r["path"] for r in found] == [x]
    assert [t["name"] for t in found[0]["tags"]] == ["frontend", "react"]

    found = run_json(capsys, "search", "--tags", "frontend,backend", "--any")
    assert [r["path"] for r in found] == [x, y, z]

    assert run_json(capsys, "search", "--tags", "nope") == []


def test_search_requires_tags(cli_state, capsys):
    """Test: search without tags exits 5."""
    assert main(["search"]) == 5
    assert "At least one tag" in capsys.readouterr().err


def test_tags_lifecycle(cli_state, make_dir, capsys):
    """Test: create, describe, rename and remove a tag."""
    path = make_dir("app")

    assert main(["tags", "create", "js", "-d", "JavaScript"]) == 0
    assert "Created tag 'js'" in capsys.readouterr().out
    assert main(["tags", "create", "js"]) == 4

    main(["add", path, "-t", "js"])
    assert main(["tags", "rename", "js", "javascript"]) == 0
    assert "Renamed tag 'js' to 'javascript'" in capsys.readouterr().out

    assert main(["tags", "describe", "javascript", "Scripts"]) == 0
    tags = run_json(capsys, "tags", "ls", "--usage")
    assert tags == [
        {
            "id": tags[0]["id"],
            "name": "javascript",
            "description": "Scripts",
            "created_at": tags[0]["created_at"],
            "updated_at": tags[0]["updated_at"],
            "usage_count": 1,
        }
    ]

    assert main(["tags", "rm", "javascript"]) == 0
    assert main(["tags", "remove", "javascript"]) == 3

    records = run_json(capsys, "list")
    assert records[0]["tags"] == []


def test_tags_list_plain(cli_state, make_dir, capsys):
    """Test: plain tag listing with description and usage count."""
    main(["add", make_dir("a"), "-t", "web"])
    main(["tags", "create", "api", "-d", "REST endpoints"])
    capsys.readouterr()

    assert main(["tags", "list", "--usage"]) == 0
    out = capsys.readouterr().out
    assert "api - REST endpoints (0)" in out
    assert "web (1)" in out

    assert main(["tags", "list", "-q", "rest"]) == 0
    out = capsys.readouterr().out
    assert "api" in out
    assert "web" not in out


def test_tags_prune(cli_state, make_dir, capsys):
    """Test: prune removes only unused tags."""
    main(["add", make_dir("a"), "-t", "used"])
    main(["tags", "create", "orphan"])
    capsys.readouterr()

    assert main(["tags", "prune"]) == 0
    assert "orphan" in capsys.readouterr().out

    assert main(["tags", "prune"]) == 0
    assert "No unused tags" in capsys.readouterr().out


def test_empty_tag_name(cli_state, capsys):
    """Test: a blank tag name exits 5."""
    assert main(["tags", "create", "  "]) == 5
    assert "cannot be empty" in capsys.readouterr().err
