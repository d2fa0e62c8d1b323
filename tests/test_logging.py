"""Tests for the log formatters."""

import io
import json
import logging

from dirtag.core.logging import (
    JSONFormatter,
    SimpleFormatter,
    command_var,
    get_logger,
    setup_logging,
)


def _record(msg="Directory added", **extra):
    record = logging.LogRecord(
        name="dirtag.services.directory",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_command_and_extra():
    """Test: JSON lines carry the running command and extra fields."""
    token = command_var.set("add")
    try:
        line = JSONFormatter().format(_record(path="/srv/app", tags=["web"]))
    finally:
        command_var.reset(token)

    data = json.loads(line)
    assert data["level"] == "INFO"
    assert data["logger"] == "dirtag.services.directory"
    assert data["message"] == "Directory added"
    assert data["command"] == "add"
    assert data["extra"] == {"path": "/srv/app", "tags": ["web"]}


def test_json_formatter_without_command():
    """Test: no command key outside of a CLI invocation."""
    data = json.loads(JSONFormatter().format(_record()))

    assert "command" not in data
    assert "extra" not in data


def test_simple_formatter():
    """Test: human-readable line with level, command and logger name."""
    token = command_var.set("tags rename")
    try:
        line = SimpleFormatter().format(_record("Tag renamed"))
    finally:
        command_var.reset(token)

    assert "| INFO     | [tags rename] dirtag.services.directory: Tag renamed" in line


def test_simple_formatter_appends_extra():
    """Test: extra fields follow the message as key=value."""
    line = SimpleFormatter().format(_record(path="/srv/app"))

    assert line.endswith("Directory added path='/srv/app'")


def test_setup_logging_stream():
    """Test: records at or above the level reach the configured stream."""
    stream = io.StringIO()
    setup_logging("INFO", "json", stream=stream)
    try:
        get_logger("dirtag.test").debug("hidden")
        get_logger("dirtag.test").info("Tag created", extra={"tag": "web"})
    finally:
        logging.getLogger().handlers.clear()
        logging.getLogger().setLevel(logging.WARNING)

    (line,) = stream.getvalue().splitlines()
    data = json.loads(line)
    assert data["message"] == "Tag created"
    assert data["extra"] == {"tag": "web"}
