"""Logging setup for the dirtag CLI and library code."""

import json
import logging
import sys
from contextvars import ContextVar
from datetime import UTC, datetime
from typing import Any, TextIO

from .config import settings

# Running CLI command (e.g. "retag", "tags rename"), empty outside the CLI
command_var: ContextVar[str] = ContextVar("command", default="")

# Attributes every LogRecord has; anything else was passed via extra={...}
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime", "taskName"}


def _extra_fields(record: logging.LogRecord) -> dict[str, Any]:
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in _RECORD_ATTRS and not key.startswith("_")
    }


def _record_time(record: logging.LogRecord) -> datetime:
    return datetime.fromtimestamp(record.created, UTC)


class JSONFormatter(logging.Formatter):
    """
    One JSON object per line.

    Output format:
    {
        "timestamp": "2026-01-22T12:00:00.000000+00:00",
        "level": "INFO",
        "logger": "dirtag.services.directory",
        "message": "Directory added",
        "command": "add",
        "extra": {"path": "/home/me/app", "tags": ["python"]}
    }
    """

    def format(self, record: logging.LogRecord) -> str:
        data: dict[str, Any] = {
            "timestamp": _record_time(record).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        command = command_var.get()
        if command:
            data["command"] = command

        extra = _extra_fields(record)
        if extra:
            data["extra"] = extra

        if record.exc_info:
            data["exception"] = self.formatException(record.exc_info)

        return json.dumps(data, ensure_ascii=False, default=str)


class SimpleFormatter(logging.Formatter):
    """
    Single human-readable line, extra fields appended as key=value.

    2026-01-22 12:00:00 | INFO     | [add] dirtag.services.directory: Directory added path='/x'
    """

    def format(self, record: logging.LogRecord) -> str:
        timestamp = _record_time(record).strftime("%Y-%m-%d %H:%M:%S")
        command = command_var.get()
        prefix = f"[{command}] " if command else ""

        line = f"{timestamp} | {record.levelname:8} | {prefix}{record.name}: {record.getMessage()}"

        extra = _extra_fields(record)
        if extra:
            line += " " + " ".join(f"{key}={value!r}" for key, value in extra.items())

        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)

        return line


def setup_logging(
    log_level: str = "WARNING",
    log_format: str = "simple",
    stream: TextIO | None = None,
) -> None:
    """
    Configure the root logger.

    Args:
        log_level: DEBUG, INFO, WARNING, ERROR or CRITICAL
        log_format: "json" or "simple"
        stream: Destination, stderr by default so stdout stays reserved for
            command output (--json)
    """
    level = getattr(logging, log_level.upper(), logging.WARNING)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(JSONFormatter() if log_format.lower() == "json" else SimpleFormatter())

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()
    root.addHandler(handler)

    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.DATABASE_ECHO else logging.WARNING
    )


def get_logger(name: str) -> logging.Logger:
    """Return the logger for a dirtag module (pass __name__)."""
    return logging.getLogger(name)
