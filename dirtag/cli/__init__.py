"""
dirtag command line.

Usage:
    dirtag add PATH --tags a,b
    dirtag list
    dirtag retag PATH --add a --remove b
    dirtag remove PATH
    dirtag search --tags a,b [--any]
    dirtag tags create|list|rename|describe|remove|prune
"""

import asyncio
import sys

from ..core.config import settings
from ..core.database import dispose_engine, init_db
from ..core.errors import DirtagError
from ..core.logging import command_var, get_logger, setup_logging
from . import output
from .parser import create_parser

logger = get_logger(__name__)


async def _run(args) -> int:
    """Create the schema if needed, run the command, release the engine."""
    try:
        await init_db()
        return await args.func(args)
    finally:
        await dispose_engine()


def _command_name(args) -> str:
    if args.command == "tags":
        return f"tags {args.tags_command}"
    return args.command


def main(argv: list[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments. Uses sys.argv if None.

    Returns:
        Exit code: 0 on success, DirtagError.exit_code for known failures,
        1 for unexpected errors.
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    setup_logging(
        log_level="DEBUG" if args.verbose else settings.LOG_LEVEL,
        log_format=settings.LOG_FORMAT,
    )
    token = command_var.set(_command_name(args))

    try:
        return asyncio.run(_run(args))
    except DirtagError as exc:
        logger.debug("Command failed", extra={"code": exc.code, "error": exc.message})
        output.error(exc, as_json=getattr(args, "json", False))
        return exc.exit_code
    except KeyboardInterrupt:
        return 130
    except Exception as exc:
        logger.error(f"Internal error: {type(exc).__name__}: {exc}", exc_info=True)
        output.err_console.print(
            f"✗ Internal error: {exc}", style="red", markup=False, highlight=False
        )
        return 1
    finally:
        command_var.reset(token)


def run() -> None:
    """Console script entry point."""
    sys.exit(main())


__all__ = ["main", "run", "create_parser"]
