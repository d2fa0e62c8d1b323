"""Argument parser for the dirtag CLI."""

import argparse

from .. import __version__
from . import commands

EXAMPLES = """\
examples:
  dirtag add . --tags frontend,react
  dirtag list --query projects --table --created
  dirtag retag ~/code/api --add backend --remove old
  dirtag search --tags frontend,react
  dirtag search --tags frontend,backend --any --json
  dirtag tags rename js javascript
"""


def _add_list_options(parser: argparse.ArgumentParser) -> None:
    group = parser.add_argument_group("output")
    group.add_argument("--table", action="store_true", help="table output with headers")
    group.add_argument("--json", action="store_true", help="output JSON")
    group.add_argument("--id", action="store_true", help="show directory id")
    group.add_argument("--created", action="store_true", help="show created time")
    group.add_argument("--updated", action="store_true", help="show updated time")
    group.add_argument(
        "--relative",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="show times as '3 days ago' (default) or as timestamps",
    )


def _add_tags_option(parser: argparse.ArgumentParser, *flags: str, help_text: str) -> None:
    parser.add_argument(
        *flags,
        dest=flags[-1].lstrip("-").replace("-", "_"),
        action="append",
        default=[],
        metavar="TAG[,TAG...]",
        help=f"{help_text} (repeatable, comma-separated)",
    )


def create_parser() -> argparse.ArgumentParser:
    """Build the dirtag argument parser."""
    parser = argparse.ArgumentParser(
        prog="dirtag",
        description="Organize project directories by tagging them.",
        epilog=EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging to stderr")

    subparsers = parser.add_subparsers(dest="command", metavar="<command>")

    # add
    add_parser = subparsers.add_parser("add", help="track a directory")
    add_parser.add_argument("path", help="directory path")
    _add_tags_option(add_parser, "-t", "--tags", help_text="tags to attach")
    add_parser.add_argument("--json", action="store_true", help="output JSON")
    add_parser.set_defaults(func=commands.cmd_add)

    # list
    list_parser = subparsers.add_parser("list", aliases=["ls"], help="list tracked directories")
    list_parser.add_argument("-q", "--query", help="filter by path (case-insensitive substring)")
    _add_list_options(list_parser)
    list_parser.set_defaults(func=commands.cmd_list)

    # retag
    retag_parser = subparsers.add_parser("retag", help="add or remove tags of a directory")
    retag_parser.add_argument("path", help="directory path")
    _add_tags_option(retag_parser, "-a", "--add", help_text="tags to add")
    _add_tags_option(retag_parser, "-r", "--remove", help_text="tags to remove")
    retag_parser.add_argument("--json", action="store_true", help="output JSON")
    retag_parser.set_defaults(func=commands.cmd_retag)

    # remove
    remove_parser = subparsers.add_parser(
        "remove", aliases=["rm"], help="stop tracking a directory"
    )
    remove_parser.add_argument("path", help="directory path")
    remove_parser.set_defaults(func=commands.cmd_remove)

    # search
    search_parser = subparsers.add_parser("search", help="find directories by tags")
    _add_tags_option(search_parser, "-t", "--tags", help_text="tags to search for")
    search_parser.add_argument(
        "--any", action="store_true", help="match any tag (OR) instead of all tags (AND)"
    )
    _add_list_options(search_parser)
    search_parser.set_defaults(func=commands.cmd_search)

    # tags
    tags_parser = subparsers.add_parser("tags", help="manage tags")
    tags_sub = tags_parser.add_subparsers(dest="tags_command", metavar="<action>", required=True)

    create = tags_sub.add_parser("create", help="create a tag")
    create.add_argument("name")
    create.add_argument("-d", "--description", help="optional description")
    create.set_defaults(func=commands.cmd_tags_create)

    tags_list = tags_sub.add_parser("list", aliases=["ls"], help="list tags")
    tags_list.add_argument("-q", "--query", help="filter by name or description")
    tags_list.add_argument("--usage", action="store_true", help="show number of directories")
    tags_list.add_argument("--json", action="store_true", help="output JSON")
    tags_list.set_defaults(func=commands.cmd_tags_list)

    rename = tags_sub.add_parser("rename", help="rename a tag")
    rename.add_argument("name", help="current name")
    rename.add_argument("new_name", help="new name")
    rename.set_defaults(func=commands.cmd_tags_rename)

    describe = tags_sub.add_parser("describe", help="set or clear a tag description")
    describe.add_argument("name")
    describe.add_argument("description", nargs="?", default=None, help="omit to clear")
    describe.set_defaults(func=commands.cmd_tags_describe)

    tags_remove = tags_sub.add_parser("remove", aliases=["rm"], help="remove a tag")
    tags_remove.add_argument("name")
    tags_remove.set_defaults(func=commands.cmd_tags_remove)

    prune = tags_sub.add_parser("prune", help="remove tags no directory uses")
    prune.set_defaults(func=commands.cmd_tags_prune)

    return parser
