"""Rendering of core records: plain lines, rich tables or JSON."""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime

from pydantic import BaseModel, TypeAdapter
from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from ..core.errors import DirtagError
from ..core.paths import replace_homedir
from ..schemas import DirectoryWithTags, ErrorBody, ErrorDetail, TagResponse, TagWithUsage
from ..utils import relative_time

console = Console()
err_console = Console(stderr=True)


@dataclass
class ListOptions:
    """Display switches shared by `list` and `search`."""

    table: bool = False
    json: bool = False
    id: bool = False
    created: bool = False
    updated: bool = False
    relative: bool = True


def raw(text: str) -> None:
    """Print text as-is: no markup, no highlighting, no wrapping."""
    console.print(text, markup=False, highlight=False, soft_wrap=True)


def print_json(data: BaseModel | Sequence[BaseModel]) -> None:
    """Print a record or a list of records as indented JSON."""
    if isinstance(data, BaseModel):
        raw(data.model_dump_json(indent=2))
    else:
        adapter = TypeAdapter(list[type(data[0])]) if data else TypeAdapter(list)
        raw(adapter.dump_json(list(data), indent=2).decode())


def success(message: str) -> None:
    console.print(Text("✓ ", style="green") + Text(message), soft_wrap=True)


def info(message: str) -> None:
    console.print(Text("ℹ ", style="blue") + Text(message), soft_wrap=True)


def error(err: DirtagError, as_json: bool = False) -> None:
    """Print a single-line diagnostic (or an ErrorBody in JSON mode) to stderr."""
    if as_json:
        body = ErrorBody(
            code=err.code,
            message=err.message,
            details=[ErrorDetail(**d) for d in err.details] if err.details else None,
        )
        err_console.print(body.model_dump_json(), markup=False, highlight=False, soft_wrap=True)
        return
    err_console.print(Text("✗ ", style="red") + Text(err.message), soft_wrap=True)


def format_time(moment: datetime, relative: bool) -> str:
    if relative:
        return relative_time(moment)
    return moment.isoformat(sep=" ", timespec="seconds")


def _tag_names(tags: Sequence[TagResponse]) -> str:
    return ", ".join(tag.name for tag in tags)


def render_directories(directories: Sequence[DirectoryWithTags], options: ListOptions) -> None:
    """
    Print directories in the requested format.

    Plain:
        ~/projects/app [frontend, react]
        ~/projects/api [backend]

    Table (--table adds headers): one column per enabled field.
    """
    if options.json:
        print_json(directories)
        return

    if not directories:
        console.print("[yellow]No directories found[/yellow]")
        return

    if not options.table and not (options.id or options.created or options.updated):
        for directory in directories:
            tags = _tag_names(directory.tags) or "no tags"
            raw(f"{replace_homedir(directory.path)} [{tags}]")
        return

    table = Table(show_header=options.table, box=box.SIMPLE if options.table else None)
    if options.id:
        table.add_column("Id", style="yellow", justify="right")
    table.add_column("Path", style="green", no_wrap=True)
    table.add_column("Tags", style="cyan")
    if options.created:
        table.add_column("Created", style="dim")
    if options.updated:
        table.add_column("Updated", style="dim")

    for directory in directories:
        row = []
        if options.id:
            row.append(str(directory.id))
        row.append(replace_homedir(directory.path))
        row.append(_tag_names(directory.tags) or "no tags")
        if options.created:
            row.append(format_time(directory.created_at, options.relative))
        if options.updated:
            row.append(format_time(directory.updated_at, options.relative))
        table.add_row(*row)

    console.print(table)


def render_tags(tags: Sequence[TagResponse], as_json: bool = False) -> None:
    """
    Print tags, one per line with optional description and usage count.

    Example:
        backend - Server side code (4)
        frontend (7)
    """
    if as_json:
        print_json(tags)
        return

    if not tags:
        console.print("[yellow]No tags found[/yellow]")
        return

    for tag in tags:
        line = Text(tag.name, style="cyan")
        if tag.description:
            line.append(f" - {tag.description}", style="dim")
        if isinstance(tag, TagWithUsage):
            line.append(f" ({tag.usage_count})", style="dim")
        console.print(line, soft_wrap=True)
