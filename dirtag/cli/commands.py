"""
CLI command handlers.

Each handler runs one unit of work in its own session (committed when the
block exits) and prints only after the commit succeeded.
"""

import argparse

from ..core.database import session_scope
from ..core.errors import NoChangesError
from ..schemas import DirectoryWithTags, RetagResponse, TagResponse, TagWithUsage
from ..services import DirectoryService, SearchService, TagService
from . import output
from .output import ListOptions


def split_tags(values: list[str] | None) -> list[str]:
    """
    Flatten repeatable, comma-separated tag options.

    Example:
        split_tags(["frontend,react", "web"])  # ["frontend", "react", "web"]
    """
    tags: list[str] = []
    for value in values or []:
        tags.extend(part.strip() for part in value.split(",") if part.strip())
    return tags


def _list_options(args: argparse.Namespace) -> ListOptions:
    return ListOptions(
        table=args.table,
        json=args.json,
        id=args.id,
        created=args.created,
        updated=args.updated,
        relative=args.relative,
    )


async def cmd_add(args: argparse.Namespace) -> int:
    tags = split_tags(args.tags)
    async with session_scope() as db:
        directory = await DirectoryService(db).add_directory(args.path, tags)
        record = DirectoryWithTags.model_validate(directory)

    if args.json:
        output.print_json(record)
    elif record.tags:
        output.success(f"Added {record.path} with tags: {', '.join(t.name for t in record.tags)}")
    else:
        output.success(f"Added {record.path}")
    return 0


async def cmd_list(args: argparse.Namespace) -> int:
    async with session_scope() as db:
        directories = await DirectoryService(db).list_directories(args.query)
        records = [DirectoryWithTags.model_validate(d) for d in directories]

    output.render_directories(records, _list_options(args))
    return 0


async def cmd_retag(args: argparse.Namespace) -> int:
    try:
        async with session_scope() as db:
            result = await DirectoryService(db).retag_directory(
                args.path, add=split_tags(args.add), remove=split_tags(args.remove)
            )
    except NoChangesError as exc:
        raise NoChangesError(f"{exc.message}. Use --add or --remove.") from exc

    if args.json:
        output.print_json(RetagResponse.model_validate(result))
    else:
        output.success(f"Retagged {result.path}: {', '.join(result.changes)}")
    return 0


async def cmd_remove(args: argparse.Namespace) -> int:
    async with session_scope() as db:
        path = await DirectoryService(db).remove_directory(args.path)

    output.success(f"Removed {path}")
    return 0


async def cmd_search(args: argparse.Namespace) -> int:
    async with session_scope() as db:
        directories = await SearchService(db).search(split_tags(args.tags), match_any=args.any)
        records = [DirectoryWithTags.model_validate(d) for d in directories]

    output.render_directories(records, _list_options(args))
    return 0


async def cmd_tags_create(args: argparse.Namespace) -> int:
    async with session_scope() as db:
        tag = await TagService(db).create_tag(args.name, args.description)
        name = tag.name

    output.success(f"Created tag '{name}'")
    return 0


async def cmd_tags_list(args: argparse.Namespace) -> int:
    async with session_scope() as db:
        service = TagService(db)
        if args.usage:
            usage = await service.list_tags_with_usage()
            if args.query:
                query = args.query.casefold()
                usage = [
                    (tag, count)
                    for tag, count in usage
                    if query in tag.name.casefold() or query in (tag.description or "").casefold()
                ]
            records: list[TagResponse] = [
                TagWithUsage(**TagResponse.model_validate(tag).model_dump(), usage_count=count)
                for tag, count in usage
            ]
        else:
            records = [TagResponse.model_validate(t) for t in await service.list_tags(args.query)]

    output.render_tags(records, as_json=args.json)
    return 0


async def cmd_tags_rename(args: argparse.Namespace) -> int:
    async with session_scope() as db:
        await TagService(db).rename_tag(args.name, args.new_name)

    output.success(f"Renamed tag '{args.name}' to '{args.new_name}'")
    return 0


async def cmd_tags_describe(args: argparse.Namespace) -> int:
    async with session_scope() as db:
        tag = await TagService(db).describe_tag(args.name, args.description)
        description = tag.description

    if description:
        output.success(f"Updated description of '{args.name}'")
    else:
        output.success(f"Cleared description of '{args.name}'")
    return 0


async def cmd_tags_remove(args: argparse.Namespace) -> int:
    async with session_scope() as db:
        await TagService(db).remove_tag(args.name)

    output.success(f"Removed tag '{args.name}'")
    return 0


async def cmd_tags_prune(args: argparse.Namespace) -> int:
    async with session_scope() as db:
        removed = await TagService(db).prune_unused_tags()

    if removed:
        output.success(f"Removed {len(removed)} unused tag(s): {', '.join(removed)}")
    else:
        output.info("No unused tags")
    return 0
