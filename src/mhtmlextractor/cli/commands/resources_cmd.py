from __future__ import annotations

import argparse
from pathlib import Path

from rich.markup import escape
from rich.table import Table

from mhtmlextractor.cli.context import CLIContext
from mhtmlextractor.core.files import format_size
from mhtmlextractor.domain.models.resource import ParseResult


def register(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    parser = subparsers.add_parser("resources", help="List the resources recovered from an MHTML archive")
    parser.add_argument("path", type=Path, help="MHTML file (.mhtml/.mht)")
    parser.add_argument(
        "--fetch-external",
        action="store_true",
        help="Also download scripts referenced by <script src=\"http(s)://...\">",
    )
    parser.set_defaults(handler=run)


def build_resource_table(result: ParseResult, title: str | None = None) -> Table:
    table = Table(title=title or f"Resources ({len(result)})")
    table.add_column("#", justify="right")
    table.add_column("Type")
    table.add_column("File Name", overflow="fold")
    table.add_column("Size", justify="right")
    table.add_column("Source")

    for index, resource in enumerate(result.resources):
        table.add_row(
            str(index),
            escape(resource.kind),
            escape(resource.filename),
            format_size(resource.size),
            resource.origin,
        )
    return table


def run(args: argparse.Namespace, ctx: CLIContext) -> int:
    result = ctx.service.parse(args.path, fetch_external=args.fetch_external)

    ctx.console.print(build_resource_table(result))
    counts = result.counts_by_origin()
    summary = ", ".join(f"{count} {origin}" for origin, count in counts.items())
    ctx.console.print(f"[green]Loaded[/green] {escape(str(result.source_path))} ({summary})")
    if result.skipped_parts:
        ctx.console.print(f"[yellow]Skipped {result.skipped_parts} unreadable MIME part(s)[/yellow]")
    return 0
