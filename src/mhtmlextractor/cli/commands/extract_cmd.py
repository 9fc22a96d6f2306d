from __future__ import annotations

import argparse
from pathlib import Path

from rich.markup import escape
from rich.table import Table

from mhtmlextractor.cli.context import CLIContext


def register(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    parser = subparsers.add_parser("extract", help="Write selected resources of an MHTML archive to a directory")
    parser.add_argument("path", type=Path, help="MHTML file (.mhtml/.mht)")
    parser.add_argument(
        "--output-dir",
        type=Path,
        help="Destination directory (default: a directory named after the archive, next to it)",
    )
    parser.add_argument(
        "--select",
        type=int,
        nargs="+",
        metavar="INDEX",
        help="Resource indices as listed by 'resources' (default: all)",
    )
    parser.add_argument(
        "--fetch-external",
        action="store_true",
        help="Also download scripts referenced by <script src=\"http(s)://...\">",
    )
    parser.set_defaults(handler=run)


def run(args: argparse.Namespace, ctx: CLIContext) -> int:
    result = ctx.service.parse(args.path, fetch_external=args.fetch_external)
    output_dir = args.output_dir or ctx.service.default_output_dir(args.path)
    selected = args.select if args.select is not None else range(len(result))

    paths = ctx.service.extract_resources(result, output_dir, selected)
    if not paths:
        ctx.console.print("[yellow]No resources selected for extraction[/yellow]")
        return 0

    table = Table(title=f"Extracted {len(paths)} resources to {escape(str(output_dir))}")
    table.add_column("Path", overflow="fold")
    for path in paths:
        table.add_row(escape(str(path)))
    ctx.console.print(table)
    return 0
