from __future__ import annotations

import argparse
from pathlib import Path

from mhtmlextractor.cli.context import CLIContext


def register(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    parser = subparsers.add_parser("html", help="Print the primary HTML document of an MHTML archive")
    parser.add_argument("path", type=Path, help="MHTML file (.mhtml/.mht)")
    parser.set_defaults(handler=run)


def run(args: argparse.Namespace, ctx: CLIContext) -> int:
    result = ctx.service.parse(args.path)
    html = ctx.service.get_html_content(result)
    if not html:
        ctx.console.print("[yellow][No HTML content found][/yellow]")
        return 0
    ctx.console.print(html, markup=False, highlight=False, soft_wrap=True)
    return 0
