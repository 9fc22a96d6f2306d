from __future__ import annotations

import argparse
import logging

from rich.console import Console

from mhtmlextractor.application.services.archive_service import ArchiveService
from mhtmlextractor.cli.commands import extract_cmd, html_cmd, resources_cmd, web_cmd
from mhtmlextractor.cli.context import CLIContext
from mhtmlextractor.core.config import APP_VERSION, load_config
from mhtmlextractor.core.errors import MhtmlExtractorError
from mhtmlextractor.core.logging import configure_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mhtml-extractor",
        description="Inspect MHTML archives and extract their embedded resources",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {APP_VERSION}")
    parser.add_argument(
        "--fetch-timeout",
        type=float,
        default=None,
        help="Per-request timeout in seconds for external script downloads (default: 5)",
    )
    parser.add_argument(
        "--fetch-workers",
        type=int,
        default=None,
        help="Concurrent external script downloads (default: 1, sequential)",
    )
    parser.add_argument("-v", "--verbose", action="count", default=0)

    subparsers = parser.add_subparsers(dest="command")
    resources_cmd.register(subparsers)
    html_cmd.register(subparsers)
    extract_cmd.register(subparsers)
    web_cmd.register(subparsers)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.verbose)
    console = Console()

    handler = getattr(args, "handler", None)
    if handler is None:
        parser.print_help()
        return 2

    try:
        config = load_config(
            fetch_timeout_seconds=args.fetch_timeout,
            fetch_workers=args.fetch_workers,
        )
        ctx = CLIContext(config=config, console=console, service=ArchiveService(config))
        return handler(args, ctx)
    except MhtmlExtractorError as exc:
        logger.error(str(exc))
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
