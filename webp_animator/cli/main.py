"""Main CLI entry point for webp-animator."""

from __future__ import annotations

import argparse
import logging
import sys

from .. import __version__
from .assemble_cli import build_assemble_parser


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="webp-animator",
        description="Assemble animated WebP files from still frames",
    )
    parser.add_argument("--version", action="version", version=f"webp-animator {__version__}")
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Log every added frame",
    )
    subparsers = parser.add_subparsers(dest="command")
    build_assemble_parser(subparsers)
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if args.command is None:
        parser.print_help()
        return 0
    return args.func(args)


def cli_entry() -> None:
    sys.exit(main())
