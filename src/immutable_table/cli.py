"""Command-line entry point: load a CSV file into a Table, optionally slice it, and print it.

Usage:
  immutable-table data.csv --slice 1 1 --format markdown
  cat data.csv | immutable-table - --cell -1 -1
"""

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from immutable_table import serialization
from immutable_table.config import Settings, get_settings
from immutable_table.formatting import render_csv, render_grid, render_markdown
from immutable_table.table import Table

logger = logging.getLogger(__name__)

FORMATS = ("grid", "text", "csv", "json", "markdown")


def _log_level(value: str) -> str:
    """argparse type: accept a logging level name, normalised through Settings."""
    try:
        return Settings(log_level=value).log_level
    except ValidationError as exc:
        raise argparse.ArgumentTypeError(f"unknown log level {value!r}") from exc


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the immutable-table command."""
    parser = argparse.ArgumentParser(prog="immutable-table", description=__doc__.splitlines()[0])
    parser.add_argument("path", help="CSV file to load, or '-' for stdin")
    parser.add_argument("--delimiter", default=None, help="field delimiter (default from settings)")
    parser.add_argument(
        "--slice",
        nargs="+",
        type=int,
        metavar="N",
        help="START_X START_Y [END_X END_Y]; negative values count from the far edge",
    )
    parser.add_argument("--cell", nargs=2, type=int, metavar=("X", "Y"), help="print a single cell value")
    parser.add_argument("--format", choices=FORMATS, default="grid", help="output format (default: grid)")
    parser.add_argument("--title", default=None, help="title line for markdown output")
    parser.add_argument("--log-level", type=_log_level, default=None, help="logging level (default from settings)")
    return parser


def _read_source(path: str) -> str:
    """Read CSV text from *path*, or from stdin when path is '-'."""
    if path == "-":
        return sys.stdin.read()
    with open(Path(path), "r", encoding="utf-8") as fopen:
        return fopen.read()


def _render(table: Table, fmt: str, title: str | None, delimiter: str | None) -> str:
    """Render *table* in the requested output format."""
    if fmt == "text":
        return str(table)
    if fmt == "csv":
        return render_csv(table, delimiter)
    if fmt == "json":
        return serialization.dumps(table)
    if fmt == "markdown":
        return render_markdown(table, title)
    return render_grid(table)


def main(argv: list[str] | None = None) -> int:
    """Run the command; returns the process exit code."""
    args = build_parser().parse_args(argv)
    level = args.log_level or get_settings().log_level
    logging.basicConfig(level=level, format="%(asctime)s - %(levelname)s - %(message)s")

    if args.slice is not None and len(args.slice) not in (2, 4):
        logger.error("--slice takes 2 or 4 integers, got %d", len(args.slice))
        return 2

    try:
        text = _read_source(args.path)
    except OSError as exc:
        logger.error("Cannot read %s: %s", args.path, exc)
        return 1

    try:
        table = Table.from_csv(text.rstrip("\n"), args.delimiter)
        logger.info("Loaded %dx%d table from %s", table.width, table.height, args.path)
        if args.slice is not None:
            table = table.slice(*args.slice)
            logger.info("Sliced to %dx%d", table.width, table.height)
        if args.cell is not None:
            value = table.get_cell(*args.cell)
            print("" if value is None else value)
            return 0
    except (IndexError, OverflowError, TypeError) as exc:
        logger.error("%s: %s", type(exc).__name__, exc)
        return 2

    print(_render(table, args.format, args.title, args.delimiter))
    return 0


if __name__ == "__main__":
    sys.exit(main())
