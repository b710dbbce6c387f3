"""Command-line entry point: convert a MySQL dump into TSV files."""

from __future__ import annotations

import argparse
import gzip
import io
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, Iterator

from sqldump_tsv.engine import ConversionEngine, ConversionSummary
from sqldump_tsv.errors import ConversionError
from sqldump_tsv.progress import ProgressReader
from sqldump_tsv.source import StatementSource

DEFAULT_OUTPUT_DIR = Path("tables")


@contextmanager
def open_dump(path: Path, show_progress: bool = False) -> Iterator[BinaryIO]:
    """Open a dump file for reading, decompressing .gz files.

    With show_progress, progress is measured on the bytes read from disk, so
    it stays accurate for compressed dumps.
    """
    with open(path, "rb") as raw:
        stream: BinaryIO = raw
        if show_progress:
            size = path.stat().st_size
            stream = io.BufferedReader(ProgressReader(raw, size))  # type: ignore[arg-type]
        if path.suffix == ".gz":
            stream = gzip.GzipFile(fileobj=stream, mode="rb")  # type: ignore[assignment]
        yield stream


def print_summary(summary: ConversionSummary) -> None:
    """Print a per-table row count."""
    print(f"Output: {summary.output_dir}")
    print("-" * 40)
    for table, rows in summary.tables.items():
        print(f"  {table:<28} {rows:>9} rows")
    print("-" * 40)
    print(
        f"{len(summary.tables)} tables, {summary.rows} rows, "
        f"{summary.ignored} statements ignored"
    )


def run(dump: Path, output_dir: Path, show_progress: bool = True) -> ConversionSummary:
    """Convert a dump file into TSV files under output_dir."""
    try:
        with open_dump(dump, show_progress) as stream:
            return ConversionEngine(output_dir).run(StatementSource(stream))
    finally:
        if show_progress:
            # Move past the last progress line
            print()


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Convert a MySQL dump into one tab-separated file per table"
    )
    parser.add_argument(
        "dump",
        type=Path,
        help="Path to the SQL dump (.sql or .sql.gz)",
    )
    parser.add_argument(
        "-o", "--output-dir",
        type=Path,
        default=DEFAULT_OUTPUT_DIR,
        help=f"Directory for the .tsv files (default: {DEFAULT_OUTPUT_DIR})",
    )
    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Do not print progress while reading the dump",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Print the number of rows written per table",
    )

    args = parser.parse_args(argv)

    if not args.dump.is_file():
        print(f"Error: Dump file not found: {args.dump}", file=sys.stderr)
        return 1

    try:
        summary = run(args.dump, args.output_dir, show_progress=not args.quiet)
    except (ConversionError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.verbose:
        print_summary(summary)

    return 0


if __name__ == "__main__":
    sys.exit(main())
