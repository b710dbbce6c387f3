"""Conversion engine: drives a statement stream into per-table TSV files."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Iterator

from sqldump_tsv.errors import DumpSyntaxError
from sqldump_tsv.render import render_header, render_row
from sqldump_tsv.sinks import DEFAULT_BUFFER_SIZE, FILE_SUFFIX, SinkRegistry
from sqldump_tsv.statements import CreateTable, Insert, Statement


@dataclass
class ConversionSummary:
    """What a conversion run produced."""

    output_dir: Path
    statements: int = 0
    ignored: int = 0
    tables: dict[str, int] = field(default_factory=dict)  # table name -> rows written

    @property
    def rows(self) -> int:
        """Total number of data rows written."""
        return sum(self.tables.values())

    def path_for(self, table: str) -> Path:
        """Return the output file of a converted table."""
        return self.output_dir / f"{table}{FILE_SUFFIX}"


class ConversionEngine:
    """Writes one tab-separated file per table from a stream of statements.

    Statements are pulled one at a time, so memory use depends on the number
    of tables rather than the size of the dump. Every run owns a fresh
    SinkRegistry; nothing is shared between runs.
    """

    def __init__(
        self,
        output_dir: Path,
        buffer_size: int = DEFAULT_BUFFER_SIZE,
        encoding: str = "utf-8",
    ) -> None:
        self.output_dir = Path(output_dir)
        self.buffer_size = buffer_size
        self.encoding = encoding

    def run(self, statements: Iterable[Statement]) -> ConversionSummary:
        """Consume statements until exhausted, writing table files.

        Any error ends the run. Open files are flushed and closed either
        way, and whatever was written before the error stays on disk.
        """
        summary = ConversionSummary(output_dir=self.output_dir)

        with SinkRegistry(self.output_dir, self.buffer_size, self.encoding) as sinks:
            for statement in _pull(statements):
                summary.statements += 1
                if isinstance(statement, CreateTable):
                    self._create_table(statement, sinks, summary)
                elif isinstance(statement, Insert):
                    self._insert(statement, sinks, summary)
                else:
                    summary.ignored += 1

        return summary

    def _create_table(
        self, statement: CreateTable, sinks: SinkRegistry, summary: ConversionSummary
    ) -> None:
        sink = sinks.open(statement.name)
        sink.write(render_header(statement.columns))
        # A repeated CREATE TABLE restarts the table
        summary.tables.pop(statement.name, None)
        summary.tables[statement.name] = 0

    def _insert(
        self, statement: Insert, sinks: SinkRegistry, summary: ConversionSummary
    ) -> None:
        sink = sinks.get(statement.table_name)
        for row in statement.rows:
            sink.write(render_row(row))
        summary.tables[statement.table_name] += len(statement.rows)


def _pull(statements: Iterable[Statement]) -> Iterator[Statement]:
    """Iterate statements, reporting a source's SyntaxError as DumpSyntaxError."""
    iterator = iter(statements)
    while True:
        try:
            statement = next(iterator)
        except StopIteration:
            return
        except SyntaxError as e:
            raise DumpSyntaxError(e.msg or str(e)) from e
        yield statement


def convert(
    statements: Iterable[Statement],
    output_dir: Path,
    buffer_size: int = DEFAULT_BUFFER_SIZE,
) -> ConversionSummary:
    """Convert a statement stream into TSV files under output_dir."""
    return ConversionEngine(output_dir, buffer_size=buffer_size).run(statements)
