"""sqldump-tsv - Convert MySQL dumps into tab-separated table files."""

from sqldump_tsv.engine import ConversionEngine, ConversionSummary, convert
from sqldump_tsv.errors import (
    ContractViolation,
    ConversionError,
    DumpSyntaxError,
    UnsafeTableNameError,
)
from sqldump_tsv.parsing import SqlParser
from sqldump_tsv.progress import ProgressReader
from sqldump_tsv.render import escape, render_header, render_row, render_value, unescape
from sqldump_tsv.sinks import SinkRegistry
from sqldump_tsv.source import StatementSource, StatementSplitter, split_statements
from sqldump_tsv.statements import (
    CreateTable,
    Insert,
    Literal,
    NegativeNumberLiteral,
    NullLiteral,
    NumberLiteral,
    OtherStatement,
    QuotedStringLiteral,
    Statement,
    UnsupportedExpression,
    Value,
)

__all__ = [
    # Main API
    "ConversionEngine",
    "ConversionSummary",
    "convert",
    "StatementSource",
    # Parsing
    "SqlParser",
    "StatementSplitter",
    "split_statements",
    # Statements and values
    "Statement",
    "CreateTable",
    "Insert",
    "OtherStatement",
    "Literal",
    "Value",
    "NumberLiteral",
    "NegativeNumberLiteral",
    "QuotedStringLiteral",
    "NullLiteral",
    "UnsupportedExpression",
    # Output
    "SinkRegistry",
    "escape",
    "unescape",
    "render_value",
    "render_row",
    "render_header",
    "ProgressReader",
    # Errors
    "ConversionError",
    "DumpSyntaxError",
    "UnsafeTableNameError",
    "ContractViolation",
]

__version__ = "0.1.0"
