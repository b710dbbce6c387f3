"""Text rendering of INSERT values for tab-separated output."""

from __future__ import annotations

import re
from typing import Iterable

from sqldump_tsv.errors import ContractViolation
from sqldump_tsv.parsing.sql_parser import expression_text
from sqldump_tsv.statements import (
    NegativeNumberLiteral,
    NullLiteral,
    NumberLiteral,
    QuotedStringLiteral,
    Value,
)

FIELD_SEPARATOR = "\t"
LINE_TERMINATOR = "\n"
NULL_TEXT = "null"

_ESCAPES = str.maketrans({"\t": "\\t", "\n": "\\n", "\r": "\\r"})
_UNESCAPES = {"\\t": "\t", "\\n": "\n", "\\r": "\r"}
_ESCAPE_SEQUENCE = re.compile(r"\\[tnr]")


def escape(text: str) -> str:
    """Replace tab, line feed and carriage return with backslash escapes."""
    return text.translate(_ESCAPES)


def unescape(text: str) -> str:
    """Reverse escape().

    Only exact for text that did not already contain the two-character
    sequences \\t, \\n or \\r before escaping.
    """
    return _ESCAPE_SEQUENCE.sub(lambda m: _UNESCAPES[m.group()], text)


def render_value(value: Value) -> str:
    """Render one INSERT value as an escaped, tab-terminated field."""
    if isinstance(value, NumberLiteral):
        content = escape(value.text)
    elif isinstance(value, NegativeNumberLiteral):
        content = escape("-") + escape(value.text)
    elif isinstance(value, QuotedStringLiteral):
        content = escape(value.text)
    elif isinstance(value, NullLiteral):
        content = escape(NULL_TEXT)
    else:
        raise ContractViolation(f"Cannot render value {_describe(value)}")
    return content + FIELD_SEPARATOR


def render_row(row: Iterable[Value]) -> str:
    """Render a row of values as one output line."""
    return "".join(render_value(value) for value in row) + LINE_TERMINATOR


def render_header(columns: Iterable[str]) -> str:
    """Render the column-name header line."""
    return "".join(f"{name}{FIELD_SEPARATOR}" for name in columns) + LINE_TERMINATOR


def _describe(value: object) -> str:
    kind = getattr(value, "kind", None)
    if kind is not None:
        return f"{expression_text(value)} ({kind})"  # type: ignore[arg-type]
    return repr(value)
