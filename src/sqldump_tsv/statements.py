"""Statement and value types produced by the SQL parser."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class NumberLiteral:
    """An unsigned numeric literal, kept as its original digit text."""

    text: str


@dataclass(frozen=True)
class NegativeNumberLiteral:
    """A unary minus applied to a numeric literal."""

    text: str  # Digits without the sign


@dataclass(frozen=True)
class QuotedStringLiteral:
    """A quoted string with quotes stripped and SQL escapes decoded."""

    text: str


@dataclass(frozen=True)
class NullLiteral:
    """The NULL keyword."""


Literal = NumberLiteral | NegativeNumberLiteral | QuotedStringLiteral | NullLiteral


@dataclass(frozen=True)
class UnsupportedExpression:
    """A value expression that parses but has no text rendering.

    kind names the expression form (hex, identifier, call, ...), text is a
    best-effort reconstruction for error messages.
    """

    kind: str
    text: str


Value = Literal | UnsupportedExpression


@dataclass
class CreateTable:
    """A CREATE TABLE statement."""

    name: str
    columns: list[str] = field(default_factory=list)


@dataclass
class Insert:
    """An INSERT ... VALUES statement."""

    table_name: str
    rows: list[list[Value]] = field(default_factory=list)
    columns: list[str] | None = None  # Explicit column list, if given


@dataclass
class OtherStatement:
    """Any statement the converter does not act on (DROP, LOCK, SET, ...)."""

    keyword: str


Statement = CreateTable | Insert | OtherStatement
