"""Exceptions raised while converting a dump."""

from __future__ import annotations


class ConversionError(Exception):
    """A conversion run failed and should be reported to the user."""


class DumpSyntaxError(ConversionError):
    """The dump contains text the SQL parser cannot read."""

    def __init__(self, message: str, line: int | None = None) -> None:
        self.message = message
        self.line = line
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)


class UnsafeTableNameError(ConversionError):
    """A table name cannot be used as a file name inside the output directory."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Refusing to write table {name!r} outside the output directory")


class ContractViolation(AssertionError):
    """The dump has a shape the converter assumes never happens.

    Raised for inserts into undeclared tables and for value expressions
    other than numbers, negative numbers, quoted strings and NULL.
    Nothing inside the package catches it.
    """
