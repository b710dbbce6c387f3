"""Statement source: turns a dump byte stream into parsed statements."""

from __future__ import annotations

import io
import re
from dataclasses import dataclass
from typing import BinaryIO, Iterable, Iterator

from sqldump_tsv.errors import DumpSyntaxError
from sqldump_tsv.parsing import SqlParser
from sqldump_tsv.statements import Statement

# Scanner states
_NORMAL = "normal"
_SINGLE_QUOTE = "single quote"
_DOUBLE_QUOTE = "double quote"
_BACKTICK = "backtick"
_BLOCK_COMMENT = "block comment"

# What ends the current state (or, in _NORMAL, starts a new one)
_NORMAL_SPECIAL = re.compile(r"""[;'"`#]|--(?=\s|$)|/\*""")
_STATE_END = {
    _SINGLE_QUOTE: re.compile(r"[\\']"),
    _DOUBLE_QUOTE: re.compile(r'[\\"]'),
    _BACKTICK: re.compile(r"`"),
    _BLOCK_COMMENT: re.compile(r"\*/"),
}
_OPENERS = {"'": _SINGLE_QUOTE, '"': _DOUBLE_QUOTE, "`": _BACKTICK, "/*": _BLOCK_COMMENT}


@dataclass
class StatementText:
    """Raw text of one statement and the line it starts on."""

    text: str
    line: int


class StatementSplitter:
    """Split SQL text into statements on top-level semicolons.

    Text is fed one line at a time so arbitrarily large dumps can be split
    while holding only the statement being assembled. Semicolons inside
    strings, backtick identifiers and comments do not split. Pieces made of
    nothing but whitespace and comments are dropped.

    A doubled quote inside a string ('it''s') needs no special handling:
    closing and immediately reopening the string leaves the scanner in the
    same state.
    """

    def __init__(self) -> None:
        self._parts: list[str] = []
        self._state = _NORMAL
        self._escape_next = False
        self._has_content = False
        self._line = 1
        self._start_line = 1

    @property
    def line(self) -> int:
        """Line number the splitter has reached."""
        return self._line

    def feed(self, line: str) -> Iterator[StatementText]:
        """Consume one line of text and yield every statement it completes."""
        pos = 0
        length = len(line)

        while pos < length:
            state = self._state

            if self._escape_next:
                self._escape_next = False
                pos += 1
                continue

            if state == _NORMAL:
                match = _NORMAL_SPECIAL.search(line, pos)
                end = match.start() if match else length
                if not self._has_content and line[pos:end].strip():
                    self._mark_content()
                if match is None:
                    pos = length
                    break

                token = match.group()
                if token == ";":
                    self._parts.append(line[:end])
                    statement = self._take()
                    if statement is not None:
                        yield statement
                    line = line[end + 1:]
                    length = len(line)
                    pos = 0
                    continue
                if token in ("--", "#"):
                    # Line comment: the rest of the line is ignored
                    pos = length
                    break
                if token != "/*" and not self._has_content:
                    self._mark_content()
                self._state = _OPENERS[token]
                pos = match.end()
                continue

            match = _STATE_END[state].search(line, pos)
            if match is None:
                pos = length
                break
            if match.group() == "\\":
                self._escape_next = True
                pos = match.end()
                continue
            self._state = _NORMAL
            pos = match.end()

        self._parts.append(line)
        self._line += line.count("\n")

    def finish(self) -> StatementText | None:
        """Signal end of input and return the trailing unterminated statement, if any."""
        if self._state != _NORMAL:
            raise DumpSyntaxError(f"Unterminated {self._state} at end of input", self._start_line)
        return self._take()

    def _mark_content(self) -> None:
        self._has_content = True
        self._start_line = self._line

    def _take(self) -> StatementText | None:
        text = "".join(self._parts)
        statement = StatementText(text, self._start_line) if self._has_content else None
        self._parts = []
        self._has_content = False
        self._start_line = self._line
        return statement


def split_statements(lines: Iterable[str]) -> Iterator[StatementText]:
    """Split an iterable of text lines into statement texts."""
    splitter = StatementSplitter()
    for line in lines:
        yield from splitter.feed(line)
    trailing = splitter.finish()
    if trailing is not None:
        yield trailing


class StatementSource:
    """Lazy, single-pass iterator of statements read from a binary stream.

    Bytes that are not valid in the given encoding are carried through as
    surrogates, so writing the results with the same encoding and
    errors="surrogateescape" reproduces them exactly.
    """

    def __init__(
        self,
        stream: BinaryIO,
        encoding: str = "utf-8",
        parser: SqlParser | None = None,
    ) -> None:
        self._text = io.TextIOWrapper(
            stream, encoding=encoding, errors="surrogateescape", newline=""
        )
        self._parser = parser if parser is not None else SqlParser()
        self._statements = self._generate()

    def __iter__(self) -> StatementSource:
        return self

    def __next__(self) -> Statement:
        return next(self._statements)

    def _generate(self) -> Iterator[Statement]:
        for piece in split_statements(self._text):
            try:
                yield self._parser.parse(piece.text, piece.line)
            except SyntaxError as e:
                raise DumpSyntaxError(e.msg, piece.line) from e
