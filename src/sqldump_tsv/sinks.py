"""Output files for converted tables."""

from __future__ import annotations

import os
from contextlib import ExitStack
from pathlib import Path
from typing import TextIO

from sqldump_tsv.errors import ContractViolation, UnsafeTableNameError

DEFAULT_BUFFER_SIZE = 128 * 1024
FILE_SUFFIX = ".tsv"


def check_table_name(name: str) -> None:
    """Raise UnsafeTableNameError if name cannot be used as a plain file name."""
    separators = {"/", "\\", "\0", os.sep}
    if os.altsep:
        separators.add(os.altsep)
    if name in ("", ".", "..") or any(sep in name for sep in separators):
        raise UnsafeTableNameError(name)


class SinkRegistry:
    """Open output files keyed by table name.

    Each table has at most one open file. Opening a table again closes the
    previous file and truncates it. Closing the registry flushes and closes
    every file.
    """

    def __init__(
        self,
        output_dir: Path,
        buffer_size: int = DEFAULT_BUFFER_SIZE,
        encoding: str = "utf-8",
    ) -> None:
        """Initialize the registry.

        Args:
            output_dir: Directory for the table files, created if missing.
            buffer_size: Write buffer size for each file, in bytes.
            encoding: Text encoding of the output files.
        """
        self.output_dir = Path(output_dir)
        self.buffer_size = buffer_size
        self.encoding = encoding
        self._sinks: dict[str, TextIO] = {}

        self.output_dir.mkdir(parents=True, exist_ok=True)

    def path_for(self, name: str) -> Path:
        """Return the output file path for a table."""
        check_table_name(name)
        return self.output_dir / f"{name}{FILE_SUFFIX}"

    def open(self, name: str) -> TextIO:
        """Create (or truncate) the file for a table and register it."""
        path = self.path_for(name)
        previous = self._sinks.pop(name, None)
        if previous is not None:
            previous.close()

        sink = open(
            path,
            "w",
            encoding=self.encoding,
            errors="surrogateescape",
            newline="",
            buffering=self.buffer_size,
        )
        self._sinks[name] = sink
        return sink

    def get(self, name: str) -> TextIO:
        """Return the open file for a table declared earlier."""
        try:
            return self._sinks[name]
        except KeyError:
            raise ContractViolation(
                f"INSERT into table {name!r} before its CREATE TABLE"
            ) from None

    def names(self) -> list[str]:
        """Return the names of all open tables."""
        return list(self._sinks)

    def __contains__(self, name: object) -> bool:
        return name in self._sinks

    def __len__(self) -> int:
        return len(self._sinks)

    def close(self) -> None:
        """Flush and close every open file."""
        sinks, self._sinks = self._sinks, {}
        with ExitStack() as stack:
            # Every file gets closed even if an earlier close fails
            for sink in sinks.values():
                stack.callback(sink.close)

    def __enter__(self) -> SinkRegistry:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()
