"""Progress reporting for a binary input stream."""

from __future__ import annotations

import io
import sys
from typing import BinaryIO, TextIO

# Minimum advance, in percentage points, before printing again
PROGRESS_STEP = 0.05


class ProgressReader(io.RawIOBase):
    """Pass-through reader that prints how much of a stream has been read.

    Bytes are returned unchanged. Progress is printed as "NN.NN%" followed
    by a carriage return, so successive reports overwrite each other on a
    terminal.
    """

    def __init__(self, raw: BinaryIO, total: int, out: TextIO | None = None) -> None:
        """Initialize the reader.

        Args:
            raw: Readable binary stream to wrap.
            total: Expected number of bytes, usually the file size.
            out: Where to print progress (defaults to stdout).
        """
        super().__init__()
        self.raw = raw
        self.total = total
        self.out = out
        self.consumed = 0
        self.progress = 0.0

    def readable(self) -> bool:
        return True

    def readinto(self, buffer) -> int:  # type: ignore[override]
        count = self.raw.readinto(buffer)  # type: ignore[attr-defined]
        if count:
            self._advance(count)
        return count

    def _advance(self, count: int) -> None:
        self.consumed += count
        if self.total <= 0:
            return
        progress = 100.0 * self.consumed / self.total
        if progress > self.progress + PROGRESS_STEP:
            self.progress = progress
            out = self.out if self.out is not None else sys.stdout
            print(f"{progress:05.2f}%", end="\r", file=out, flush=True)

    def close(self) -> None:
        if not self.closed:
            self.raw.close()
        super().close()
