"""Tests for the progress-reporting reader."""

import io

from sqldump_tsv.progress import ProgressReader


class TestProgressReader:
    """Tests for ProgressReader."""

    def test_bytes_unchanged(self):
        """Test that reading through the wrapper returns the same bytes."""
        data = bytes(range(256)) * 40
        out = io.StringIO()

        reader = io.BufferedReader(ProgressReader(io.BytesIO(data), len(data), out=out))

        assert reader.read() == data
        assert out.getvalue().endswith("100.00%\r")

    def test_reports_after_step(self):
        """Test that progress is only printed after advancing past the step."""
        out = io.StringIO()
        reader = ProgressReader(io.BytesIO(b"x" * 10000), 10000, out=out)

        reader.read(4)
        assert out.getvalue() == ""

        reader.read(2)
        assert out.getvalue() == "00.06%\r"
        assert reader.consumed == 6

    def test_zero_total_prints_nothing(self):
        """Test that an unknown size never prints."""
        out = io.StringIO()
        reader = ProgressReader(io.BytesIO(b"abc"), 0, out=out)

        assert reader.read(10) == b"abc"
        assert out.getvalue() == ""

    def test_close_closes_wrapped_stream(self):
        """Test that closing the reader closes the wrapped stream."""
        raw = io.BytesIO(b"abc")
        reader = ProgressReader(raw, 3, out=io.StringIO())

        reader.close()

        assert raw.closed
        assert reader.closed
