"""Newline splitting for raw byte streams."""

from __future__ import annotations

from collections.abc import Callable

LineCallback = Callable[[bytes], None]


class LineSplitter:
    """Buffer a byte stream and hand out complete lines.

    Lines are split on LF; a trailing CR is stripped so CRLF input works
    too. Each line is delivered exactly once, without its terminator, and
    a partial line is held back until its newline (or ``flush``) arrives.
    """

    def __init__(self, on_line: LineCallback, *, keep_empty_lines: bool = False):
        self._on_line = on_line
        self._keep_empty_lines = keep_empty_lines
        self._buffer = bytearray()

    @property
    def pending(self) -> bytes:
        """Bytes received but not yet delivered as a line."""
        return bytes(self._buffer)

    def feed(self, data: bytes) -> None:
        """Add bytes and deliver every line they complete."""
        self._buffer.extend(data)
        # Re-check the buffer each pass: a callback may feed more data
        while True:
            index = self._buffer.find(b"\n")
            if index < 0:
                break
            line = bytes(self._buffer[:index])
            del self._buffer[: index + 1]
            self._deliver(line)

    def flush(self) -> None:
        """Deliver a final unterminated line, if any."""
        if self._buffer:
            line = bytes(self._buffer)
            self._buffer.clear()
            self._deliver(line)

    def reset(self) -> None:
        """Drop any buffered partial line."""
        self._buffer.clear()

    def _deliver(self, line: bytes) -> None:
        if line.endswith(b"\r"):
            line = line[:-1]
        if not line and not self._keep_empty_lines:
            return
        self._on_line(line)
