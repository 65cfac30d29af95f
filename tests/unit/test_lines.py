"""Unit tests for LineSplitter."""

from json_event_stream.transport.lines import LineSplitter


def make_splitter(**kwargs) -> tuple[LineSplitter, list[bytes]]:
    lines: list[bytes] = []
    return LineSplitter(lines.append, **kwargs), lines


class TestFeed:
    """Test splitting fed bytes into lines."""

    def test_single_line(self):
        """A terminated line should be delivered without its newline."""
        splitter, lines = make_splitter()

        splitter.feed(b"hello\n")

        assert lines == [b"hello"]

    def test_multiple_lines_one_chunk(self):
        """Several lines in one chunk should be delivered in order."""
        splitter, lines = make_splitter()

        splitter.feed(b"a\nb\nc\n")

        assert lines == [b"a", b"b", b"c"]

    def test_partial_line_held(self):
        """An unterminated line should wait for its newline."""
        splitter, lines = make_splitter()

        splitter.feed(b"hel")
        assert lines == []
        assert splitter.pending == b"hel"

        splitter.feed(b"lo\nwor")
        assert lines == [b"hello"]
        assert splitter.pending == b"wor"

    def test_crlf(self):
        """CRLF line endings should be stripped."""
        splitter, lines = make_splitter()

        splitter.feed(b"a\r\nb\r\n")

        assert lines == [b"a", b"b"]

    def test_crlf_split_across_chunks(self):
        """A CR and LF in separate chunks should still end one line."""
        splitter, lines = make_splitter()

        splitter.feed(b"a\r")
        splitter.feed(b"\n")

        assert lines == [b"a"]

    def test_empty_lines_skipped(self):
        """Empty lines should be skipped by default."""
        splitter, lines = make_splitter()

        splitter.feed(b"\n\na\n\r\n")

        assert lines == [b"a"]

    def test_keep_empty_lines(self):
        """Empty lines should be delivered when asked for."""
        splitter, lines = make_splitter(keep_empty_lines=True)

        splitter.feed(b"\na\n")

        assert lines == [b"", b"a"]

    def test_multibyte_character_split(self):
        """A UTF-8 character split over chunks should arrive whole."""
        splitter, lines = make_splitter()
        data = "日本\n".encode()

        splitter.feed(data[:2])
        splitter.feed(data[2:])

        assert lines == ["日本".encode()]

    def test_reentrant_feed(self):
        """Feeding from inside the callback should keep FIFO order."""
        lines: list[bytes] = []

        def on_line(line: bytes) -> None:
            lines.append(line)
            if line == b"a":
                splitter.feed(b"c\n")

        splitter = LineSplitter(on_line)
        splitter.feed(b"a\nb\n")

        assert lines == [b"a", b"b", b"c"]


class TestFlush:
    """Test flushing and resetting."""

    def test_flush_delivers_partial(self):
        """flush() should deliver an unterminated final line."""
        splitter, lines = make_splitter()

        splitter.feed(b"last")
        splitter.flush()

        assert lines == [b"last"]
        assert splitter.pending == b""

    def test_flush_empty(self):
        """flush() with nothing buffered should do nothing."""
        splitter, lines = make_splitter()

        splitter.flush()

        assert lines == []

    def test_reset_discards(self):
        """reset() should drop buffered bytes."""
        splitter, lines = make_splitter()

        splitter.feed(b"partial")
        splitter.reset()
        splitter.flush()

        assert lines == []
