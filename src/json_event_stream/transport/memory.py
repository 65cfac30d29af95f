"""In-memory transports.

Useful for tests and for wiring two streamers together inside one
process without a pipe or socket in between.
"""

from __future__ import annotations

from .base import Transport


class PassThroughTransport(Transport):
    """Loopback transport: every write is delivered back as inbound data."""

    def __init__(self) -> None:
        super().__init__()
        self._ended = False

    def write(self, data: bytes) -> None:
        if self._ended:
            raise RuntimeError("Transport has ended")
        self._notify_data(data)

    def end(self) -> None:
        """Signal end of stream to listeners."""
        if self._ended:
            return
        self._ended = True
        self._notify_end()


class MemoryTransport(Transport):
    """Transport whose writes are recorded and whose reads are fed by hand.

    Example:
        transport = MemoryTransport()
        streamer = JsonEventStreamer(transport)
        streamer.emit("ready")
        transport.getvalue()           # b'{"event":"ready"}\\n'
        transport.feed(b'{"event":"ping"}\\n')
    """

    def __init__(self) -> None:
        super().__init__()
        self.written = bytearray()
        self._peer: MemoryTransport | None = None
        self._ended = False

    def write(self, data: bytes) -> None:
        self.written.extend(data)
        if self._peer is not None:
            self._peer.feed(data)

    def getvalue(self) -> bytes:
        """All bytes written so far."""
        return bytes(self.written)

    def feed(self, data: bytes | str) -> None:
        """Deliver inbound data as if it arrived from the peer."""
        if self._ended:
            raise RuntimeError("Transport has ended")
        if isinstance(data, str):
            data = data.encode("utf-8")
        self._notify_data(data)

    def end(self) -> None:
        """Deliver end of stream."""
        if self._ended:
            return
        self._ended = True
        self._notify_end()


def transport_pair() -> tuple[MemoryTransport, MemoryTransport]:
    """Two linked transports: each one's writes are the other's reads."""
    left = MemoryTransport()
    right = MemoryTransport()
    left._peer = right
    right._peer = left
    return left, right
