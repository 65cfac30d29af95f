"""Transport layer.

Byte-oriented duplex channels a JsonEventStreamer reads from and writes to:
- PassThroughTransport / MemoryTransport - in-memory, for tests and embedding
- StdioTransport - blocking binary streams (stdin/stdout, pipes)
- StreamTransport - asyncio StreamReader/StreamWriter (sockets, subprocesses)
- WebSocketTransport - Starlette WebSocket, one line per frame

LineSplitter turns the raw byte stream into newline-delimited chunks.
"""

from .base import DataListener, EndListener, Transport
from .lines import LineSplitter
from .memory import MemoryTransport, PassThroughTransport, transport_pair
from .stdio import StdioTransport
from .streams import StreamTransport
from .websocket import WebSocketTransport

__all__ = [
    # Base abstractions
    "DataListener",
    "EndListener",
    "Transport",
    "LineSplitter",
    # In-memory implementations
    "MemoryTransport",
    "PassThroughTransport",
    "transport_pair",
    # Stream implementations
    "StdioTransport",
    "StreamTransport",
    "WebSocketTransport",
]
