"""Line-delimited JSON events over any duplex byte stream.

Public API:
- JsonEventStreamer: the protocol engine (emit / on / on_all)
- StreamerConfig: wire field names and local/non-JSON behaviour
- Message: wire-level event type
- EventEmitter: generic named-event dispatch
- Transports: PassThroughTransport, MemoryTransport, StdioTransport,
  StreamTransport, WebSocketTransport
"""

from .config import StreamerConfig
from .emitter import ERROR_EVENT, EventEmitter
from .errors import InvalidMessage, JsonEventStreamError, SerializationFailure
from .message import JsonValue, Message
from .streamer import JsonEventStreamer
from .transport import (
    LineSplitter,
    MemoryTransport,
    PassThroughTransport,
    StdioTransport,
    StreamTransport,
    Transport,
    WebSocketTransport,
    transport_pair,
)

__all__ = [
    # Core
    "JsonEventStreamer",
    "StreamerConfig",
    "Message",
    "JsonValue",
    "EventEmitter",
    "ERROR_EVENT",
    # Errors
    "JsonEventStreamError",
    "InvalidMessage",
    "SerializationFailure",
    # Transports
    "Transport",
    "LineSplitter",
    "MemoryTransport",
    "PassThroughTransport",
    "StdioTransport",
    "StreamTransport",
    "WebSocketTransport",
    "transport_pair",
]

__version__ = "0.1.0"
