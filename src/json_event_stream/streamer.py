"""JSON event streamer.

Turns a byte transport into an event emitter: every inbound line is a
JSON message dispatched as a named event, and every ``emit`` call writes
one JSON line to the transport.

    transport = StdioTransport()
    events = JsonEventStreamer(transport)

    events.on("ping", lambda n: events.emit("pong", n))
    events.on_all(lambda event, *args: print(event, args))
    events.on("error", lambda err: print("bad line:", err))

    transport.run_forever()
"""

from __future__ import annotations

import logging
from typing import Any

from .config import StreamerConfig
from .emitter import ERROR_EVENT, EventEmitter, Listener
from .errors import InvalidMessage
from .message import JsonValue, Message
from .transport.base import Transport
from .transport.lines import LineSplitter

logger = logging.getLogger(__name__)


class JsonEventStreamer(EventEmitter):
    """Bidirectional, line-delimited JSON event protocol over a transport.

    Inbound messages reach two kinds of listener, both synchronously and
    in arrival order:
    - observe-all listeners (``on_all``) get ``(event, *arguments)``
    - named listeners (``on``) get ``*arguments`` for their event only

    ``emit`` is overridden to write to the transport. With
    ``emit_local_events`` enabled the emitted message is also dispatched
    to this instance's own listeners.

    Lines that are not JSON are reported through the "error" event, or
    dropped quietly when ``ignore_non_json`` is set. Either way the
    stream keeps going.
    """

    def __init__(
        self,
        transport: Transport,
        config: StreamerConfig | None = None,
        **options: Any,
    ):
        """Attach to a transport and start consuming its data.

        Args:
            transport: Duplex byte transport, exclusively owned by this streamer
            config: Streamer configuration (default: StreamerConfig())
            **options: Config overrides, e.g. ``event_property="name"``
        """
        super().__init__()
        base = config if config is not None else StreamerConfig()
        self.config = base.merged(**options)
        self.transport = transport

        # Observe-all listeners keyed by id(), so membership is by identity
        self._all_listeners: dict[int, Listener] = {}

        self._splitter = LineSplitter(self._handle)
        self._closed = False
        transport.add_data_listener(self._splitter.feed)
        transport.add_end_listener(self._splitter.flush)

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def all_listeners(self) -> list[Listener]:
        """Observe-all listeners, in registration order."""
        return list(self._all_listeners.values())

    def emit(self, event: str, *args: JsonValue) -> None:  # type: ignore[override]
        """Send an event to the peer.

        Raises:
            SerializationFailure: if the arguments are not JSON-serializable
            RuntimeError: if the streamer has been closed
        """
        if self._closed:
            raise RuntimeError("JsonEventStreamer is closed")

        message = Message(event, args)
        self.transport.write(message.encode(self.config))
        logger.debug(f"Sent event {event!r} ({len(args)} arguments)")

        if self.config.emit_local_events:
            self._dispatch(message)

    def on_all(self, listener: Listener) -> Listener:
        """Call ``listener(event, *arguments)`` for every dispatched message."""
        if not callable(listener):
            raise TypeError(f"Listener must be callable, got {listener!r}")
        self._all_listeners.setdefault(id(listener), listener)
        return listener

    def remove_all_listener(self, listener: Listener) -> None:
        """Remove an observe-all listener. Unknown listeners are ignored."""
        self._all_listeners.pop(id(listener), None)

    def close(self) -> None:
        """Detach from the transport.

        Any partial line still buffered is discarded. The transport itself
        is left open; its lifecycle belongs to the caller.
        """
        if self._closed:
            return
        self._closed = True
        self.transport.remove_data_listener(self._splitter.feed)
        self.transport.remove_end_listener(self._splitter.flush)
        self._splitter.reset()
        logger.debug("JsonEventStreamer detached from transport")

    def __enter__(self) -> JsonEventStreamer:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _handle(self, line: bytes) -> None:
        """Decode one inbound line and dispatch it."""
        if self._closed:
            return

        try:
            message = Message.decode(line, self.config)
        except InvalidMessage as err:
            if self.config.ignore_non_json:
                logger.debug(f"Ignoring non-JSON line: {line!r}")
                return
            super().emit(ERROR_EVENT, err)
            return

        logger.debug(f"Received event {message.event!r} ({len(message.arguments)} arguments)")
        self._dispatch(message)

    def _dispatch(self, message: Message) -> None:
        self._dispatch_all(message)

        # No event name (or a non-string one) has no named listeners
        if isinstance(message.event, str) and message.event:
            super().emit(message.event, *message.arguments)

    def _dispatch_all(self, message: Message) -> None:
        for listener in list(self._all_listeners.values()):
            try:
                listener(message.event, *message.arguments)
            except Exception:
                logger.exception(f"Error in observe-all listener for {message.event!r}")
