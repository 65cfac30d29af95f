"""Exceptions raised by the JSON event stream."""

from __future__ import annotations

from typing import Any


class JsonEventStreamError(Exception):
    """Base class for all json_event_stream errors."""


class InvalidMessage(JsonEventStreamError, ValueError):
    """An inbound line could not be decoded as JSON.

    Reported through the streamer's ``"error"`` event rather than raised,
    since decoding happens inside the transport's data notification.
    """

    def __init__(self, message: str, line: bytes | str | None = None):
        super().__init__(message)
        self.line = line


class SerializationFailure(JsonEventStreamError, TypeError):
    """Outbound arguments are not representable as JSON."""

    def __init__(self, message: str, event: Any = None):
        super().__init__(message)
        self.event = event
