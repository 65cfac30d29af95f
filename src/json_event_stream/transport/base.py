"""Transport abstraction base class.

A transport is a reliable, ordered byte stream in both directions. The
streamer only needs two things from it: a way to write bytes, and a
notification whenever bytes arrive (plus one when the stream ends).
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable

logger = logging.getLogger(__name__)

DataListener = Callable[[bytes], None]
EndListener = Callable[[], None]


class Transport(ABC):
    """Duplex byte channel with push-style read notifications.

    Subclasses implement ``write`` and call ``_notify_data`` / ``_notify_end``
    from whatever read loop they run. Notifications are delivered
    synchronously, in arrival order.
    """

    def __init__(self) -> None:
        self._data_listeners: list[DataListener] = []
        self._end_listeners: list[EndListener] = []

    @abstractmethod
    def write(self, data: bytes) -> None:
        """Enqueue bytes for sending. Must not block on the peer."""
        raise NotImplementedError

    def add_data_listener(self, listener: DataListener) -> None:
        self._data_listeners.append(listener)

    def remove_data_listener(self, listener: DataListener) -> None:
        if listener in self._data_listeners:
            self._data_listeners.remove(listener)

    def add_end_listener(self, listener: EndListener) -> None:
        self._end_listeners.append(listener)

    def remove_end_listener(self, listener: EndListener) -> None:
        if listener in self._end_listeners:
            self._end_listeners.remove(listener)

    def _notify_data(self, data: bytes) -> None:
        if not data:
            return
        for listener in list(self._data_listeners):
            listener(data)

    def _notify_end(self) -> None:
        logger.debug(f"{type(self).__name__} reached end of stream")
        for listener in list(self._end_listeners):
            listener()
