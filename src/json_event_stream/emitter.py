"""Synchronous named-event dispatch.

A small pub/sub table: event name -> ordered list of listener
registrations. Errors travel as an ordinary event named "error".
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)

ERROR_EVENT = "error"

Listener = Callable[..., Any]


@dataclass(eq=False)
class _Registration:
    listener: Listener
    once: bool = False


class EventEmitter:
    """Named-event emitter with Node-style semantics.

    - Listeners for one event fire in registration order
    - Registering the same listener twice makes it fire twice
    - Removal is by identity and removes the most recent registration
    - Emitting "error" with no listeners logs the error instead of raising

    Listener exceptions are logged and do not stop the remaining
    listeners from running.
    """

    def __init__(self) -> None:
        self._listeners: dict[str, list[_Registration]] = {}

    def on(self, event: str, listener: Listener) -> Listener:
        """Register a listener for an event. Returns the listener."""
        self._add(event, _Registration(listener))
        return listener

    add_listener = on

    def once(self, event: str, listener: Listener) -> Listener:
        """Register a listener that is removed before its first call."""
        self._add(event, _Registration(listener, once=True))
        return listener

    def off(self, event: str, listener: Listener) -> None:
        """Remove the most recently added registration of a listener.

        Unknown events or listeners are ignored.
        """
        registrations = self._listeners.get(event)
        if not registrations:
            return
        for index in range(len(registrations) - 1, -1, -1):
            if registrations[index].listener is listener:
                del registrations[index]
                break
        if not registrations:
            del self._listeners[event]

    remove_listener = off

    def remove_all_listeners(self, event: str | None = None) -> None:
        """Remove every listener for one event, or for all events."""
        if event is None:
            self._listeners.clear()
        else:
            self._listeners.pop(event, None)

    def listeners(self, event: str) -> list[Listener]:
        """Listeners registered for an event, in dispatch order."""
        return [r.listener for r in self._listeners.get(event, [])]

    def listener_count(self, event: str) -> int:
        return len(self._listeners.get(event, []))

    def event_names(self) -> list[str]:
        return list(self._listeners)

    def emit(self, event: str, *args: Any) -> bool:
        """Call every listener for ``event`` with ``args``.

        Returns:
            True if at least one listener was called
        """
        if not event:
            return False

        # Copy the list so listeners may subscribe/unsubscribe while we iterate
        registrations = list(self._listeners.get(event, []))
        if not registrations:
            if event == ERROR_EVENT:
                error = args[0] if args else None
                logger.error(
                    f"Unhandled error event: {error}",
                    exc_info=error if isinstance(error, BaseException) else None,
                )
            return False

        for registration in registrations:
            # A once listener fires at most once, even under re-entrant emits
            if registration.once and not self._discard(event, registration):
                continue
            try:
                registration.listener(*args)
            except Exception:
                logger.exception(f"Error in listener for {event!r}")

        return True

    def _add(self, event: str, registration: _Registration) -> None:
        if not isinstance(event, str) or not event:
            raise TypeError(f"Event name must be a non-empty string, got {event!r}")
        if not callable(registration.listener):
            raise TypeError(f"Listener must be callable, got {registration.listener!r}")
        self._listeners.setdefault(event, []).append(registration)

    def _discard(self, event: str, registration: _Registration) -> bool:
        registrations = self._listeners.get(event)
        if registrations is None:
            return False
        for index, candidate in enumerate(registrations):
            if candidate is registration:
                del registrations[index]
                break
        else:
            return False
        if not registrations:
            del self._listeners[event]
        return True
