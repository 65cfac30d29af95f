"""Wire representation of a single event.

Wire format (newline-delimited JSON, UTF-8 encoded):
    {"event": "example", "arguments": [1, "a", {"b": "c"}]}
    {"event": "ready"}

The field names are configurable through StreamerConfig. The arguments
field is omitted entirely when an event carries no arguments.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, TypeAlias, Union

from .config import StreamerConfig
from .errors import InvalidMessage, SerializationFailure

JsonValue: TypeAlias = Union[
    None, bool, int, float, str, list["JsonValue"], dict[str, "JsonValue"]
]

# UTF-8 encoding for all JSON operations
ENCODING = "utf-8"

# Newline terminating every message (always LF)
NEWLINE = "\n"

_BOM = "\ufeff"

# Longest excerpt of a bad line quoted in an error message
_PREVIEW_LENGTH = 80


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not a standard JSON value")


@dataclass(frozen=True)
class Message:
    """One event occurrence plus its positional arguments."""

    event: str | None
    arguments: tuple[JsonValue, ...] = ()

    def to_wire(self, config: StreamerConfig) -> dict[str, Any]:
        """Build the JSON object sent on the wire."""
        data: dict[str, Any] = {}
        if self.event is not None:
            data[config.event_property] = self.event
        if self.arguments:
            data[config.arguments_property] = list(self.arguments)
        return data

    @classmethod
    def from_wire(cls, value: Any, config: StreamerConfig) -> Message:
        """Read a decoded JSON value as a message.

        Missing fields are not errors: no event field gives an event of
        None. An arguments field that is missing, null, false, 0 or ""
        gives zero arguments. Any other non-list value is passed through
        as the single argument.
        """
        if not isinstance(value, dict):
            return cls(event=None)

        raw_arguments = value.get(config.arguments_property)
        if _is_absent(raw_arguments):
            arguments: tuple[JsonValue, ...] = ()
        elif isinstance(raw_arguments, list):
            arguments = tuple(raw_arguments)
        else:
            arguments = (raw_arguments,)

        return cls(event=value.get(config.event_property), arguments=arguments)

    def encode(self, config: StreamerConfig) -> bytes:
        """Serialize to one UTF-8 JSON line, newline included."""
        try:
            text = json.dumps(
                self.to_wire(config),
                separators=(",", ":"),
                ensure_ascii=False,
                allow_nan=False,
            )
        except (TypeError, ValueError) as e:
            raise SerializationFailure(
                f"Cannot serialize event {self.event!r}: {e}", event=self.event
            ) from e
        return (text + NEWLINE).encode(ENCODING)

    @classmethod
    def decode(cls, line: bytes | str, config: StreamerConfig) -> Message:
        """Parse one line (without its newline) into a message.

        Raises:
            InvalidMessage: if the line is not valid UTF-8 or not valid JSON
        """
        if isinstance(line, bytes):
            try:
                text = line.decode(ENCODING)
            except UnicodeDecodeError as e:
                raise InvalidMessage(f"{_preview(line)} is not valid JSON: {e}", line) from e
        else:
            text = line

        # Skip UTF-8 BOM if present at start
        if text.startswith(_BOM):
            text = text[1:]

        try:
            value = json.loads(text, parse_constant=_reject_constant)
        except ValueError as e:
            raise InvalidMessage(f"{_preview(text)} is not valid JSON: {e}", line) from e

        return cls.from_wire(value, config)


def _is_absent(value: Any) -> bool:
    # bool is an int subclass, so False matches the 0 check
    return value is None or value == "" or (isinstance(value, (int, float)) and value == 0)


def _preview(line: bytes | str) -> str:
    if len(line) > _PREVIEW_LENGTH:
        line = line[:_PREVIEW_LENGTH]
        return f"{line!r}..."
    return repr(line)
