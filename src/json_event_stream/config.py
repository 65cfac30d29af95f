"""Streamer configuration.

Field names are snake_case in Python; the camelCase aliases
(``eventProperty``, ``argumentsProperty``, ...) are accepted too so
configuration dictionaries shared with other implementations load as-is.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

DEFAULT_EVENT_PROPERTY = "event"
DEFAULT_ARGUMENTS_PROPERTY = "arguments"


class StreamerConfig(BaseModel):
    """Configuration for a JsonEventStreamer.

    Immutable once built: a streamer keeps the config it was created with
    for its whole lifetime.
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
        extra="forbid",
    )

    arguments_property: str = DEFAULT_ARGUMENTS_PROPERTY
    emit_local_events: bool = False
    event_property: str = DEFAULT_EVENT_PROPERTY
    ignore_non_json: bool = False

    def merged(self, **overrides: object) -> StreamerConfig:
        """Return a validated copy with ``overrides`` applied."""
        if not overrides:
            return self
        data = self.model_dump()
        for key, value in overrides.items():
            field_name = _field_name(key)
            data[field_name] = value
        return StreamerConfig.model_validate(data)


def _field_name(key: str) -> str:
    """Map a camelCase alias back to its field name."""
    for name, field in StreamerConfig.model_fields.items():
        if key in (name, field.alias):
            return name
    # Let model validation reject it with the usual message
    return key
