"""Pytest configuration and shared fixtures."""

import pytest

from json_event_stream import JsonEventStreamer, transport_pair


@pytest.fixture(scope="module")
def anyio_backend():
    """Configure anyio to use asyncio backend."""
    return "asyncio"


@pytest.fixture
def linked_streamers() -> tuple[JsonEventStreamer, JsonEventStreamer]:
    """Two streamers joined by in-memory transports (client, server)."""
    left, right = transport_pair()
    return JsonEventStreamer(left), JsonEventStreamer(right)
