"""asyncio stream transport.

Wraps a StreamReader/StreamWriter pair, which covers TCP sockets, Unix
sockets, pipes and subprocess stdio.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import Any

from .base import Transport

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 65536


class StreamTransport(Transport):
    """Duplex transport over asyncio streams.

    ``write`` hands bytes to the StreamWriter without waiting; call
    ``drain`` when the caller wants to wait for the buffer to empty.
    ``run`` reads until EOF, notifying data listeners chunk by chunk.
    """

    def __init__(
        self,
        reader: asyncio.StreamReader,
        writer: asyncio.StreamWriter,
        *,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ):
        super().__init__()
        self._reader = reader
        self._writer = writer
        self._chunk_size = chunk_size

    @classmethod
    async def open_connection(cls, host: str, port: int, **kwargs: Any) -> StreamTransport:
        """Connect to a TCP server."""
        reader, writer = await asyncio.open_connection(host, port, **kwargs)
        logger.info(f"stream transport connected to {host}:{port}")
        return cls(reader, writer)

    @classmethod
    async def connect_pipes(cls, read_pipe: Any, write_pipe: Any) -> StreamTransport:
        """Attach to a pair of pipe file objects (e.g. sys.stdin, sys.stdout)."""
        loop = asyncio.get_running_loop()

        reader = asyncio.StreamReader()
        protocol = asyncio.StreamReaderProtocol(reader)
        await loop.connect_read_pipe(lambda: protocol, read_pipe)

        transport, proto = await loop.connect_write_pipe(
            asyncio.streams.FlowControlMixin,
            write_pipe,
        )
        writer = asyncio.StreamWriter(transport, proto, None, loop)

        logger.info("stream transport connected to pipes")
        return cls(reader, writer)

    @classmethod
    def for_subprocess(cls, process: asyncio.subprocess.Process) -> StreamTransport:
        """Talk to a child started with stdin=PIPE and stdout=PIPE."""
        if process.stdout is None or process.stdin is None:
            raise ValueError("Subprocess must be started with stdin=PIPE and stdout=PIPE")
        return cls(process.stdout, process.stdin)

    @property
    def is_closing(self) -> bool:
        return self._writer.is_closing()

    def write(self, data: bytes) -> None:
        if self._writer.is_closing():
            raise RuntimeError("Transport not connected")
        self._writer.write(data)

    async def drain(self) -> None:
        """Wait until the write buffer has been flushed to the OS."""
        await self._writer.drain()

    async def run(self) -> None:
        """Read until EOF, then notify end listeners."""
        try:
            while True:
                data = await self._reader.read(self._chunk_size)
                if not data:
                    break
                self._notify_data(data)
        finally:
            self._notify_end()

    async def aclose(self) -> None:
        """Close the writing side."""
        if self._writer.is_closing():
            return
        self._writer.close()
        with contextlib.suppress(Exception):
            await self._writer.wait_closed()
        logger.info("stream transport closed")
