"""WebSocket transport.

Carries the line protocol over a Starlette WebSocket. Each message line
is sent as one text frame; an inbound frame is treated as a complete
line even when the peer leaves off the trailing newline.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging

from starlette.websockets import WebSocket, WebSocketDisconnect, WebSocketState

from .base import Transport

logger = logging.getLogger(__name__)


class WebSocketTransport(Transport):
    """Server-side WebSocket transport.

    ``write`` only queues the frame; ``run`` owns the connection, sending
    queued frames and delivering received ones until the client
    disconnects. Frames written before ``run`` starts are sent once it
    does; writing after ``run`` has finished raises RuntimeError.

    Usage:
        async def endpoint(websocket: WebSocket) -> None:
            transport = WebSocketTransport(websocket)
            streamer = JsonEventStreamer(transport)
            streamer.on("ping", lambda *args: streamer.emit("pong", *args))
            await transport.run()
    """

    def __init__(self, websocket: WebSocket):
        super().__init__()
        self._websocket = websocket
        self._outbox: asyncio.Queue[bytes | None] = asyncio.Queue()
        self._connected = False
        self._finished = False

    @property
    def is_connected(self) -> bool:
        """Check if the WebSocket is connected."""
        return self._connected and self._websocket.client_state == WebSocketState.CONNECTED

    def write(self, data: bytes) -> None:
        if self._finished:
            raise RuntimeError("Transport not connected")
        self._outbox.put_nowait(data)

    async def run(self) -> None:
        """Accept (if needed) and serve the connection until disconnect."""
        if self._websocket.client_state == WebSocketState.CONNECTING:
            await self._websocket.accept()
        self._connected = True
        logger.info("websocket transport connected")

        sender = asyncio.create_task(self._send_loop())
        try:
            await self._receive_loop()
        finally:
            self._connected = False
            self._finished = True
            self._outbox.put_nowait(None)
            with contextlib.suppress(Exception):
                await sender
            self._notify_end()
            logger.info("websocket transport disconnected")

    async def _receive_loop(self) -> None:
        while True:
            try:
                message = await self._websocket.receive()
            except WebSocketDisconnect:
                break
            if message["type"] == "websocket.disconnect":
                break

            data = message.get("bytes")
            if data is None:
                data = (message.get("text") or "").encode("utf-8")
            if data and not data.endswith(b"\n"):
                data += b"\n"
            self._notify_data(data)

    async def _send_loop(self) -> None:
        while True:
            data = await self._outbox.get()
            if data is None:
                break
            if not self.is_connected:
                logger.debug("websocket closed, dropping queued frame")
                continue
            await self._websocket.send_text(data.decode("utf-8"))
