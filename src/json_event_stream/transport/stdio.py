"""stdio Transport.

Blocking binary streams (stdin/stdout by default) for subprocess/IPC use:

    # Parent process
    proc = subprocess.Popen(["my-tool"], stdin=subprocess.PIPE, stdout=subprocess.PIPE)
    streamer = JsonEventStreamer(StdioTransport(stdin=proc.stdout, stdout=proc.stdin))

Cross-platform considerations:
- Binary mode is used so bytes pass through untouched
- Output is flushed after every write (one message per write)
"""

from __future__ import annotations

import asyncio
import logging
import sys
from typing import BinaryIO

from .base import Transport

logger = logging.getLogger(__name__)


class StdioTransport(Transport):
    """Duplex transport over a pair of blocking binary streams.

    Reading is pull-based: call ``pump`` for one step, ``run_forever`` for
    a blocking loop, or ``await run()`` to read in an executor while the
    event loop stays responsive. Data listeners are always called from the
    thread that drives the loop.
    """

    def __init__(
        self,
        stdin: BinaryIO | None = None,
        stdout: BinaryIO | None = None,
    ):
        """Initialize stdio transport.

        Args:
            stdin: Binary input stream (default: sys.stdin.buffer)
            stdout: Binary output stream (default: sys.stdout.buffer)
        """
        super().__init__()
        self._stdin = stdin if stdin is not None else sys.stdin.buffer
        self._stdout = stdout if stdout is not None else sys.stdout.buffer
        self._running = False

    def write(self, data: bytes) -> None:
        self._stdout.write(data)
        self._stdout.flush()

    def pump(self) -> bool:
        """Read one line and notify listeners.

        Returns:
            False once the input stream is exhausted
        """
        data = self._stdin.readline()
        if not data:
            self._notify_end()
            return False
        self._notify_data(data)
        return True

    def run_forever(self) -> None:
        """Read until EOF, blocking the calling thread."""
        self._running = True
        try:
            while self._running and self.pump():
                pass
        finally:
            self._running = False

    async def run(self) -> None:
        """Read until EOF (or ``stop``) without blocking the event loop."""
        self._running = True
        loop = asyncio.get_running_loop()
        try:
            while self._running:
                # Run blocking readline in executor
                data = await loop.run_in_executor(None, self._stdin.readline)
                if not data:
                    break
                self._notify_data(data)
        except asyncio.CancelledError:
            logger.info("stdio transport cancelled")
            raise
        finally:
            self._running = False
            self._notify_end()

    def stop(self) -> None:
        """Stop the read loop after the current line."""
        self._running = False
