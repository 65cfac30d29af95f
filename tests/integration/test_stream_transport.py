"""Integration tests for the asyncio stream transport over real sockets."""

import asyncio
import sys

import pytest

from json_event_stream import JsonEventStreamer, StreamTransport

# =============================================================================
# Helpers
# =============================================================================


async def start_echo_server() -> tuple[asyncio.Server, int]:
    """TCP server whose streamer answers "ping" with "pong"."""

    async def handle(reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        transport = StreamTransport(reader, writer)
        streamer = JsonEventStreamer(transport)
        streamer.on("ping", lambda *args: streamer.emit("pong", *args))
        await transport.run()
        await transport.aclose()

    server = await asyncio.start_server(handle, "127.0.0.1", 0)
    port = server.sockets[0].getsockname()[1]
    return server, port


# =============================================================================
# Tests
# =============================================================================


class TestTcp:
    """Test two streamers talking over TCP."""

    @pytest.mark.anyio
    async def test_ping_pong(self):
        """Events should cross the socket in both directions."""
        server, port = await start_echo_server()
        async with server:
            transport = await StreamTransport.open_connection("127.0.0.1", port)
            client = JsonEventStreamer(transport)
            pong = asyncio.get_running_loop().create_future()
            client.on("pong", lambda *args: pong.set_result(args))
            reader_task = asyncio.create_task(transport.run())

            client.emit("ping", 1, "a", {"b": "c"})
            await transport.drain()

            assert await asyncio.wait_for(pong, timeout=5) == (1, "a", {"b": "c"})

            await transport.aclose()
            await asyncio.wait_for(reader_task, timeout=5)

    @pytest.mark.anyio
    async def test_write_after_close(self):
        """Writing to a closed transport should fail."""
        server, port = await start_echo_server()
        async with server:
            transport = await StreamTransport.open_connection("127.0.0.1", port)
            client = JsonEventStreamer(transport)

            await transport.aclose()

            assert transport.is_closing
            with pytest.raises(RuntimeError):
                client.emit("ping")

    @pytest.mark.anyio
    async def test_end_of_stream(self):
        """run() should return and notify end listeners when the peer closes."""
        reader = asyncio.StreamReader()
        reader.feed_data(b'{"event":"example"}\n{"event":"last"}')
        reader.feed_eof()

        transport = StreamTransport(reader, writer=None)  # type: ignore[arg-type]
        events = JsonEventStreamer(transport)
        received: list = []
        events.on_all(lambda event, *args: received.append(event))

        await transport.run()

        assert received == ["example", "last"]


class TestSubprocess:
    """Test talking to a child process over its stdio pipes."""

    @pytest.mark.anyio
    async def test_child_echo(self):
        """A child that echoes stdin should hand our own events back."""
        process = await asyncio.create_subprocess_exec(
            sys.executable,
            "-c",
            "import sys\nfor line in sys.stdin.buffer:\n"
            "    sys.stdout.buffer.write(line)\n    sys.stdout.buffer.flush()",
            stdin=asyncio.subprocess.PIPE,
            stdout=asyncio.subprocess.PIPE,
        )
        transport = StreamTransport.for_subprocess(process)
        events = JsonEventStreamer(transport)
        received: list = []
        events.on("echo", lambda *args: received.append(args))
        reader_task = asyncio.create_task(transport.run())

        events.emit("echo", "hello", 2)
        await transport.drain()
        await transport.aclose()

        await asyncio.wait_for(reader_task, timeout=10)
        await process.wait()

        assert received == [("hello", 2)]

    def test_requires_pipes(self):
        """A process without stdio pipes should be rejected."""

        class NoPipes:
            stdin = None
            stdout = None

        with pytest.raises(ValueError):
            StreamTransport.for_subprocess(NoPipes())  # type: ignore[arg-type]
