"""Shared test fixtures."""

import asyncio

import pytest

from madie_gateway.protocol.constants import HEADER_SIZE, Command
from madie_gateway.protocol.frames import Frame

ACK = Frame(command=Command.ACK).to_bytes()


class StubDevice:
    """In-process TCP server answering each request frame with a scripted reply.

    ``replies`` maps a request opcode to the raw bytes sent back; opcodes not
    listed get a bare ACK. A reply of None leaves the request unanswered.
    Opcodes in ``hangup_after`` close the connection after replying.
    """

    def __init__(self) -> None:
        self.replies: dict[int, bytes | None] = {}
        self.hangup_after: set[int] = set()
        self.requests: list[Frame] = []
        self.connections = 0
        self.port = 0
        self._server: asyncio.Server | None = None

    async def start(self) -> None:
        self._server = await asyncio.start_server(self._handle, "127.0.0.1", 0)
        self.port = self._server.sockets[0].getsockname()[1]

    async def stop(self) -> None:
        if self._server:
            self._server.close()
            await self._server.wait_closed()
            self._server = None

    @property
    def commands(self) -> list[int]:
        return [frame.command for frame in self.requests]

    async def _handle(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        self.connections += 1
        try:
            while True:
                header = await reader.readexactly(HEADER_SIZE)
                length = int.from_bytes(header[2:4], "little")
                body = await reader.readexactly(length)

                frame = Frame.from_bytes(header + body)
                self.requests.append(frame)

                reply = self.replies.get(frame.command, ACK)
                if reply is not None:
                    writer.write(reply)
                    await writer.drain()

                if frame.command in self.hangup_after:
                    break
        except (asyncio.IncompleteReadError, ConnectionError):
            pass
        finally:
            writer.close()


@pytest.fixture
async def stub_device():
    """Start a stub device on a free local port."""
    device = StubDevice()
    await device.start()
    yield device
    await device.stop()
