"""Command/response engine for MADIe TCP communication.

Drives a single request/response exchange at a time over one
connection: write a frame, wait for the reply header, check it against
the body layout expected for the request, read and verify the body.
"""

import asyncio
import logging
from typing import Any

from madie_gateway.protocol.codec import RESPONSE_BODIES, BodyLayout, encode_body
from madie_gateway.protocol.constants import RESPONSE_TIMEOUT, Command, command_name
from madie_gateway.protocol.exceptions import (
    BodyLengthError,
    DeviceRejectedError,
    ResponseTimeoutError,
    UnknownResponseError,
)
from madie_gateway.protocol.frames import Frame
from madie_gateway.transport.connection import TcpConnection
from madie_gateway.transport.reader import FrameReader
from madie_gateway.transport.writer import FrameWriter

logger = logging.getLogger(__name__)


class ProtocolHandler:
    """Sends commands and correlates their ACK/NAK responses."""

    def __init__(
        self,
        connection: TcpConnection,
        response_timeout: float = RESPONSE_TIMEOUT,
    ):
        """
        Initialize protocol handler.

        Args:
            connection: Open TCP connection, owned by the caller
            response_timeout: Deadline for a complete response in seconds
        """
        self.connection = connection
        self.response_timeout = response_timeout
        self.reader = FrameReader(connection)
        self.writer = FrameWriter(connection)

    @property
    def connected(self) -> bool:
        return self.connection.connected

    async def send_message(self, command: int, payload: bytes = b"") -> None:
        """
        Build a frame and write it without waiting for a reply.

        Args:
            command: Command opcode
            payload: Encoded body bytes

        Raises:
            TransportError: If the write fails
        """
        frame = Frame(command=command, body=payload)
        logger.debug("Sending %s", frame)
        await self.writer.write_frame(frame)

    async def receive_message(
        self,
        expected: BodyLayout | None = None,
        request: int | None = None,
    ) -> Any:
        """
        Wait for one response and validate it.

        Args:
            expected: Body layout the ACK must carry, None for a bodiless ACK
            request: Opcode of the request being answered, for error context

        Returns:
            Decoded body, or None when no layout was expected

        Raises:
            ResponseTimeoutError: If the response does not complete in time
            TransportError: If the stream ends or errors
            BodyLengthError: If the ACK body length is not the expected size
            IntegrityError: If the checksum does not match
            DeviceRejectedError: If the device answered NAK
            UnknownResponseError: If the response is neither ACK nor NAK
        """
        try:
            return await asyncio.wait_for(
                self._receive(expected, request),
                timeout=self.response_timeout,
            )
        except TimeoutError as e:
            logger.warning("No response within %ss", self.response_timeout)
            raise ResponseTimeoutError(self.response_timeout) from e

    async def _receive(self, expected: BodyLayout | None, request: int | None) -> Any:
        header = await self.reader.read_header()

        if header.command == Command.ACK:
            expected_size = expected.size if expected else 0
            if header.length != expected_size:
                raise BodyLengthError(expected=expected_size, actual=header.length)

            body = await self.reader.read_body(header.length)
            header.verify(body)

            logger.debug("ACK received (%d body bytes)", header.length)
            if expected is None:
                return None
            return expected.decode(body)

        if header.command == Command.NAK:
            raise DeviceRejectedError(request)

        raise UnknownResponseError(header.command)

    async def send_and_receive(self, command: int, body: Any = None) -> Any:
        """
        Perform one request/response exchange.

        The request body is encoded and the response body decoded using the
        layouts registered for the command.

        Args:
            command: Command opcode
            body: Logical request body, None for bodiless commands

        Returns:
            Decoded response body, or None for commands without one
        """
        payload = encode_body(command, body)
        await self.send_message(command, payload)
        result = await self.receive_message(RESPONSE_BODIES.get(command), request=command)
        logger.debug("%s acknowledged", command_name(command))
        return result
