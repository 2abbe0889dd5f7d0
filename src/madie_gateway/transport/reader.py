"""Async frame reader for MADIe protocol."""

import logging

from madie_gateway.protocol.constants import HEADER_SIZE
from madie_gateway.protocol.frames import FrameHeader
from madie_gateway.transport.connection import TcpConnection

logger = logging.getLogger(__name__)


class FrameReader:
    """Reads frame headers and bodies from a TCP connection.

    The stream carries no frame markers, so a header is always the next
    8 bytes and a body is exactly the length the header declared.
    """

    def __init__(self, connection: TcpConnection):
        """
        Initialize frame reader.

        Args:
            connection: TCP connection to read from
        """
        self.connection = connection
        self._stats = {
            "headers_read": 0,
            "bodies_read": 0,
            "bytes_read": 0,
        }

    @property
    def stats(self) -> dict:
        """Get reader statistics."""
        return self._stats.copy()

    async def read_header(self) -> FrameHeader:
        """
        Read and decode the next frame header.

        Raises:
            TransportError: If the stream ends or errors
        """
        data = await self.connection.read(HEADER_SIZE)
        self._stats["headers_read"] += 1
        self._stats["bytes_read"] += len(data)

        header = FrameHeader.from_bytes(data)
        logger.debug("Header read: %s", data.hex())
        return header

    async def read_body(self, length: int) -> bytes:
        """
        Read a body of the given length.

        Args:
            length: Body length from the header

        Raises:
            TransportError: If the stream ends or errors
        """
        if length == 0:
            return b""

        data = await self.connection.read(length)
        self._stats["bodies_read"] += 1
        self._stats["bytes_read"] += len(data)
        logger.debug("Body read: %d bytes", len(data))
        return data

    def reset_stats(self) -> None:
        """Reset reader statistics."""
        self._stats = {
            "headers_read": 0,
            "bodies_read": 0,
            "bytes_read": 0,
        }
