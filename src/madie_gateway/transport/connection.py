"""TCP connection management."""

import asyncio
import logging

from madie_gateway.protocol.constants import CONNECT_TIMEOUT, DEFAULT_PORT
from madie_gateway.protocol.exceptions import TransportError

logger = logging.getLogger(__name__)


class TcpConnection:
    """Owns one TCP stream to one device.

    A connection is used by a single task at a time; frames written from
    two tasks would interleave on the stream.
    """

    def __init__(
        self,
        host: str,
        port: int = DEFAULT_PORT,
        connect_timeout: float = CONNECT_TIMEOUT,
    ):
        """
        Initialize TCP connection manager.

        Args:
            host: Device host name or address
            port: Device TCP port (default: 9760)
            connect_timeout: Dial timeout in seconds
        """
        self.host = host
        self.port = port
        self.connect_timeout = connect_timeout

        self._reader: asyncio.StreamReader | None = None
        self._writer: asyncio.StreamWriter | None = None
        self._connected = False
        self._lock = asyncio.Lock()

    @property
    def address(self) -> str:
        return f"{self.host}:{self.port}"

    @property
    def connected(self) -> bool:
        """Check if currently connected."""
        return self._connected and self._writer is not None and not self._writer.is_closing()

    async def connect(self) -> None:
        """
        Dial the device.

        Raises:
            TransportError: If the connection cannot be established
        """
        async with self._lock:
            if self.connected:
                logger.debug("Already connected to %s", self.address)
                return

            logger.info("Connecting to %s", self.address)

            try:
                self._reader, self._writer = await asyncio.wait_for(
                    asyncio.open_connection(self.host, self.port),
                    timeout=self.connect_timeout,
                )
            except TimeoutError as e:
                logger.error("Timed out connecting to %s", self.address)
                raise TransportError(f"Timed out connecting to {self.address}") from e
            except OSError as e:
                logger.error("Failed to connect to %s: %s", self.address, e)
                raise TransportError(f"Failed to connect to {self.address}: {e}") from e

            self._connected = True
            logger.info("Connected to %s", self.address)

    async def disconnect(self) -> None:
        """Close the TCP stream, including one already broken by a failed read or write."""
        async with self._lock:
            if self._writer is None:
                return

            logger.info("Disconnecting from %s", self.address)

            try:
                self._writer.close()
                await self._writer.wait_closed()
            except OSError as e:
                logger.error("Error closing connection: %s", e)

            self._reader = None
            self._writer = None
            self._connected = False

    async def read(self, n: int) -> bytes:
        """
        Read exactly n bytes.

        Args:
            n: Number of bytes to read

        Returns:
            Bytes read from the stream

        Raises:
            TransportError: If not connected, the stream ends early or errors
        """
        if not self.connected or not self._reader:
            raise TransportError(f"Not connected to {self.address}")

        try:
            return await self._reader.readexactly(n)

        except asyncio.IncompleteReadError as e:
            logger.error("Incomplete read: got %d bytes, expected %d", len(e.partial), n)
            self._connected = False
            raise TransportError(f"Connection closed after {len(e.partial)} of {n} bytes") from e
        except OSError as e:
            logger.error("Read error: %s", e)
            self._connected = False
            raise TransportError(f"Read failed: {e}") from e

    async def write(self, data: bytes) -> None:
        """
        Write bytes to the stream.

        Args:
            data: Bytes to write

        Raises:
            TransportError: If not connected or the write fails
        """
        if not self.connected or not self._writer:
            raise TransportError(f"Not connected to {self.address}")

        try:
            self._writer.write(data)
            await self._writer.drain()

        except OSError as e:
            logger.error("Write error: %s", e)
            self._connected = False
            raise TransportError(f"Write failed: {e}") from e

    async def __aenter__(self):
        """Async context manager entry."""
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.disconnect()

    def __repr__(self) -> str:
        status = "connected" if self.connected else "closed"
        return f"TcpConnection({self.address}, {status})"
