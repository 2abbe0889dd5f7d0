"""Device operations built on the command/response engine.

Every operation closes the device session with DISCONNECT once its
command has been acknowledged. A failed step aborts the operation and
nothing sent before it is undone.
"""

import logging
from collections.abc import AsyncIterator, Mapping
from contextlib import asynccontextmanager

from madie_gateway.core.config import Settings
from madie_gateway.protocol.channel_names import ChannelName, ChannelNameTable
from madie_gateway.protocol.constants import (
    CONNECT_TIMEOUT,
    DEFAULT_PORT,
    RESPONSE_TIMEOUT,
    Command,
)
from madie_gateway.protocol.handler import ProtocolHandler
from madie_gateway.transport.connection import TcpConnection

logger = logging.getLogger(__name__)


class MadieDevice:
    """Reset, read names and write names over an open connection."""

    def __init__(self, handler: ProtocolHandler, disconnect_command: int = Command.DISCONNECT):
        self.handler = handler
        self.disconnect_command = disconnect_command

    async def _disconnect(self) -> None:
        await self.handler.send_and_receive(self.disconnect_command)

    async def reset(self) -> None:
        """Reset the unit and end the session."""
        await self.handler.send_and_receive(Command.RESET_UNIT)
        await self._disconnect()
        logger.info("Unit reset requested")

    async def get_channel_names(self) -> ChannelNameTable:
        """Read the channel name table and end the session."""
        table = await self.handler.send_and_receive(Command.GET_CHANNEL_NAMES)
        await self._disconnect()
        logger.info("Read channel names: %r", table)
        return table

    async def set_channel_names(self, table: ChannelNameTable) -> None:
        """Write the channel name table and end the session."""
        await self.handler.send_and_receive(Command.SET_CHANNEL_NAMES, table)
        await self._disconnect()
        logger.info("Wrote channel names: %r", table)


class MadieClient:
    """Runs each device operation on its own connection.

    Usage::

        client = MadieClient("10.0.0.20")
        table = await client.get_channel_names()
        table.set_channel_name(6, "HELLO", "NICK")
        await client.set_channel_names(table)
    """

    def __init__(
        self,
        host: str,
        port: int = DEFAULT_PORT,
        response_timeout: float = RESPONSE_TIMEOUT,
        connect_timeout: float = CONNECT_TIMEOUT,
        disconnect_command: int = Command.DISCONNECT,
    ):
        self.host = host
        self.port = port
        self.response_timeout = response_timeout
        self.connect_timeout = connect_timeout
        self.disconnect_command = disconnect_command

    @classmethod
    def from_settings(cls, settings: Settings) -> "MadieClient":
        return cls(
            host=settings.device_host,
            port=settings.device_port,
            response_timeout=settings.response_timeout,
            connect_timeout=settings.connect_timeout,
            disconnect_command=settings.disconnect_command,
        )

    @property
    def address(self) -> str:
        return f"{self.host}:{self.port}"

    @asynccontextmanager
    async def session(self) -> AsyncIterator[MadieDevice]:
        """Dial the device and yield a MadieDevice; the connection is closed on exit."""
        connection = TcpConnection(self.host, self.port, connect_timeout=self.connect_timeout)
        async with connection:
            handler = ProtocolHandler(connection, response_timeout=self.response_timeout)
            yield MadieDevice(handler, disconnect_command=self.disconnect_command)

    async def get_channel_names(self) -> ChannelNameTable:
        async with self.session() as device:
            return await device.get_channel_names()

    async def set_channel_names(self, table: ChannelNameTable) -> None:
        async with self.session() as device:
            await device.set_channel_names(table)

    async def reset(self) -> None:
        async with self.session() as device:
            await device.reset()

    async def update_channel_names(self, updates: Mapping[int, ChannelName]) -> ChannelNameTable:
        """
        Read the table, apply updates and write it back.

        Args:
            updates: New ``(line1, line2)`` keyed by channel index

        Returns:
            The table as written

        Raises:
            IndexError: If a channel index is out of range (nothing is written)
        """
        table = await self.get_channel_names()
        for channel, (line1, line2) in updates.items():
            table.set_channel_name(channel, line1, line2)
        await self.set_channel_names(table)
        return table
