"""Async frame writer for MADIe protocol."""

import logging

from ..protocol.frames import Frame
from .connection import TcpConnection

logger = logging.getLogger(__name__)


class FrameWriter:
    """Async writer for MADIe protocol frames."""

    def __init__(self, connection: TcpConnection):
        """
        Initialize frame writer.

        Args:
            connection: TCP connection to write to
        """
        self.connection = connection
        self._stats = {
            "frames_written": 0,
            "frames_failed": 0,
            "bytes_written": 0,
        }

    @property
    def stats(self) -> dict:
        """Get writer statistics."""
        return self._stats.copy()

    async def write_frame(self, frame: Frame) -> None:
        """
        Write a frame to the TCP connection.

        Args:
            frame: Frame to write

        Raises:
            TransportError: If the write fails
        """
        frame_bytes = frame.to_bytes()

        try:
            await self.connection.write(frame_bytes)
        except Exception:
            self._stats["frames_failed"] += 1
            raise

        self._stats["frames_written"] += 1
        self._stats["bytes_written"] += len(frame_bytes)
        logger.debug("Frame written: %s", frame)

    def reset_stats(self) -> None:
        """Reset writer statistics."""
        self._stats = {
            "frames_written": 0,
            "frames_failed": 0,
            "bytes_written": 0,
        }
