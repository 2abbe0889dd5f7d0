"""TCP communication layer."""

from .connection import TcpConnection
from .reader import FrameReader
from .writer import FrameWriter

__all__ = ["TcpConnection", "FrameReader", "FrameWriter"]
