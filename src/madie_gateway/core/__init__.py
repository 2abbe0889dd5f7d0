"""Core application functionality."""

from .config import Settings, setup_logging
from .models import ChannelEntry, ChannelNamesResponse

__all__ = [
    "ChannelEntry",
    "ChannelNamesResponse",
    "Settings",
    "setup_logging",
]
