"""MADIe TCP protocol implementation."""

from madie_gateway.protocol.channel_names import (
    ChannelNameTable,
    decode_channel_names,
    encode_channel_names,
)
from madie_gateway.protocol.checksum import calculate_checksum, verify_checksum
from madie_gateway.protocol.codec import CHANNEL_NAMES_BODY, BodyLayout, encode_body
from madie_gateway.protocol.constants import CHANNEL_TABLE_SIZE, DEFAULT_PORT, HEADER_SIZE, Command
from madie_gateway.protocol.exceptions import (
    BodyLengthError,
    DeviceRejectedError,
    IntegrityError,
    MadieError,
    ProtocolShapeError,
    ResponseTimeoutError,
    TransportError,
    UnknownResponseError,
)
from madie_gateway.protocol.frames import Frame, FrameHeader

# Handler and device imported lazily to avoid a circular import with transport
# (transport.connection -> protocol.constants -> protocol.__init__ -> handler -> transport)

_LAZY = {
    "ProtocolHandler": "madie_gateway.protocol.handler",
    "MadieDevice": "madie_gateway.protocol.device",
    "MadieClient": "madie_gateway.protocol.device",
}


def __getattr__(name: str):
    if name in _LAZY:
        import importlib

        return getattr(importlib.import_module(_LAZY[name]), name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "BodyLayout",
    "BodyLengthError",
    "CHANNEL_NAMES_BODY",
    "CHANNEL_TABLE_SIZE",
    "ChannelNameTable",
    "Command",
    "DEFAULT_PORT",
    "DeviceRejectedError",
    "Frame",
    "FrameHeader",
    "HEADER_SIZE",
    "IntegrityError",
    "MadieClient",
    "MadieDevice",
    "MadieError",
    "ProtocolHandler",
    "ProtocolShapeError",
    "ResponseTimeoutError",
    "TransportError",
    "UnknownResponseError",
    "calculate_checksum",
    "decode_channel_names",
    "encode_body",
    "encode_channel_names",
    "verify_checksum",
]
