"""Body layouts carried by each MADIe command."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from .channel_names import ChannelNameTable, decode_channel_names, encode_channel_names
from .constants import CHANNEL_TABLE_SIZE, Command


@dataclass(frozen=True)
class BodyLayout:
    """Fixed-size body type with its encoder and decoder."""

    name: str
    size: int
    encode: Callable[[Any], bytes]
    decode: Callable[[bytes], Any]


CHANNEL_NAMES_BODY = BodyLayout(
    name="channel_names",
    size=CHANNEL_TABLE_SIZE,
    encode=encode_channel_names,
    decode=decode_channel_names,
)

# Commands missing from these maps are bodiless in that direction
REQUEST_BODIES: dict[Command, BodyLayout] = {
    Command.SET_CHANNEL_NAMES: CHANNEL_NAMES_BODY,
}

RESPONSE_BODIES: dict[Command, BodyLayout] = {
    Command.GET_CHANNEL_NAMES: CHANNEL_NAMES_BODY,
}


def encode_body(command: int, body: Any) -> bytes:
    """
    Encode a request body according to the command's layout.

    Args:
        command: Request opcode
        body: Logical body value, or None for bodiless commands

    Returns:
        Encoded body bytes (empty when body is None)

    Raises:
        ValueError: If the command does not carry a request body

    Example:
        >>> len(encode_body(Command.SET_CHANNEL_NAMES, ChannelNameTable()))
        1536
    """
    if body is None:
        return b""

    layout = REQUEST_BODIES.get(command)
    if layout is None:
        raise ValueError(f"Command 0x{command:04X} does not carry a request body")

    data = layout.encode(body)
    if len(data) != layout.size:
        raise ValueError(f"Encoded {layout.name} is {len(data)} bytes, expected {layout.size}")
    return data
