"""Channel name table and its fixed-width wire encoding.

Wire layout, repeated for 64 channels x 2 lines::

    +-------------------+------------+----------+
    | Name              | Terminator | Reserved |
    | 8 bytes, 0-padded | 1 byte     | 3 bytes  |
    +-------------------+------------+----------+

The table body is 64 * 2 * 12 = 1536 bytes.
"""

from collections.abc import Iterable, Iterator

from .constants import (
    CHANNEL_TABLE_SIZE,
    NAME_FIELD_SIZE,
    NAME_LENGTH,
    NUM_CHANNELS,
    NUM_LINES,
    RECORD_SIZE,
)

ChannelName = tuple[str, str]


class ChannelNameTable:
    """Two lines of naming text for each of the 64 input channels.

    Channel identity is its position; entries are ``(line1, line2)`` pairs.
    Lines longer than 8 bytes are kept as given and truncated on encode.
    """

    def __init__(self, names: Iterable[ChannelName] | None = None):
        if names is None:
            self._names = [("", "")] * NUM_CHANNELS
            return

        entries = []
        for entry in names:
            entry = tuple(entry)
            if len(entry) != NUM_LINES or not all(isinstance(line, str) for line in entry):
                raise ValueError(f"Channel entry must be a pair of strings, got {entry!r}")
            entries.append(entry)

        if len(entries) != NUM_CHANNELS:
            raise ValueError(f"Expected {NUM_CHANNELS} channels, got {len(entries)}")
        self._names = entries

    @staticmethod
    def _check_channel(channel: int) -> None:
        if not 0 <= channel < NUM_CHANNELS:
            raise IndexError(f"Channel must be 0-{NUM_CHANNELS - 1}, got {channel}")

    def get_channel_name(self, channel: int) -> ChannelName:
        """Return ``(line1, line2)`` for a channel."""
        self._check_channel(channel)
        return self._names[channel]

    def set_channel_name(self, channel: int, line1: str, line2: str) -> None:
        """Replace both lines of a channel."""
        self._check_channel(channel)
        self._names[channel] = (line1, line2)

    def copy(self) -> "ChannelNameTable":
        return ChannelNameTable(self._names)

    def __getitem__(self, channel: int) -> ChannelName:
        return self.get_channel_name(channel)

    def __iter__(self) -> Iterator[ChannelName]:
        return iter(self._names)

    def __len__(self) -> int:
        return len(self._names)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ChannelNameTable):
            return NotImplemented
        return self._names == other._names

    def __repr__(self) -> str:
        named = sum(1 for line1, line2 in self._names if line1 or line2)
        return f"ChannelNameTable(named={named}/{NUM_CHANNELS})"


def encode_line(text: str) -> bytes:
    """Encode one line into its 12-byte record.

    At most the first 8 bytes are kept; the rest of the record is zero.
    """
    content = text.encode("ascii", errors="replace")[:NAME_LENGTH]
    return content.ljust(RECORD_SIZE, b"\x00")


def decode_line(record: bytes) -> str:
    """Decode one 12-byte record.

    The name ends at the first zero in the 9-byte name field. A field
    without a zero byte is clamped to 8 bytes and the terminator slot is
    ignored. Reserved bytes are never read.
    """
    field = record[:NAME_FIELD_SIZE]
    end = field.find(b"\x00")
    if end == -1:
        end = NAME_LENGTH
    return field[:end].decode("ascii", errors="replace")


def encode_channel_names(table: ChannelNameTable) -> bytes:
    """
    Encode a channel name table into the 1536-byte wire body.

    Args:
        table: Table to encode

    Returns:
        Raw table bytes
    """
    body = bytearray()
    for line1, line2 in table:
        body.extend(encode_line(line1))
        body.extend(encode_line(line2))
    return bytes(body)


def decode_channel_names(data: bytes) -> ChannelNameTable:
    """
    Decode the 1536-byte wire body into a channel name table.

    Args:
        data: Raw table bytes

    Returns:
        Decoded table

    Raises:
        ValueError: If data is not exactly 1536 bytes
    """
    if len(data) != CHANNEL_TABLE_SIZE:
        raise ValueError(f"Channel table must be {CHANNEL_TABLE_SIZE} bytes, got {len(data)}")

    names = []
    for channel in range(NUM_CHANNELS):
        offset = channel * NUM_LINES * RECORD_SIZE
        line1 = decode_line(data[offset : offset + RECORD_SIZE])
        line2 = decode_line(data[offset + RECORD_SIZE : offset + 2 * RECORD_SIZE])
        names.append((line1, line2))

    return ChannelNameTable(names)
