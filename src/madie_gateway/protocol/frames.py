"""Frame construction and parsing for MADIe protocol."""

import struct
from dataclasses import dataclass

from .checksum import calculate_checksum, verify_checksum
from .constants import HEADER_SIZE, MAX_BODY_SIZE, command_name
from .exceptions import BodyLengthError, IntegrityError

HEADER_FORMAT = "<HHI"


@dataclass(frozen=True)
class FrameHeader:
    """Decoded 8-byte frame header."""

    command: int
    length: int
    checksum: int

    @classmethod
    def from_bytes(cls, data: bytes) -> "FrameHeader":
        """
        Decode a header without validating it.

        Raises:
            ValueError: If data is not exactly 8 bytes
        """
        if len(data) != HEADER_SIZE:
            raise ValueError(f"Header must be {HEADER_SIZE} bytes, got {len(data)}")
        command, length, checksum = struct.unpack(HEADER_FORMAT, data)
        return cls(command=command, length=length, checksum=checksum)

    @property
    def summed_bytes(self) -> bytes:
        """Command and length bytes, the header part covered by the checksum."""
        return struct.pack("<HH", self.command, self.length)

    def verify(self, body: bytes) -> None:
        """
        Check the checksum invariant for this header and a body.

        Raises:
            IntegrityError: If the checksum does not match
        """
        data = self.summed_bytes + body
        if not verify_checksum(data, self.checksum):
            raise IntegrityError(expected=calculate_checksum(data), received=self.checksum)


class Frame:
    """
    Represents a MADIe protocol frame.

    Attributes:
        command: Command opcode (16-bit)
        body: Body payload
    """

    def __init__(self, command: int, body: bytes = b""):
        """
        Initialize a frame.

        Args:
            command: Command opcode (0-65535)
            body: Optional body payload (at most 65535 bytes)
        """
        if not 0 <= command <= 0xFFFF:
            raise ValueError(f"Command must fit in 16 bits, got {command}")
        if len(body) > MAX_BODY_SIZE:
            raise ValueError(f"Body exceeds maximum size ({MAX_BODY_SIZE})")
        self.command = command
        self.body = bytes(body)

    @property
    def length(self) -> int:
        return len(self.body)

    def to_bytes(self) -> bytes:
        """
        Convert frame to bytes for transmission.

        Frame structure:
        [CMD_L][CMD_H][LEN_L][LEN_H][SUM_0][SUM_1][SUM_2][SUM_3][BODY...]

        The checksum is computed over the whole buffer while the checksum
        field still holds zero.

        Returns:
            Complete frame as bytes

        Example:
            >>> Frame(command=0x000A).to_bytes().hex()
            '0a000000f6ffffff'
        """
        frame = bytearray(struct.pack(HEADER_FORMAT, self.command, self.length, 0))
        frame.extend(self.body)

        struct.pack_into("<I", frame, 4, calculate_checksum(frame))

        return bytes(frame)

    @classmethod
    def from_bytes(cls, data: bytes) -> "Frame":
        """
        Parse a complete frame from received bytes.

        Args:
            data: Raw frame bytes (header and body)

        Returns:
            Parsed Frame object

        Raises:
            ValueError: If data is shorter than a header
            BodyLengthError: If the body size differs from the header length
            IntegrityError: If the checksum does not match
        """
        if len(data) < HEADER_SIZE:
            raise ValueError(f"Frame too short: {len(data)} bytes")

        header = FrameHeader.from_bytes(data[:HEADER_SIZE])
        body = bytes(data[HEADER_SIZE:])

        if len(body) != header.length:
            raise BodyLengthError(expected=header.length, actual=len(body))

        header.verify(body)

        return cls(command=header.command, body=body)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Frame):
            return NotImplemented
        return self.command == other.command and self.body == other.body

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"Frame(cmd={command_name(self.command)}, body_len={self.length})"
