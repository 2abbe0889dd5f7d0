"""Byte-sum checksum for MADIe protocol frames."""

CHECKSUM_MASK = 0xFFFFFFFF


def calculate_checksum(data: bytes) -> int:
    """
    Calculate the frame checksum.

    The checksum is the two's-complement negation of the 32-bit byte sum,
    so adding it back to the sum gives zero.

    Args:
        data: Bytes to calculate the checksum over

    Returns:
        32-bit checksum value

    Example:
        >>> hex(calculate_checksum(b'\\x00\\x10\\x00\\x00'))
        '0xfffffff0'
    """
    return -sum(data) & CHECKSUM_MASK


def verify_checksum(data: bytes, checksum: int) -> bool:
    """
    Verify a checksum against the bytes it covers.

    Args:
        data: Command, length and body bytes (checksum field excluded)
        checksum: Received checksum value

    Returns:
        True if the byte sum plus checksum is zero modulo 2**32
    """
    return (sum(data) + checksum) & CHECKSUM_MASK == 0
