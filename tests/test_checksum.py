"""Unit tests for the frame checksum."""

from madie_gateway.protocol.checksum import calculate_checksum, verify_checksum


def test_checksum_empty_data():
    """Test checksum of empty data is zero."""
    assert calculate_checksum(b"") == 0


def test_checksum_is_negated_sum():
    """Test checksum is the two's-complement of the byte sum."""
    assert calculate_checksum(b"\x01") == 0xFFFFFFFF
    assert calculate_checksum(b"\x0a\x00\x00\x00") == 0xFFFFFFF6


def test_checksum_wraps_at_32_bits():
    """Test sums are taken modulo 2**32."""
    data = b"\xff" * 1536
    expected = (2**32 - 0xFF * 1536) % 2**32
    assert calculate_checksum(data) == expected


def test_checksum_range():
    """Test that the checksum is always 32-bit."""
    for i in range(256):
        result = calculate_checksum(bytes([i, i, i]))
        assert 0 <= result <= 0xFFFFFFFF


def test_verify_checksum_valid():
    """Test verification with the matching checksum."""
    data = b"\x00\x10\x00\x00"
    assert verify_checksum(data, calculate_checksum(data)) is True


def test_verify_checksum_invalid():
    """Test verification with a wrong checksum."""
    data = b"\x00\x10\x00\x00"
    assert verify_checksum(data, calculate_checksum(data) + 1) is False


def test_verify_checksum_order_independent():
    """Test the byte sum ignores byte order."""
    checksum = calculate_checksum(b"\x01\x02\x03")
    assert verify_checksum(b"\x03\x02\x01", checksum) is True
