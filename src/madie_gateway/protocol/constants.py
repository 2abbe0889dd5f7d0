"""Protocol constants for MADIe TCP communication."""

from enum import IntEnum

# ============================================================================
# Frame Structure
# ============================================================================

HEADER_SIZE = 8  # CMD(2) + LEN(2) + CHECKSUM(4)
MAX_BODY_SIZE = 0xFFFF

# ============================================================================
# Command Codes
# ============================================================================


class Command(IntEnum):
    """Protocol command codes."""

    NOP = 0x0000
    ACK = 0x0006
    RESET_UNIT = 0x000A
    NAK = 0x0015
    DISCONNECT = 0x0017
    GET_CHANNEL_NAMES = 0x1000
    SET_CHANNEL_NAMES = 0x1001

    # Older firmware closes the session with this opcode instead
    LEGACY_DISCONNECT = 0x0004


def command_name(command: int) -> str:
    """Readable name for an opcode, including ones outside the enum."""
    try:
        return Command(command).name
    except ValueError:
        return f"0x{command:04X}"


# ============================================================================
# Channel Name Table
# ============================================================================

NUM_CHANNELS = 64
NUM_LINES = 2
NAME_LENGTH = 8
NAME_FIELD_SIZE = NAME_LENGTH + 1  # content + terminator
RESERVED_SIZE = 3
RECORD_SIZE = NAME_FIELD_SIZE + RESERVED_SIZE
CHANNEL_TABLE_SIZE = NUM_CHANNELS * NUM_LINES * RECORD_SIZE  # 1536

# ============================================================================
# Communication Settings
# ============================================================================

DEFAULT_PORT = 9760
RESPONSE_TIMEOUT = 3.0  # Response read deadline (seconds)
CONNECT_TIMEOUT = 5.0  # TCP dial timeout (seconds)
