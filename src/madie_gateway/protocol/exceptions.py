"""
Exceptions raised by the MADIe protocol client.
"""

from .constants import command_name


class MadieError(Exception):
    """Base exception for MADIe protocol errors."""
    pass


class TransportError(MadieError):
    """Dial, write or read failure on the TCP stream."""
    pass


class ResponseTimeoutError(TransportError):
    """No complete response within the read deadline."""

    def __init__(self, timeout: float):
        self.timeout = timeout
        super().__init__(f"No response within {timeout}s")


class ProtocolShapeError(MadieError):
    """Response does not have the shape expected for the request."""
    pass


class BodyLengthError(ProtocolShapeError):
    """Declared body length differs from the expected body size."""

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Expected body length of {expected}, but got {actual}"
        )


class UnknownResponseError(ProtocolShapeError):
    """Response opcode is neither ACK nor NAK."""

    def __init__(self, command: int):
        self.command = command
        super().__init__(f"Unknown response {command_name(command)}")


class IntegrityError(MadieError):
    """Checksum invariant failed on a received frame."""

    def __init__(self, expected: int, received: int):
        self.expected = expected
        self.received = received
        super().__init__(
            f"Checksum mismatch: expected 0x{expected:08X}, received 0x{received:08X}"
        )


class DeviceRejectedError(MadieError):
    """Device answered NAK."""

    def __init__(self, request: int | None = None):
        self.request = request
        msg = "Received NAK"
        if request is not None:
            msg += f" for {command_name(request)}"
        super().__init__(msg)
