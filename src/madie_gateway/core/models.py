"""Data models for the MADIe gateway API."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from madie_gateway.protocol.channel_names import ChannelNameTable
from madie_gateway.protocol.constants import NUM_CHANNELS


class ChannelEntry(BaseModel):
    """Names of a single input channel."""

    channel: int = Field(..., ge=0, lt=NUM_CHANNELS, description="Channel index")
    line1: str = Field("", description="First name line (truncated to 8 bytes on the device)")
    line2: str = Field("", description="Second name line (truncated to 8 bytes on the device)")

    model_config = ConfigDict(
        json_schema_extra={"example": {"channel": 6, "line1": "HELLO", "line2": "NICK"}}
    )


def table_entries(table: ChannelNameTable) -> list[ChannelEntry]:
    """Flatten a channel name table into API entries."""
    return [
        ChannelEntry(channel=channel, line1=line1, line2=line2)
        for channel, (line1, line2) in enumerate(table)
    ]


# ============================================================================
# API Request/Response Models
# ============================================================================


class ChannelNamesResponse(BaseModel):
    """Response model for GET /api/channels."""

    timestamp: datetime = Field(default_factory=datetime.now, description="Time the table was read")
    channels: list[ChannelEntry] = Field(..., description="All channels in index order")


class ChannelNamesUpdateRequest(BaseModel):
    """Request model for PUT /api/channels."""

    channels: list[ChannelEntry] = Field(..., min_length=1, description="Channels to rename")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"channels": [{"channel": 6, "line1": "HELLO", "line2": "NICK"}]}
        }
    )


class ChannelNamesUpdateResponse(BaseModel):
    """Response model for a successful channel name update."""

    success: bool = Field(True, description="Operation success status")
    updated: list[ChannelEntry] = Field(..., description="Channels as written")
    timestamp: datetime = Field(default_factory=datetime.now, description="Operation timestamp")


class ResetResponse(BaseModel):
    """Response model for POST /api/reset."""

    success: bool = Field(True, description="Operation success status")
    timestamp: datetime = Field(default_factory=datetime.now, description="Operation timestamp")


class ErrorResponse(BaseModel):
    """Response model for errors."""

    success: bool = Field(False, description="Operation success status")
    error: str = Field(..., description="Error message")
    detail: str | None = Field(None, description="Additional error details")
    timestamp: datetime = Field(default_factory=datetime.now, description="Error timestamp")


class HealthResponse(BaseModel):
    """Response model for health check."""

    status: str = Field(..., description="Health status (healthy/unhealthy)")
    device: str | None = Field(None, description="Configured device address")
    disconnect_command: int | None = Field(None, description="DISCONNECT opcode in use")
