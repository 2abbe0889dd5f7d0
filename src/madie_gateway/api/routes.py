"""API route handlers."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Path

from madie_gateway.api.dependencies import get_client
from madie_gateway.core.models import (
    ChannelEntry,
    ChannelNamesResponse,
    ChannelNamesUpdateRequest,
    ChannelNamesUpdateResponse,
    ErrorResponse,
    ResetResponse,
    table_entries,
)
from madie_gateway.protocol.constants import NUM_CHANNELS
from madie_gateway.protocol.device import MadieClient
from madie_gateway.protocol.exceptions import (
    DeviceRejectedError,
    IntegrityError,
    MadieError,
    ProtocolShapeError,
    ResponseTimeoutError,
    TransportError,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")

DEVICE_ERRORS = {
    409: {"model": ErrorResponse},
    502: {"model": ErrorResponse},
    503: {"model": ErrorResponse},
    504: {"model": ErrorResponse},
}


def device_error(e: MadieError) -> HTTPException:
    """Map a protocol error onto an HTTP error response."""
    if isinstance(e, DeviceRejectedError):
        status = 409
    elif isinstance(e, ResponseTimeoutError):
        status = 504
    elif isinstance(e, TransportError):
        status = 503
    elif isinstance(e, (ProtocolShapeError, IntegrityError)):
        status = 502
    else:
        status = 500

    logger.error("Device operation failed: %s", e)
    return HTTPException(status_code=status, detail=str(e))


@router.get("/channels", response_model=ChannelNamesResponse, responses=DEVICE_ERRORS)
async def get_channels(client: MadieClient = Depends(get_client)):
    """Read all channel names from the device."""
    try:
        table = await client.get_channel_names()
    except MadieError as e:
        raise device_error(e) from None

    return ChannelNamesResponse(channels=table_entries(table))


@router.get("/channels/{channel}", response_model=ChannelEntry, responses=DEVICE_ERRORS)
async def get_channel(
    channel: int = Path(..., ge=0, lt=NUM_CHANNELS),
    client: MadieClient = Depends(get_client),
):
    """Read the names of one channel."""
    try:
        table = await client.get_channel_names()
    except MadieError as e:
        raise device_error(e) from None

    line1, line2 = table.get_channel_name(channel)
    return ChannelEntry(channel=channel, line1=line1, line2=line2)


@router.put("/channels", response_model=ChannelNamesUpdateResponse, responses=DEVICE_ERRORS)
async def update_channels(
    request: ChannelNamesUpdateRequest,
    client: MadieClient = Depends(get_client),
):
    """Rename channels; channels not listed keep their current names."""
    updates = {entry.channel: (entry.line1, entry.line2) for entry in request.channels}

    try:
        table = await client.update_channel_names(updates)
    except MadieError as e:
        raise device_error(e) from None

    written = [
        ChannelEntry(channel=channel, line1=table[channel][0], line2=table[channel][1])
        for channel in sorted(updates)
    ]
    return ChannelNamesUpdateResponse(updated=written)


@router.post("/reset", response_model=ResetResponse, responses=DEVICE_ERRORS)
async def reset_unit(client: MadieClient = Depends(get_client)):
    """Reset the unit."""
    try:
        await client.reset()
    except MadieError as e:
        raise device_error(e) from None

    return ResetResponse()
