"""Unit tests for API endpoints."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from madie_gateway.api.dependencies import app_state
from madie_gateway.main import app
from madie_gateway.protocol.channel_names import ChannelNameTable
from madie_gateway.protocol.constants import Command
from madie_gateway.protocol.device import MadieClient
from madie_gateway.protocol.exceptions import (
    BodyLengthError,
    DeviceRejectedError,
    IntegrityError,
    ResponseTimeoutError,
    TransportError,
    UnknownResponseError,
)


@pytest.fixture
def client():
    """Create test client; lifespan builds the real device client."""
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c


@pytest.fixture
def device(client):
    """Replace the device client created by the lifespan with a mock."""
    orig_client = app_state.client

    mock = MagicMock(spec=MadieClient)
    mock.address = "10.0.0.20:9760"
    mock.disconnect_command = Command.DISCONNECT
    mock.get_channel_names = AsyncMock()
    mock.update_channel_names = AsyncMock()
    mock.reset = AsyncMock()
    app_state.client = mock

    yield mock

    app_state.client = orig_client


@pytest.fixture
def table():
    table = ChannelNameTable()
    table.set_channel_name(6, "HELLO", "NICK")
    return table


class TestRootEndpoint:
    """Tests for GET / endpoint."""

    def test_root(self, client):
        """Test root endpoint returns app info."""
        response = client.get("/")

        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "MADIe Gateway"
        assert "version" in data
        assert data["status"] == "running"


class TestHealthEndpoint:
    """Tests for GET /health endpoint."""

    def test_health_configured(self, client, device):
        """Test health reports the configured device."""
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["device"] == "10.0.0.20:9760"
        assert data["disconnect_command"] == 0x0017

    def test_health_not_initialized(self, client, device):
        """Test health when no device client exists."""
        app_state.client = None

        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "unhealthy"


class TestGetChannels:
    """Tests for GET /api/channels endpoints."""

    def test_get_all(self, client, device, table):
        """Test all 64 channels are returned in order."""
        device.get_channel_names.return_value = table

        response = client.get("/api/channels")

        assert response.status_code == 200
        channels = response.json()["channels"]
        assert len(channels) == 64
        assert channels[6] == {"channel": 6, "line1": "HELLO", "line2": "NICK"}
        assert channels[0] == {"channel": 0, "line1": "", "line2": ""}

    def test_get_one(self, client, device, table):
        """Test a single channel is returned."""
        device.get_channel_names.return_value = table

        response = client.get("/api/channels/6")

        assert response.status_code == 200
        assert response.json() == {"channel": 6, "line1": "HELLO", "line2": "NICK"}

    def test_get_one_out_of_range(self, client, device):
        """Test channel indices outside 0-63 are rejected before dialing."""
        response = client.get("/api/channels/64")

        assert response.status_code == 422
        device.get_channel_names.assert_not_called()


class TestUpdateChannels:
    """Tests for PUT /api/channels endpoint."""

    def test_update(self, client, device, table):
        """Test updates are passed through and echoed back."""
        device.update_channel_names.return_value = table

        response = client.put(
            "/api/channels",
            json={"channels": [{"channel": 6, "line1": "HELLO", "line2": "NICK"}]},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["updated"] == [{"channel": 6, "line1": "HELLO", "line2": "NICK"}]
        device.update_channel_names.assert_awaited_once_with({6: ("HELLO", "NICK")})

    def test_update_line2_defaults_to_blank(self, client, device):
        """Test an entry without line2 clears the second line."""
        written = ChannelNameTable()
        written.set_channel_name(3, "OVERHEADS", "")
        device.update_channel_names.return_value = written

        response = client.put("/api/channels", json={"channels": [{"channel": 3, "line1": "OVERHEADS"}]})

        assert response.status_code == 200
        assert response.json()["updated"][0]["line1"] == "OVERHEADS"
        device.update_channel_names.assert_awaited_once_with({3: ("OVERHEADS", "")})

    def test_update_invalid_channel(self, client, device):
        """Test out-of-range channels fail validation."""
        response = client.put("/api/channels", json={"channels": [{"channel": 64, "line1": "X"}]})

        assert response.status_code == 422
        device.update_channel_names.assert_not_called()

    def test_update_empty(self, client, device):
        """Test an empty update list is rejected."""
        response = client.put("/api/channels", json={"channels": []})

        assert response.status_code == 422


class TestReset:
    """Tests for POST /api/reset endpoint."""

    def test_reset(self, client, device):
        """Test a successful reset."""
        response = client.post("/api/reset")

        assert response.status_code == 200
        assert response.json()["success"] is True
        device.reset.assert_awaited_once()


class TestErrorMapping:
    """Tests for protocol error to HTTP status mapping."""

    @pytest.mark.parametrize(
        "error, status",
        [
            (DeviceRejectedError(Command.GET_CHANNEL_NAMES), 409),
            (ResponseTimeoutError(3.0), 504),
            (TransportError("Failed to connect"), 503),
            (BodyLengthError(1536, 12), 502),
            (UnknownResponseError(0x1234), 502),
            (IntegrityError(0, 1), 502),
        ],
    )
    def test_get_errors(self, client, device, error, status):
        """Test each error class maps to its status code."""
        device.get_channel_names.side_effect = error

        response = client.get("/api/channels")

        assert response.status_code == status
        assert response.json()["detail"] == str(error)

    def test_reset_rejected(self, client, device):
        """Test a NAK to reset maps to 409."""
        device.reset.side_effect = DeviceRejectedError(Command.RESET_UNIT)

        response = client.post("/api/reset")

        assert response.status_code == 409
        assert "RESET_UNIT" in response.json()["detail"]

    def test_update_unreachable(self, client, device):
        """Test an unreachable device on update maps to 503."""
        device.update_channel_names.side_effect = TransportError("Failed to connect")

        response = client.put("/api/channels", json={"channels": [{"channel": 0, "line1": "A"}]})

        assert response.status_code == 503
