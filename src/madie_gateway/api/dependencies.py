"""FastAPI dependency injection for shared application state."""

from ..core.config import Settings
from ..protocol.device import MadieClient


class AppState:
    """Holds shared application state instances.

    Created during app startup and accessed via FastAPI dependencies.
    """

    def __init__(self) -> None:
        self.settings: Settings | None = None
        self.client: MadieClient | None = None


# Global app state singleton
app_state = AppState()


def get_client() -> MadieClient:
    """Get the device client instance."""
    assert app_state.client is not None, "App not initialized"
    return app_state.client

