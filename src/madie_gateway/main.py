"""Main application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from madie_gateway import __version__
from madie_gateway.api.dependencies import app_state
from madie_gateway.api.routes import router as api_router
from madie_gateway.core.config import Settings, setup_logging
from madie_gateway.core.models import HealthResponse
from madie_gateway.protocol.device import MadieClient

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: startup and shutdown."""
    settings = app_state.settings or Settings()
    app_state.settings = settings

    setup_logging(settings.log_level)
    logger.info(f"Starting MADIe Gateway v{__version__}")

    # Connections are opened per request; nothing to dial here
    app_state.client = MadieClient.from_settings(settings)
    logger.info(f"Device at {app_state.client.address}, DISCONNECT=0x{settings.disconnect_command:04X}")

    yield

    logger.info("Shutting down...")
    app_state.client = None


app = FastAPI(
    title="MADIe Gateway",
    description="Local REST API gateway for MADIe channel naming and unit control",
    version=__version__,
    lifespan=lifespan,
)

app.include_router(api_router)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": "MADIe Gateway",
        "version": __version__,
        "status": "running",
    }


@app.get("/health", response_model=HealthResponse)
async def health():
    """Health check endpoint."""
    client = app_state.client

    if client is None:
        return HealthResponse(status="unhealthy")

    return HealthResponse(
        status="healthy",
        device=client.address,
        disconnect_command=client.disconnect_command,
    )


def main():
    """Run the application (for CLI entry point)."""
    import uvicorn

    settings = Settings()
    setup_logging(settings.log_level)
    app_state.settings = settings

    uvicorn.run(app, host=settings.api_host, port=settings.api_port)


if __name__ == "__main__":
    main()
