"""Application configuration using pydantic-settings."""

import logging
import sys

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings can be overridden via environment variables
    prefixed with MADIE_ (e.g., MADIE_DEVICE_HOST).
    """

    device_host: str = "localhost"
    device_port: int = 9760
    response_timeout: float = 3.0
    connect_timeout: float = 5.0
    # 0x0017 on current firmware, 0x0004 on older units
    disconnect_command: int = 0x0017
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_prefix="MADIE_")

    @field_validator("disconnect_command", mode="before")
    @classmethod
    def parse_opcode(cls, v):
        """Accept opcodes written as hex strings (e.g. "0x04")."""
        if isinstance(v, str):
            return int(v, 0)
        return v

    @field_validator("disconnect_command")
    @classmethod
    def validate_opcode(cls, v: int) -> int:
        """Ensure the opcode fits the 16-bit command field."""
        if not 0 <= v <= 0xFFFF:
            raise ValueError("disconnect_command must be 0x0000-0xFFFF")
        return v


def setup_logging(level: str = "INFO") -> None:
    """Configure application logging.

    Args:
        level: Log level string (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )
