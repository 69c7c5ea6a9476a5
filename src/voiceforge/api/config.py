"""API configuration with Pydantic models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class TimeoutSettings(BaseModel):
    """Timeout settings for probe endpoints."""

    engine_ready: float = 5.0


class APIConfig(BaseModel):
    """Complete API configuration."""

    # Server settings
    host: str = "0.0.0.0"
    port: int = 8080
    debug: bool = False

    # Feature flags
    enable_docs: bool = True
    enable_cors: bool = True
    cors_origins: list[str] = ["*"]

    # Where the gateway config is loaded from at startup
    config_env: str | None = None
    config_dir: str = "configs"

    # A 5MB sample grows by a third as base64 inside JSON
    max_body_mb: float = Field(default=8.0, ge=1, le=100)

    timeouts: TimeoutSettings = TimeoutSettings()

    @property
    def max_body_bytes(self) -> int:
        return int(self.max_body_mb * 1024 * 1024)


# Default configuration
DEFAULT_API_CONFIG = APIConfig()
