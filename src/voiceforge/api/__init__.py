"""HTTP API for the VoiceForge gateway."""

from voiceforge.api.app import create_app
from voiceforge.api.config import APIConfig, DEFAULT_API_CONFIG

__all__ = [
    "create_app",
    "APIConfig",
    "DEFAULT_API_CONFIG",
]
