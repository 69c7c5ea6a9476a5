"""Request and response schemas for API endpoints.

Field names on the wire are camelCase, matching the engine contract the
web UI already speaks.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# ============================================================================
# Common Schemas
# ============================================================================

class ErrorResponse(BaseModel):
    """Standard error response format."""

    error: str = Field(description="Human-readable error message")
    code: str = Field(description="Machine-readable error code")
    status: int = Field(description="HTTP status code")
    request_id: str | None = Field(default=None, description="Request ID for tracing")
    details: dict[str, Any] | None = Field(default=None, description="Additional context")
    retry_after: int | None = Field(default=None, description="Seconds until retry is sensible")

    model_config = {
        "json_schema_extra": {
            "example": {
                "error": "Unknown voice: 'narrator'",
                "code": "UNKNOWN_VOICE",
                "status": 404,
                "request_id": "550e8400-e29b-41d4-a716-446655440000",
                "details": {"voice_id": "narrator", "reason": "not_registered"},
            }
        }
    }


class CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


# ============================================================================
# Voice Schemas
# ============================================================================

class VoiceResponse(BaseModel):
    """A selectable voice."""

    id: str
    name: str
    kind: str = Field(description="'builtin' or 'trained'")


class VoiceListResponse(BaseModel):
    """Built-in voices first, then trained voices in creation order."""

    voices: list[VoiceResponse]


# ============================================================================
# Synthesis Schemas
# ============================================================================

class SynthesizeRequest(CamelModel):
    """Text-to-speech request.

    Ranges are enforced by the gateway so out-of-range values get an
    INVALID_PARAMETER error naming the field, not a clamp.
    """

    text: str = Field(description="Text to speak")
    voice_id: str = Field(alias="voiceId", description="Voice to use")
    speed: float = Field(default=1.0, description="0.5 to 2.0, 1.0 is normal")
    variability: float = Field(default=0.5, description="0.0 to 1.0, may be ignored by the engine")

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "text": "Hello there",
                "voiceId": "default-female",
                "speed": 1.0,
                "variability": 0.5,
            }
        },
    )


class SynthesizeResponse(CamelModel):
    """Generated speech."""

    audio_data_uri: str = Field(
        alias="audioDataUri",
        description="data:<mimetype>;base64,<encoded_data>",
    )


# ============================================================================
# Training Schemas
# ============================================================================

class TrainVoiceRequest(CamelModel):
    """Voice training request."""

    model_name: str = Field(alias="modelName", description="Name for the new voice")
    audio_data_uri: str = Field(
        alias="audioDataUri",
        description="WAV/MP3 sample as data:<mimetype>;base64,<encoded_data>",
    )

    model_config = ConfigDict(populate_by_name=True, protected_namespaces=())


class TrainVoiceResponse(CamelModel):
    """Training outcome."""

    training_status: str = Field(alias="trainingStatus")
    model_id: str | None = Field(default=None, alias="modelId")
    name: str | None = None

    model_config = ConfigDict(populate_by_name=True, protected_namespaces=())
