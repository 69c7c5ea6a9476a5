"""Voice training endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Request, status

from voiceforge.api.deps import Forge
from voiceforge.api.middleware import error_response_for
from voiceforge.api.schemas import ErrorResponse, TrainVoiceRequest, TrainVoiceResponse
from voiceforge.core import AudioPayload, TrainingRequest
from voiceforge.gateway import Failure

router = APIRouter()


@router.post(
    "/train-voice",
    response_model=TrainVoiceResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Train a voice from a sample",
    responses={
        400: {"model": ErrorResponse, "description": "Sample is not a valid data URI"},
        413: {"model": ErrorResponse, "description": "Sample too large"},
        422: {"model": ErrorResponse, "description": "Missing name or unsupported sample"},
        502: {"model": ErrorResponse, "description": "Training failed"},
    },
)
async def train_voice(request: Request, body: TrainVoiceRequest, forge: Forge):
    """Register a new voice from a short clean recording.

    **Supported formats:** WAV, MP3 (OGG when enabled in config)

    **Max sample size:** 5MB
    """
    # MalformedPayload is mapped to 400 by the exception handler
    sample = AudioPayload.from_data_uri(body.audio_data_uri)

    result = await forge.train_voice(TrainingRequest(model_name=body.model_name, audio_sample=sample))

    if isinstance(result, Failure):
        return error_response_for(request, result.error)

    trained = result.value
    return TrainVoiceResponse(
        training_status=trained.training_status,
        model_id=trained.identity.id,
        name=trained.identity.display_name,
    )
