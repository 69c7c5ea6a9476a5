"""Speech synthesis endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Request

from voiceforge.api.deps import Forge
from voiceforge.api.middleware import error_response_for
from voiceforge.api.schemas import ErrorResponse, SynthesizeRequest, SynthesizeResponse
from voiceforge.core import SynthesisRequest
from voiceforge.gateway import Failure

router = APIRouter()


@router.post(
    "/tts",
    response_model=SynthesizeResponse,
    summary="Synthesize speech",
    responses={
        404: {"model": ErrorResponse, "description": "Unknown voice"},
        422: {"model": ErrorResponse, "description": "Empty text or parameter out of range"},
        502: {"model": ErrorResponse, "description": "Engine rejected the request"},
        503: {"model": ErrorResponse, "description": "Engine unreachable"},
    },
)
async def synthesize(request: Request, body: SynthesizeRequest, forge: Forge):
    """Convert text to speech with the selected voice.

    Returns the audio as a base64 data URI ready for an <audio> element.
    """
    result = await forge.synthesize(
        SynthesisRequest(
            text=body.text,
            voice_id=body.voice_id,
            speed=body.speed,
            variability=body.variability,
        )
    )

    if isinstance(result, Failure):
        return error_response_for(request, result.error)

    return SynthesizeResponse(audio_data_uri=result.value.to_data_uri())
