"""Voice listing endpoint."""

from fastapi import APIRouter

from voiceforge.api.deps import Forge
from voiceforge.api.schemas import VoiceListResponse, VoiceResponse

router = APIRouter()


@router.get("/voices", response_model=VoiceListResponse, summary="List voices")
async def list_voices(forge: Forge) -> VoiceListResponse:
    """Built-in voices first, then trained voices in the order they were created."""
    return VoiceListResponse(
        voices=[
            VoiceResponse(id=voice.id, name=voice.display_name, kind=voice.kind.value)
            for voice in forge.list_voices()
        ]
    )
