"""API v1 router aggregator."""
from fastapi import APIRouter

from voiceforge.api.v1.voices import router as voices_router
from voiceforge.api.v1.tts import router as tts_router
from voiceforge.api.v1.training import router as training_router

router = APIRouter()

router.include_router(voices_router, tags=["voices"])
router.include_router(tts_router, tags=["tts"])
router.include_router(training_router, tags=["training"])


@router.get("/", summary="API Information")
async def api_info():
    """Get API version and status information."""
    return {
        "version": "v1",
        "status": "active",
        "endpoints": {
            "voices": "/api/v1/voices",
            "tts": "/api/v1/tts",
            "train_voice": "/api/v1/train-voice",
        },
    }
