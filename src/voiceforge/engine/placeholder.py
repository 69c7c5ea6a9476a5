"""Placeholder engine returning generated silence.

Stands in for a real synthesis service during local development and
tests: no network, no model, deterministic output.
"""

import io
import wave

from voiceforge.config import EngineConfig
from voiceforge.core import (
    AudioPayload,
    BaseEngine,
    EngineSynthesisRequest,
    EngineTrainingRequest,
    EngineTrainingResponse,
)
from voiceforge.engine.base import EngineRegistry
from voiceforge.utils import get_logger

logger = get_logger(__name__)

SAMPLE_RATE = 22050
SECONDS_PER_CHAR = 0.06
MIN_SECONDS = 0.2
MAX_SECONDS = 10.0


def silent_wav(seconds: float, sample_rate: int = SAMPLE_RATE) -> bytes:
    """16-bit mono PCM WAV of the given duration."""
    frames = max(1, int(seconds * sample_rate))
    buffer = io.BytesIO()
    with wave.open(buffer, "wb") as wav:
        wav.setnchannels(1)
        wav.setsampwidth(2)
        wav.setframerate(sample_rate)
        wav.writeframes(b"\x00\x00" * frames)
    return buffer.getvalue()


@EngineRegistry.register("placeholder")
class PlaceholderEngine(BaseEngine):
    """Engine stub: silent WAV for synthesis, instant "completed" training."""

    def __init__(self, config: EngineConfig | None = None):
        self.config = config or EngineConfig(backend="placeholder")
        self.calls: list[EngineSynthesisRequest | EngineTrainingRequest] = []
        logger.info("PlaceholderEngine initialized (no audio model)")

    async def synthesize(self, request: EngineSynthesisRequest) -> AudioPayload:
        self.calls.append(request)
        seconds = min(max(len(request.text) * SECONDS_PER_CHAR, MIN_SECONDS), MAX_SECONDS)
        return AudioPayload(data=silent_wav(seconds / request.speed), mime_type="audio/wav")

    async def train(self, request: EngineTrainingRequest) -> EngineTrainingResponse:
        self.calls.append(request)
        return EngineTrainingResponse(training_status="completed", model_id=request.model_name)

    async def is_available(self) -> bool:
        return True
