"""Tests for the placeholder engine."""

import io
import wave

import pytest

from voiceforge.core import AudioPayload, EngineSynthesisRequest, EngineTrainingRequest
from voiceforge.engine import EngineRegistry, PlaceholderEngine
from voiceforge.engine.placeholder import SAMPLE_RATE, silent_wav


def duration(data: bytes) -> float:
    with wave.open(io.BytesIO(data), "rb") as wav:
        return wav.getnframes() / wav.getframerate()


class TestSilentWav:
    def test_valid_wav(self):
        data = silent_wav(0.5)
        with wave.open(io.BytesIO(data), "rb") as wav:
            assert wav.getnchannels() == 1
            assert wav.getsampwidth() == 2
            assert wav.getframerate() == SAMPLE_RATE
        assert duration(data) == pytest.approx(0.5, abs=0.001)


class TestPlaceholderEngine:
    @pytest.mark.asyncio
    async def test_returns_nonempty_wav(self):
        engine = PlaceholderEngine()
        payload = await engine.synthesize(EngineSynthesisRequest(text="hello", voice_id="default-male"))

        assert payload.mime_type == "audio/wav"
        assert payload.size > 44
        assert len(engine.calls) == 1

    @pytest.mark.asyncio
    async def test_faster_speech_is_shorter(self):
        engine = PlaceholderEngine()
        text = "a somewhat longer sentence to speak"

        normal = await engine.synthesize(EngineSynthesisRequest(text=text, voice_id="v", speed=1.0))
        fast = await engine.synthesize(EngineSynthesisRequest(text=text, voice_id="v", speed=2.0))

        assert duration(fast.data) == pytest.approx(duration(normal.data) / 2, rel=0.01)

    @pytest.mark.asyncio
    async def test_train_completes(self):
        engine = PlaceholderEngine()
        response = await engine.train(
            EngineTrainingRequest(model_name="My_Voice", audio=AudioPayload(b"RIFF", "audio/wav"))
        )
        assert response.succeeded
        assert response.model_id == "My_Voice"

    @pytest.mark.asyncio
    async def test_available(self):
        assert await PlaceholderEngine().is_available()

    def test_created_from_registry(self):
        engine = EngineRegistry.create("placeholder")
        assert isinstance(engine, PlaceholderEngine)
