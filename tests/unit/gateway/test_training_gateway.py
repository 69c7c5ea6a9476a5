"""Tests for the training gateway."""

import asyncio
import re
import threading
from pathlib import Path

import pytest

from voiceforge.config import TrainingConfig
from voiceforge.core import (
    AudioPayload,
    EngineTrainingResponse,
    EngineUnavailable,
    InvalidAudioSample,
    InvalidParameter,
    SynthesisRequest,
    TrainingFailed,
    TrainingRequest,
    VoiceKind,
)
from voiceforge.gateway import (
    Failure,
    Success,
    SynthesisGateway,
    TrainingGateway,
    mint_voice_id,
    sanitize_model_name,
)
from voiceforge.gateway import training as training_module
from voiceforge.gateway.training import MAX_TOKEN_LENGTH

MB = 1024 * 1024


@pytest.fixture
def gateway(registry, references):
    return TrainingGateway(registry, references)


def stored_files(references):
    if not references.root.exists():
        return []
    return sorted(p.name for p in references.root.iterdir())


class TestSanitizeModelName:
    @pytest.mark.parametrize("name,token", [
        ("My Voice", "My_Voice"),
        ("My Voice!", "My_Voice"),
        ("  padded  name  ", "padded_name"),
        ("keep-hyphen_and_underscore", "keep-hyphen_and_underscore"),
        ("../../etc/passwd", "etcpasswd"),
        ("!!!", "unnamed_model"),
        ("Голос", "unnamed_model"),
    ])
    def test_sanitize(self, name, token):
        assert sanitize_model_name(name) == token

    def test_long_name_truncated(self):
        assert sanitize_model_name("A" * 300) == "A" * MAX_TOKEN_LENGTH

    def test_mint_voice_id(self):
        voice_id = mint_voice_id("My_Voice")
        assert re.fullmatch(r"My_Voice_[0-9a-f]{6}", voice_id)

    def test_mint_custom_suffix_length(self):
        assert re.fullmatch(r"x_[0-9a-f]{9}", mint_voice_id("x", suffix_length=9))


class TestTrainVoice:
    @pytest.mark.asyncio
    async def test_trains_and_registers(self, gateway, registry, references, wav_sample):
        result = await gateway.train_voice(TrainingRequest(model_name="My Voice", audio_sample=wav_sample))

        assert isinstance(result, Success)
        trained = result.value
        assert re.fullmatch(r"My_Voice_[0-9a-f]{6}", trained.identity.id)
        assert trained.training_status == "completed"
        assert trained.identity.display_name == "My Voice"
        assert trained.identity.kind is VoiceKind.TRAINED
        assert registry.get(trained.identity.id) == trained.identity
        assert await references.load(trained.identity.reference_handle) == wav_sample

    @pytest.mark.asyncio
    async def test_trained_voice_is_synthesizable(self, gateway, registry, references, engine, wav_sample):
        trained = (await gateway.train_voice(
            TrainingRequest(model_name="My Voice", audio_sample=wav_sample)
        )).unwrap()
        synthesis = SynthesisGateway(registry, engine, references=references)

        result = await synthesis.synthesize(SynthesisRequest(text="hello", voice_id=trained.identity.id))

        assert result.ok
        assert result.value.size > 0
        assert result.value.mime_type == "audio/wav"
        assert engine.synthesize_calls[0].reference_audio == wav_sample

    @pytest.mark.asyncio
    async def test_same_name_twice_gives_distinct_ids(self, gateway, wav_sample):
        request = TrainingRequest(model_name="Twin", audio_sample=wav_sample)
        first = (await gateway.train_voice(request)).unwrap()
        second = (await gateway.train_voice(request)).unwrap()
        assert first.identity.id != second.identity.id

    @pytest.mark.asyncio
    async def test_concurrent_same_name(self, gateway, registry, wav_sample):
        request = TrainingRequest(model_name="Twin", audio_sample=wav_sample)

        results = await asyncio.gather(*(gateway.train_voice(request) for _ in range(5)))

        assert all(result.ok for result in results)
        ids = {result.value.identity.id for result in results}
        assert len(ids) == 5
        assert all(voice_id in registry for voice_id in ids)

    @pytest.mark.asyncio
    async def test_unsanitizable_name(self, gateway, wav_sample):
        result = await gateway.train_voice(TrainingRequest(model_name="!!!", audio_sample=wav_sample))

        assert result.value.identity.id.startswith("unnamed_model_")
        assert result.value.identity.display_name == "!!!"

    @pytest.mark.asyncio
    async def test_very_long_name(self, gateway, registry, references, wav_sample):
        result = await gateway.train_voice(TrainingRequest(model_name="A" * 300, audio_sample=wav_sample))

        assert isinstance(result, Success)
        identity = result.value.identity
        assert re.fullmatch(r"A{64}_[0-9a-f]{6}", identity.id)
        assert identity.display_name == "A" * 300
        assert identity.id in registry
        assert references.exists(identity.reference_handle)

    @pytest.mark.asyncio
    async def test_mp3_stored_with_extension(self, gateway, references):
        sample = AudioPayload(data=b"ID3" + b"\x00" * 500, mime_type="audio/mpeg")

        trained = (await gateway.train_voice(TrainingRequest(model_name="Mp3", audio_sample=sample))).unwrap()

        assert Path(trained.identity.reference_handle).suffix == ".mp3"


class TestRejections:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("name", ["", "   "])
    async def test_empty_name(self, gateway, registry, references, wav_sample, name):
        result = await gateway.train_voice(TrainingRequest(model_name=name, audio_sample=wav_sample))

        assert isinstance(result.error, InvalidParameter)
        assert len(registry) == 2
        assert stored_files(references) == []

    @pytest.mark.asyncio
    async def test_oversized_sample(self, gateway, registry, references):
        sample = AudioPayload(data=b"\x00" * (5 * MB + 1), mime_type="audio/wav")

        result = await gateway.train_voice(TrainingRequest(model_name="Big", audio_sample=sample))

        assert isinstance(result.error, InvalidAudioSample)
        assert result.error.reason == "too_large"
        assert len(registry) == 2
        assert stored_files(references) == []

    @pytest.mark.asyncio
    async def test_exactly_max_size_accepted(self, gateway):
        sample = AudioPayload(data=b"\x00" * (5 * MB), mime_type="audio/wav")
        result = await gateway.train_voice(TrainingRequest(model_name="Edge", audio_sample=sample))
        assert result.ok

    @pytest.mark.asyncio
    @pytest.mark.parametrize("mime", ["text/plain", "video/mp4", "audio/flac", ""])
    async def test_disallowed_type(self, gateway, registry, references, mime):
        sample = AudioPayload(data=b"\x01" * 100, mime_type=mime)

        result = await gateway.train_voice(TrainingRequest(model_name="Nope", audio_sample=sample))

        assert isinstance(result.error, InvalidAudioSample)
        assert result.error.reason == "unsupported_mime"
        assert len(registry) == 2
        assert stored_files(references) == []

    @pytest.mark.asyncio
    async def test_empty_sample(self, gateway, references):
        sample = AudioPayload(data=b"", mime_type="audio/wav")

        result = await gateway.train_voice(TrainingRequest(model_name="Empty", audio_sample=sample))

        assert result.error.reason == "empty"
        assert stored_files(references) == []

    @pytest.mark.asyncio
    async def test_configured_limit(self, registry, references):
        gateway = TrainingGateway(registry, references, config=TrainingConfig(max_sample_mb=0.001))
        sample = AudioPayload(data=b"\x00" * 2048, mime_type="audio/wav")

        result = await gateway.train_voice(TrainingRequest(model_name="Small", audio_sample=sample))

        assert result.error.reason == "too_large"


class TestRollback:
    @pytest.mark.asyncio
    async def test_id_collision_keeps_existing_voice(
        self, gateway, registry, references, wav_sample, monkeypatch
    ):
        monkeypatch.setattr(training_module, "mint_voice_id", lambda token, length=6: f"{token}_aaaaaa")

        first = await gateway.train_voice(TrainingRequest(model_name="Clash", audio_sample=wav_sample))
        handle = first.value.identity.reference_handle
        second = await gateway.train_voice(TrainingRequest(model_name="Clash", audio_sample=wav_sample))

        assert isinstance(second, Failure)
        assert isinstance(second.error, TrainingFailed)
        assert len(registry) == 3
        assert await references.load(handle) == wav_sample
        assert stored_files(references) == [Path(handle).name]

    @pytest.mark.asyncio
    async def test_registry_collision_removes_stored_audio(
        self, gateway, registry, references, wav_sample, monkeypatch
    ):
        monkeypatch.setattr(training_module, "mint_voice_id", lambda token, length=6: "default-male")

        result = await gateway.train_voice(TrainingRequest(model_name="Sneaky", audio_sample=wav_sample))

        assert isinstance(result.error, TrainingFailed)
        assert registry.get("default-male").is_builtin
        assert stored_files(references) == []

    @pytest.mark.asyncio
    async def test_store_failure_rolls_back(self, gateway, registry, references, wav_sample, monkeypatch):
        def broken_register(identity):
            raise OSError("disk full")

        monkeypatch.setattr(registry, "register", broken_register)

        result = await gateway.train_voice(TrainingRequest(model_name="Broken", audio_sample=wav_sample))

        assert isinstance(result.error, TrainingFailed)
        assert stored_files(references) == []
        assert len(registry) == 2


class TestEngineForwarding:
    def test_requires_engine(self, registry, references):
        with pytest.raises(ValueError):
            TrainingGateway(registry, references, config=TrainingConfig(forward_to_engine=True))

    @pytest.mark.asyncio
    async def test_forwards_sanitized_name(self, registry, references, engine_factory, wav_sample):
        engine = engine_factory(
            training_response=EngineTrainingResponse(training_status="completed", model_id="My_Voice")
        )
        gateway = TrainingGateway(
            registry, references, engine=engine, config=TrainingConfig(forward_to_engine=True)
        )

        result = await gateway.train_voice(TrainingRequest(model_name="My Voice", audio_sample=wav_sample))

        assert result.ok
        assert engine.train_calls[0].model_name == "My_Voice"
        assert engine.train_calls[0].audio == wav_sample

    @pytest.mark.asyncio
    async def test_engine_rejection_rolls_back(self, registry, references, engine_factory, wav_sample):
        engine = engine_factory(training_response=EngineTrainingResponse(training_status="failed"))
        gateway = TrainingGateway(
            registry, references, engine=engine, config=TrainingConfig(forward_to_engine=True)
        )

        result = await gateway.train_voice(TrainingRequest(model_name="Rejected", audio_sample=wav_sample))

        assert isinstance(result.error, TrainingFailed)
        assert len(registry) == 2
        assert stored_files(references) == []

    @pytest.mark.asyncio
    async def test_engine_down_rolls_back(self, registry, references, engine_factory, wav_sample):
        engine = engine_factory(error=EngineUnavailable())
        gateway = TrainingGateway(
            registry, references, engine=engine, config=TrainingConfig(forward_to_engine=True)
        )

        result = await gateway.train_voice(TrainingRequest(model_name="Down", audio_sample=wav_sample))

        assert isinstance(result.error, EngineUnavailable)
        assert len(registry) == 2
        assert stored_files(references) == []

    @pytest.mark.asyncio
    async def test_not_forwarded_by_default(self, registry, references, engine, wav_sample):
        gateway = TrainingGateway(registry, references, engine=engine)

        await gateway.train_voice(TrainingRequest(model_name="Local", audio_sample=wav_sample))

        assert engine.train_calls == []

    @pytest.mark.asyncio
    async def test_engine_status_reported(self, registry, references, engine_factory, wav_sample):
        engine = engine_factory(
            training_response=EngineTrainingResponse(training_status="pending", model_id="Queued")
        )
        gateway = TrainingGateway(
            registry, references, engine=engine, config=TrainingConfig(forward_to_engine=True)
        )

        result = await gateway.train_voice(TrainingRequest(model_name="Queued", audio_sample=wav_sample))

        assert result.ok
        assert result.value.training_status == "pending"
        assert result.value.identity.id in registry


class TestRegistryWrites:
    @pytest.mark.asyncio
    async def test_register_runs_off_event_loop(self, gateway, registry, wav_sample, monkeypatch):
        loop_thread = threading.current_thread()
        seen = []
        register = registry.register

        def recording_register(identity):
            seen.append(threading.current_thread())
            return register(identity)

        monkeypatch.setattr(registry, "register", recording_register)

        result = await gateway.train_voice(TrainingRequest(model_name="Threaded", audio_sample=wav_sample))

        assert result.ok
        assert len(seen) == 1
        assert seen[0] is not loop_thread
