"""Shared test fixtures."""

import pytest
from fastapi.testclient import TestClient

from voiceforge.config import (
    EngineConfig,
    RegistryConfig,
    StorageConfig,
    VoiceForgeConfig,
)
from voiceforge.core import AudioPayload, BaseEngine, VoiceIdentity, VoiceKind


class RecordingEngine(BaseEngine):
    """Engine double that records calls and replays a canned outcome."""

    def __init__(self, payload=None, error=None, training_response=None):
        self.payload = payload or AudioPayload(data=b"RIFF" + b"\x01" * 60, mime_type="audio/wav")
        self.error = error
        self.training_response = training_response
        self.synthesize_calls = []
        self.train_calls = []

    async def synthesize(self, request):
        self.synthesize_calls.append(request)
        if self.error:
            raise self.error
        return self.payload

    async def train(self, request):
        self.train_calls.append(request)
        if self.error:
            raise self.error
        return self.training_response

    async def is_available(self):
        return self.error is None


@pytest.fixture
def builtin_voices():
    return [
        VoiceIdentity(id="default-male", display_name="Standard male", kind=VoiceKind.BUILTIN),
        VoiceIdentity(id="default-female", display_name="Standard female", kind=VoiceKind.BUILTIN),
    ]


@pytest.fixture
def references(tmp_path):
    """Reference audio store in an isolated directory."""
    from voiceforge.voices import ReferenceAudioStore
    return ReferenceAudioStore(tmp_path / "references")


@pytest.fixture
def registry(builtin_voices, references):
    """In-memory registry with the two built-in voices."""
    from voiceforge.voices import VoiceRegistry
    return VoiceRegistry(builtin_voices, references=references)


@pytest.fixture
def engine():
    return RecordingEngine()


@pytest.fixture
def engine_factory():
    """Build RecordingEngine doubles with a given outcome."""
    return RecordingEngine


@pytest.fixture
def wav_sample():
    """1KB WAV-typed sample."""
    return AudioPayload(data=b"RIFF" + b"\x00" * 1020, mime_type="audio/wav")


@pytest.fixture
def forge_config(tmp_path):
    """Gateway config writing only under tmp_path."""
    return VoiceForgeConfig(
        engine=EngineConfig(backend="placeholder", timeout_seconds=2.0),
        registry=RegistryConfig(store="json", path=str(tmp_path / "voices.json")),
        storage=StorageConfig(reference_dir=str(tmp_path / "references")),
        data_dir=str(tmp_path),
    )


@pytest.fixture
def forge(forge_config):
    """VoiceForge service on the placeholder engine."""
    from voiceforge.engine import PlaceholderEngine
    from voiceforge.service import VoiceForge
    return VoiceForge(forge_config, engine=PlaceholderEngine(forge_config.engine))


@pytest.fixture
def app(forge):
    """FastAPI app with an injected service."""
    from voiceforge.api import APIConfig, create_app
    return create_app(APIConfig(), forge=forge)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def wav_data_uri(wav_sample):
    return wav_sample.to_data_uri()
