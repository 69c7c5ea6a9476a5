"""Core components: data model, base classes, registry, exceptions."""

from voiceforge.core.registry import Registry
from voiceforge.core.base import (
    VoiceKind,
    VoiceIdentity,
    AudioPayload,
    SynthesisRequest,
    TrainingRequest,
    TrainedVoice,
    EngineSynthesisRequest,
    EngineTrainingRequest,
    EngineTrainingResponse,
    BaseEngine,
    BaseVoiceStore,
)
from voiceforge.core.exceptions import (
    VoiceForgeError,
    ConfigError,
    RegistryError,
    MalformedPayload,
    UnknownVoice,
    DuplicateVoice,
    InvalidParameter,
    InvalidAudioSample,
    SynthesisFailed,
    TrainingFailed,
    EngineUnavailable,
)

__all__ = [
    # Registry
    "Registry",
    # Data classes
    "VoiceKind",
    "VoiceIdentity",
    "AudioPayload",
    "SynthesisRequest",
    "TrainingRequest",
    "TrainedVoice",
    "EngineSynthesisRequest",
    "EngineTrainingRequest",
    "EngineTrainingResponse",
    # Base classes
    "BaseEngine",
    "BaseVoiceStore",
    # Exceptions
    "VoiceForgeError",
    "ConfigError",
    "RegistryError",
    "MalformedPayload",
    "UnknownVoice",
    "DuplicateVoice",
    "InvalidParameter",
    "InvalidAudioSample",
    "SynthesisFailed",
    "TrainingFailed",
    "EngineUnavailable",
]
