"""VoiceForge - voice registry and gateway in front of an external TTS engine.

Usage:
    from voiceforge import VoiceForge, SynthesisRequest

    forge = VoiceForge.from_config(env="development")

    result = await forge.synthesize(SynthesisRequest(text="hello", voice_id="default-male"))
    if result.ok:
        data_uri = result.value.to_data_uri()
"""

from voiceforge.service import VoiceForge
from voiceforge.config import VoiceForgeConfig, load_config
from voiceforge.core import (
    AudioPayload,
    SynthesisRequest,
    TrainingRequest,
    TrainedVoice,
    VoiceIdentity,
    VoiceKind,
)
from voiceforge.gateway import Success, Failure

__version__ = "0.1.0"

__all__ = [
    "VoiceForge",
    "VoiceForgeConfig",
    "load_config",
    "AudioPayload",
    "SynthesisRequest",
    "TrainingRequest",
    "TrainedVoice",
    "VoiceIdentity",
    "VoiceKind",
    "Success",
    "Failure",
]
