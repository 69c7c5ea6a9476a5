"""Voice identities and reference audio storage."""

from voiceforge.voices.registry import VoiceRegistry, InMemoryVoiceStore, JsonVoiceStore
from voiceforge.voices.storage import ReferenceAudioStore, extension_for, DEFAULT_EXTENSION

__all__ = [
    "VoiceRegistry",
    "InMemoryVoiceStore",
    "JsonVoiceStore",
    "ReferenceAudioStore",
    "extension_for",
    "DEFAULT_EXTENSION",
]
