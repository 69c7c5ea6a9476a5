"""Data model and abstract base classes defining component interfaces."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class VoiceKind(str, Enum):
    """Origin of a voice identity."""
    BUILTIN = "builtin"
    TRAINED = "trained"


@dataclass(frozen=True)
class VoiceIdentity:
    """A named, addressable synthesis target."""
    id: str
    display_name: str
    kind: VoiceKind = VoiceKind.TRAINED
    reference_handle: str | None = None  # None = engine default voice
    created_at: datetime = field(default_factory=utc_now)

    @property
    def is_builtin(self) -> bool:
        return self.kind is VoiceKind.BUILTIN

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "display_name": self.display_name,
            "kind": self.kind.value,
            "reference_handle": self.reference_handle,
            "created_at": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> VoiceIdentity:
        created_at = data.get("created_at")
        return cls(
            id=data["id"],
            display_name=data.get("display_name", data["id"]),
            kind=VoiceKind(data.get("kind", VoiceKind.TRAINED.value)),
            reference_handle=data.get("reference_handle"),
            created_at=datetime.fromisoformat(created_at) if created_at else utc_now(),
        )


@dataclass(frozen=True)
class AudioPayload:
    """Raw audio bytes with their MIME type."""
    data: bytes
    mime_type: str

    @property
    def size(self) -> int:
        return len(self.data)

    def to_data_uri(self) -> str:
        """Encode as a data:<mime>;base64,<payload> string."""
        from voiceforge.codec.datauri import encode

        return encode(self.data, self.mime_type)

    @classmethod
    def from_data_uri(cls, data_uri: str) -> AudioPayload:
        """Decode a data URI. Raises MalformedPayload."""
        from voiceforge.codec.datauri import decode

        data, mime_type = decode(data_uri)
        return cls(data=data, mime_type=mime_type)

    def __repr__(self) -> str:
        return f"AudioPayload(mime_type={self.mime_type!r}, size={self.size})"


@dataclass(frozen=True)
class SynthesisRequest:
    """Text plus voice and tuning parameters."""
    text: str
    voice_id: str
    speed: float = 1.0
    variability: float = 0.5  # best-effort, engines may ignore it


@dataclass(frozen=True)
class TrainingRequest:
    """Audio sample plus a human-readable name for the new voice."""
    model_name: str
    audio_sample: AudioPayload


@dataclass(frozen=True)
class TrainedVoice:
    """Outcome of a successful training."""
    identity: VoiceIdentity
    training_status: str = "completed"


@dataclass(frozen=True)
class EngineSynthesisRequest:
    """Engine-facing synthesis request."""
    text: str
    voice_id: str
    speed: float = 1.0
    variability: float = 0.5
    reference_handle: str | None = None
    reference_audio: AudioPayload | None = None


@dataclass(frozen=True)
class EngineTrainingRequest:
    """Engine-facing training request."""
    model_name: str
    audio: AudioPayload


@dataclass(frozen=True)
class EngineTrainingResponse:
    """Engine training answer; model_id is set iff training succeeded."""
    training_status: str
    model_id: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.training_status.lower() in ("completed", "pending", "success")


class BaseEngine(ABC):
    """Abstract base class for external synthesis engines."""

    @abstractmethod
    async def synthesize(self, request: EngineSynthesisRequest) -> AudioPayload:
        """Synthesize speech for the request."""
        pass

    @abstractmethod
    async def train(self, request: EngineTrainingRequest) -> EngineTrainingResponse:
        """Submit a voice sample for training."""
        pass

    @abstractmethod
    async def is_available(self) -> bool:
        """Check if the engine answers."""
        pass

    async def close(self) -> None:
        """Release client resources."""
        pass


class BaseVoiceStore(ABC):
    """Abstract record store backing the voice registry."""

    @abstractmethod
    def load(self) -> list[VoiceIdentity]:
        """Load trained identities in creation order."""
        pass

    @abstractmethod
    def add(self, identity: VoiceIdentity) -> None:
        """Persist a new identity."""
        pass
