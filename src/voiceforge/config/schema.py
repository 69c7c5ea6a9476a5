"""Pydantic configuration schemas with validation."""

from typing import Literal

from pydantic import BaseModel, Field, model_validator


class BuiltinVoiceConfig(BaseModel):
    """A voice shipped with the system, backed by the engine default."""
    id: str = Field(min_length=1)
    name: str = Field(min_length=1)


class EngineConfig(BaseModel):
    """External synthesis engine client configuration."""
    backend: Literal["http", "placeholder"] = "http"
    base_url: str = "http://localhost:8000/api"
    timeout_seconds: float = Field(default=30.0, gt=0)
    # 1 = single attempt; transport-level retries only
    max_attempts: int = Field(default=1, ge=1, le=10)
    retry_min_wait: float = Field(default=0.5, ge=0)
    retry_max_wait: float = Field(default=5.0, ge=0)


class RegistryConfig(BaseModel):
    """Voice registry configuration."""
    store: Literal["memory", "json"] = "json"
    path: str = "./data/voices.json"
    builtin_voices: list[BuiltinVoiceConfig] = Field(
        default_factory=lambda: [
            BuiltinVoiceConfig(id="default-male", name="Standard male"),
            BuiltinVoiceConfig(id="default-female", name="Standard female"),
        ]
    )

    @model_validator(mode="after")
    def _unique_builtins(self) -> "RegistryConfig":
        ids = [voice.id for voice in self.builtin_voices]
        if len(ids) != len(set(ids)):
            raise ValueError(f"Duplicate built-in voice ids: {ids}")
        return self


class StorageConfig(BaseModel):
    """Reference audio storage configuration."""
    reference_dir: str = "./data/references"


class SynthesisConfig(BaseModel):
    """Parameter domains accepted by the synthesis gateway.

    Can narrow speed to a sub-range of [0.5, 2.0] and variability to a
    sub-range of [0.0, 1.0], never widen them.
    """
    min_speed: float = Field(default=0.5, ge=0.5, le=2.0)
    max_speed: float = Field(default=2.0, ge=0.5, le=2.0)
    min_variability: float = Field(default=0.0, ge=0.0, le=1.0)
    max_variability: float = Field(default=1.0, ge=0.0, le=1.0)

    @model_validator(mode="after")
    def _ordered_bounds(self) -> "SynthesisConfig":
        if self.min_speed > self.max_speed:
            raise ValueError(f"min_speed {self.min_speed} exceeds max_speed {self.max_speed}")
        if self.min_variability > self.max_variability:
            raise ValueError(
                f"min_variability {self.min_variability} exceeds max_variability {self.max_variability}"
            )
        return self


class TrainingConfig(BaseModel):
    """Training gateway configuration."""
    max_sample_mb: float = Field(default=5.0, gt=0, le=100)
    allowed_mime_types: list[str] = Field(
        default_factory=lambda: [
            "audio/wav",
            "audio/x-wav",
            "audio/mpeg",
            "audio/mp3",
            "audio/ogg",
        ]
    )
    suffix_length: int = Field(default=6, ge=4, le=32)  # hex chars
    forward_to_engine: bool = False

    @property
    def max_sample_bytes(self) -> int:
        return int(self.max_sample_mb * 1024 * 1024)


class VoiceForgeConfig(BaseModel):
    """Root configuration for the VoiceForge gateway."""
    engine: EngineConfig = Field(default_factory=EngineConfig)
    registry: RegistryConfig = Field(default_factory=RegistryConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    synthesis: SynthesisConfig = Field(default_factory=SynthesisConfig)
    training: TrainingConfig = Field(default_factory=TrainingConfig)

    # Global settings
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["simple", "detailed"] = "simple"
    data_dir: str = "./data"
