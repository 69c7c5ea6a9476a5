"""Configuration management."""

from voiceforge.config.schema import (
    VoiceForgeConfig,
    BuiltinVoiceConfig,
    EngineConfig,
    RegistryConfig,
    StorageConfig,
    SynthesisConfig,
    TrainingConfig,
)
from voiceforge.config.loader import load_config, load_yaml, deep_merge

__all__ = [
    # Main config
    "VoiceForgeConfig",
    "load_config",
    # Sub-configs
    "BuiltinVoiceConfig",
    "EngineConfig",
    "RegistryConfig",
    "StorageConfig",
    "SynthesisConfig",
    "TrainingConfig",
    # Utilities
    "load_yaml",
    "deep_merge",
]
