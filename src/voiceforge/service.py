"""Main entry point wiring registry, storage, engine and gateways."""

from __future__ import annotations

from pathlib import Path

from voiceforge.config import VoiceForgeConfig, load_config
from voiceforge.core import (
    AudioPayload,
    BaseEngine,
    SynthesisRequest,
    TrainedVoice,
    TrainingRequest,
    VoiceIdentity,
)
from voiceforge.engine import EngineRegistry
from voiceforge.gateway import GatewayResult, SynthesisGateway, TrainingGateway
from voiceforge.utils import get_logger, setup_logging
from voiceforge.voices import ReferenceAudioStore, VoiceRegistry

logger = get_logger(__name__)


class VoiceForge:
    """Unified interface over the voice registry and both gateways.

    Usage:
        forge = VoiceForge.from_config(env="development")

        forge.list_voices()
        result = await forge.synthesize(SynthesisRequest(text="hello", voice_id="default-male"))
        result = await forge.train_voice(TrainingRequest(model_name="My Voice", audio_sample=sample))

        await forge.close()
    """

    def __init__(self, config: VoiceForgeConfig, engine: BaseEngine | None = None):
        self.config = config

        setup_logging(level=config.log_level, format_style=config.log_format)
        Path(config.data_dir).mkdir(parents=True, exist_ok=True)

        self.references = ReferenceAudioStore(config.storage.reference_dir)
        self.registry = VoiceRegistry.from_config(config.registry, references=self.references)
        self.engine = engine or EngineRegistry.create(config.engine.backend, config=config.engine)

        self.synthesis = SynthesisGateway(
            registry=self.registry,
            engine=self.engine,
            references=self.references,
            config=config.synthesis,
            timeout=config.engine.timeout_seconds,
        )
        self.training = TrainingGateway(
            registry=self.registry,
            references=self.references,
            engine=self.engine,
            config=config.training,
            timeout=config.engine.timeout_seconds,
        )

        logger.info(f"VoiceForge initialized: engine={config.engine.backend}")

    @classmethod
    def from_config(
        cls,
        config_path: Path | str | None = None,
        env: str | None = None,
        config_dir: Path | str = "configs",
    ) -> VoiceForge:
        """Create instance from configuration files (see load_config)."""
        config = load_config(
            config_path=config_path,
            env=env,
            config_dir=config_dir,
        )
        return cls(config)

    def list_voices(self) -> list[VoiceIdentity]:
        return self.registry.list_voices()

    async def synthesize(self, request: SynthesisRequest) -> GatewayResult[AudioPayload]:
        return await self.synthesis.synthesize(request)

    async def train_voice(self, request: TrainingRequest) -> GatewayResult[TrainedVoice]:
        return await self.training.train_voice(request)

    async def engine_available(self) -> bool:
        return await self.engine.is_available()

    async def close(self) -> None:
        await self.engine.close()
        logger.info("VoiceForge closed")
