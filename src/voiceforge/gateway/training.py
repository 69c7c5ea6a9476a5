"""Training gateway: captures a reference sample under a new voice identity.

No fine-tuning happens here. The sample is stored as reference audio for
zero-shot cloning by the engine, and the new identity is registered.
Optionally the sample is also forwarded to the engine's train endpoint.
"""

from __future__ import annotations

import asyncio
import re
import secrets

from voiceforge.codec import base_mime
from voiceforge.config import TrainingConfig
from voiceforge.core import (
    AudioPayload,
    BaseEngine,
    DuplicateVoice,
    EngineTrainingRequest,
    EngineUnavailable,
    InvalidAudioSample,
    InvalidParameter,
    TrainedVoice,
    TrainingFailed,
    TrainingRequest,
    VoiceForgeError,
    VoiceIdentity,
    VoiceKind,
)
from voiceforge.core.resilience import OperationTimeout, async_timeout
from voiceforge.gateway.result import Failure, GatewayResult, Success
from voiceforge.utils import get_logger, timed
from voiceforge.voices import ReferenceAudioStore, VoiceRegistry

logger = get_logger(__name__)

UNNAMED_MODEL = "unnamed_model"
# Upper bound on the name part of a minted id
MAX_TOKEN_LENGTH = 64
TRAINING_COMPLETED = "completed"

_DISALLOWED = re.compile(r"[^A-Za-z0-9 _-]")
_WHITESPACE = re.compile(r"\s+")


def sanitize_model_name(name: str) -> str:
    """Reduce a display name to an id-safe token.

    Keeps ASCII letters, digits, underscore and hyphen; spaces become
    underscores and the result is cut to MAX_TOKEN_LENGTH characters.
    "My Voice!" -> "My_Voice".
    """
    cleaned = _DISALLOWED.sub("", name).strip()
    cleaned = _WHITESPACE.sub("_", cleaned)[:MAX_TOKEN_LENGTH]
    return cleaned or UNNAMED_MODEL


def mint_voice_id(token: str, suffix_length: int = 6) -> str:
    """token + "_" + random lowercase hex suffix."""
    suffix = secrets.token_hex((suffix_length + 1) // 2)[:suffix_length]
    return f"{token}_{suffix}"


class TrainingGateway:
    """Turns an uploaded sample into a registered trained voice."""

    def __init__(
        self,
        registry: VoiceRegistry,
        references: ReferenceAudioStore,
        engine: BaseEngine | None = None,
        config: TrainingConfig | None = None,
        timeout: float = 120.0,
    ):
        self.registry = registry
        self.references = references
        self.engine = engine
        self.config = config or TrainingConfig()
        self.timeout = timeout
        self._allowed_mimes = {base_mime(mime) for mime in self.config.allowed_mime_types}

        if self.config.forward_to_engine and engine is None:
            raise ValueError("forward_to_engine requires an engine")

    def validate_sample(self, sample: AudioPayload) -> None:
        """Check MIME allow-list and size cap.

        Raises:
            InvalidAudioSample: Disallowed type, empty, or too large
        """
        if base_mime(sample.mime_type or "") not in self._allowed_mimes:
            raise InvalidAudioSample(
                "Unsupported audio type, upload WAV or MP3",
                reason="unsupported_mime",
                mime_type=sample.mime_type,
            )
        if sample.size == 0:
            raise InvalidAudioSample("Audio sample is empty", reason="empty", size_bytes=0)
        if sample.size > self.config.max_sample_bytes:
            raise InvalidAudioSample(
                f"Audio sample exceeds {self.config.max_sample_mb:g}MB",
                reason="too_large",
                size_bytes=sample.size,
            )

    @timed
    async def train_voice(self, request: TrainingRequest) -> GatewayResult[TrainedVoice]:
        """Register a new trained voice from request.

        Returns:
            Success(TrainedVoice) or Failure(InvalidParameter |
            InvalidAudioSample | TrainingFailed | EngineUnavailable)
        """
        try:
            trained = await self._train(request)
        except VoiceForgeError as e:
            logger.warning(f"Training rejected [{e.code}]: {e}")
            return Failure(e)
        return Success(trained)

    async def _train(self, request: TrainingRequest) -> TrainedVoice:
        if not isinstance(request.model_name, str) or not request.model_name.strip():
            raise InvalidParameter("Model name must not be empty", field="model_name")
        self.validate_sample(request.audio_sample)

        token = sanitize_model_name(request.model_name)
        voice_id = mint_voice_id(token, self.config.suffix_length)
        handle: str | None = None
        status = TRAINING_COMPLETED

        try:
            handle = await self.references.save(voice_id, request.audio_sample)

            if self.config.forward_to_engine:
                status = await self._forward_to_engine(token, request.audio_sample)

            identity = VoiceIdentity(
                id=voice_id,
                display_name=request.model_name.strip(),
                kind=VoiceKind.TRAINED,
                reference_handle=handle,
            )
            # JSON store writes block, keep them off the event loop
            await asyncio.to_thread(self.registry.register, identity)
        except BaseException as e:
            self._discard(handle)
            if isinstance(e, DuplicateVoice):
                raise TrainingFailed(
                    f"Could not register voice '{voice_id}'", detail=e.message
                ) from e
            if isinstance(e, VoiceForgeError) or not isinstance(e, Exception):
                raise
            logger.exception(f"Training crashed for {voice_id}: {e}")
            raise TrainingFailed(f"Training failed: {e}") from e

        logger.info(f"Trained voice {voice_id} from {request.audio_sample.size} bytes")
        return TrainedVoice(identity=identity, training_status=status)

    async def _forward_to_engine(self, model_name: str, sample: AudioPayload) -> str:
        """Submit the sample to the engine and return its training status."""
        try:
            response = await async_timeout(
                self.engine.train(EngineTrainingRequest(model_name=model_name, audio=sample)),
                self.timeout,
                "train",
            )
        except OperationTimeout as e:
            raise EngineUnavailable(
                "Training engine did not respond in time", timeout=self.timeout
            ) from e

        if not response.succeeded or not response.model_id:
            raise TrainingFailed(
                "Engine did not accept the voice sample",
                detail=f"trainingStatus={response.training_status}",
            )
        return response.training_status

    def _discard(self, handle: str | None) -> None:
        """Best-effort removal of partially stored audio."""
        if handle is None:
            return
        try:
            self.references.delete(handle)
        except OSError as e:
            logger.error(f"Could not remove orphaned reference audio {handle}: {e}")
