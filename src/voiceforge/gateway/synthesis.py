"""Synthesis gateway: validates a request, resolves its voice, calls the engine."""

from __future__ import annotations

import math

from voiceforge.codec import is_audio_mime
from voiceforge.config import SynthesisConfig
from voiceforge.core import (
    AudioPayload,
    BaseEngine,
    EngineSynthesisRequest,
    EngineUnavailable,
    InvalidParameter,
    SynthesisFailed,
    SynthesisRequest,
    UnknownVoice,
    VoiceForgeError,
)
from voiceforge.core.resilience import OperationTimeout, async_timeout
from voiceforge.gateway.result import Failure, GatewayResult, Success
from voiceforge.utils import get_logger, timed
from voiceforge.voices import ReferenceAudioStore, VoiceRegistry

logger = get_logger(__name__)


def _check_range(name: str, value: object, low: float, high: float) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidParameter(f"{name} must be a number", field=name, value=value)
    if not math.isfinite(value) or not low <= value <= high:
        raise InvalidParameter(
            f"{name} must be between {low} and {high}", field=name, value=value
        )


class SynthesisGateway:
    """Translates synthesis requests into engine calls.

    Stateless apart from the shared registry. Never retries: a failed
    engine call comes back as a Failure carrying SynthesisFailed or
    EngineUnavailable.
    """

    def __init__(
        self,
        registry: VoiceRegistry,
        engine: BaseEngine,
        references: ReferenceAudioStore | None = None,
        config: SynthesisConfig | None = None,
        timeout: float = 30.0,
    ):
        self.registry = registry
        self.engine = engine
        self.references = references
        self.config = config or SynthesisConfig()
        self.timeout = timeout

    def validate(self, request: SynthesisRequest) -> None:
        """Check text and parameter domains.

        Raises:
            InvalidParameter: Empty text, or speed/variability out of range
        """
        if not isinstance(request.text, str) or not request.text.strip():
            raise InvalidParameter("Text must not be empty", field="text")
        if not isinstance(request.voice_id, str) or not request.voice_id:
            raise InvalidParameter("Voice must be selected", field="voice_id")

        _check_range("speed", request.speed, self.config.min_speed, self.config.max_speed)
        _check_range(
            "variability",
            request.variability,
            self.config.min_variability,
            self.config.max_variability,
        )

    @timed
    async def synthesize(self, request: SynthesisRequest) -> GatewayResult[AudioPayload]:
        """Synthesize speech for request.

        Returns:
            Success(AudioPayload) or Failure(InvalidParameter | UnknownVoice |
            SynthesisFailed | EngineUnavailable)
        """
        try:
            payload = await self._synthesize(request)
        except VoiceForgeError as e:
            logger.warning(f"Synthesis rejected [{e.code}]: {e}")
            return Failure(e)
        return Success(payload)

    async def _synthesize(self, request: SynthesisRequest) -> AudioPayload:
        self.validate(request)
        handle = self.registry.resolve(request.voice_id)

        reference_audio = None
        if handle is not None and self.references is not None:
            try:
                reference_audio = await self.references.load(handle)
            except FileNotFoundError as e:
                raise UnknownVoice(request.voice_id, reason="missing_reference") from e

        engine_request = EngineSynthesisRequest(
            text=request.text,
            voice_id=request.voice_id,
            speed=float(request.speed),
            variability=float(request.variability),
            reference_handle=handle,
            reference_audio=reference_audio,
        )

        try:
            payload = await async_timeout(
                self.engine.synthesize(engine_request), self.timeout, "synthesize"
            )
        except OperationTimeout as e:
            raise EngineUnavailable(
                "Synthesis engine did not respond in time", timeout=self.timeout
            ) from e
        except VoiceForgeError:
            raise
        except Exception as e:
            logger.exception(f"Engine synthesis call crashed: {e}")
            raise SynthesisFailed(f"Engine call failed: {e}") from e

        self._check_payload(payload)
        logger.info(
            f"Synthesized {len(request.text)} chars with voice={request.voice_id} "
            f"-> {payload.size} bytes {payload.mime_type}"
        )
        return payload

    @staticmethod
    def _check_payload(payload: object) -> None:
        if not isinstance(payload, AudioPayload):
            raise SynthesisFailed("Engine returned no audio")
        if not is_audio_mime(payload.mime_type):
            raise SynthesisFailed(
                "Engine returned non-audio content", detail=payload.mime_type
            )
        if payload.size == 0:
            raise SynthesisFailed("Engine returned empty audio")
