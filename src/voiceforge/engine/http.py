"""HTTP client for an external synthesis/cloning service (e.g. an XTTS server)."""

from __future__ import annotations

from typing import Any

import httpx

from voiceforge.config import EngineConfig
from voiceforge.core import (
    AudioPayload,
    BaseEngine,
    EngineSynthesisRequest,
    EngineTrainingRequest,
    EngineTrainingResponse,
    EngineUnavailable,
    MalformedPayload,
    SynthesisFailed,
    TrainingFailed,
)
from voiceforge.core.resilience import engine_retrying
from voiceforge.engine.base import EngineRegistry
from voiceforge.utils import get_logger

logger = get_logger(__name__)

# Longest engine error body carried into exceptions
MAX_DETAIL_CHARS = 500


@EngineRegistry.register("http")
class HttpEngine(BaseEngine):
    """Engine reached over JSON/HTTP.

    Endpoints (relative to ``config.base_url``):
        POST /tts          {text, voiceId, speed, variability, referenceAudio?}
                           -> {audioDataUri}
        POST /train-voice  {modelName, audioDataUri}
                           -> {trainingStatus, modelId?}
        GET  /health       any 2xx = available
    """

    def __init__(self, config: EngineConfig, client: httpx.AsyncClient | None = None):
        self.config = config
        self.base_url = config.base_url.rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=config.timeout_seconds)
        logger.info(f"HttpEngine initialized: base_url={self.base_url}")

    async def synthesize(self, request: EngineSynthesisRequest) -> AudioPayload:
        body: dict[str, Any] = {
            "text": request.text,
            "voiceId": request.voice_id,
            "speed": request.speed,
            "variability": request.variability,
        }
        if request.reference_audio is not None:
            body["referenceAudio"] = request.reference_audio.to_data_uri()

        data = await self._post_json("/tts", body, SynthesisFailed)

        data_uri = data.get("audioDataUri")
        if not isinstance(data_uri, str) or not data_uri:
            raise SynthesisFailed("Engine response has no audioDataUri")

        try:
            return AudioPayload.from_data_uri(data_uri)
        except MalformedPayload as e:
            raise SynthesisFailed("Engine returned an invalid audioDataUri", detail=e.message) from e

    async def train(self, request: EngineTrainingRequest) -> EngineTrainingResponse:
        body = {
            "modelName": request.model_name,
            "audioDataUri": request.audio.to_data_uri(),
        }
        data = await self._post_json("/train-voice", body, TrainingFailed)

        status = data.get("trainingStatus")
        if not isinstance(status, str) or not status:
            raise TrainingFailed("Engine response has no trainingStatus")

        model_id = data.get("modelId")
        return EngineTrainingResponse(
            training_status=status,
            model_id=model_id if isinstance(model_id, str) and model_id else None,
        )

    async def is_available(self) -> bool:
        try:
            response = await self._client.get(f"{self.base_url}/health", timeout=5.0)
            return response.is_success
        except httpx.HTTPError as e:
            logger.debug(f"Engine health check failed: {e}")
            return False

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _post_json(
        self,
        path: str,
        body: dict[str, Any],
        failure: type[SynthesisFailed] | type[TrainingFailed],
    ) -> dict[str, Any]:
        """POST body and return the decoded JSON object.

        Raises:
            EngineUnavailable: Connection failure or timeout
            failure: Non-2xx status or a body that is not a JSON object
        """
        url = f"{self.base_url}{path}"

        try:
            async for attempt in engine_retrying(
                self.config.max_attempts,
                self.config.retry_min_wait,
                self.config.retry_max_wait,
                (httpx.TransportError,),
            ):
                with attempt:
                    response = await self._client.post(url, json=body)
        except httpx.TimeoutException as e:
            raise EngineUnavailable(
                "Synthesis engine did not respond in time",
                endpoint=url,
                timeout=self.config.timeout_seconds,
            ) from e
        except httpx.TransportError as e:
            raise EngineUnavailable(f"Cannot reach synthesis engine: {e}", endpoint=url) from e

        if response.is_error:
            detail = response.text.strip()[:MAX_DETAIL_CHARS] or response.reason_phrase
            logger.error(f"Engine {path} failed: {response.status_code} {detail}")
            raise failure(
                f"Engine request failed with status {response.status_code}",
                status_code=response.status_code,
                detail=detail,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise failure("Engine returned invalid JSON", status_code=response.status_code) from e

        if not isinstance(data, dict):
            raise failure("Engine returned an unexpected response", status_code=response.status_code)
        return data

