"""Synthesis and training gateways."""

from voiceforge.gateway.result import Success, Failure, GatewayResult
from voiceforge.gateway.synthesis import SynthesisGateway
from voiceforge.gateway.training import (
    TrainingGateway,
    sanitize_model_name,
    mint_voice_id,
)

__all__ = [
    "Success",
    "Failure",
    "GatewayResult",
    "SynthesisGateway",
    "TrainingGateway",
    "sanitize_model_name",
    "mint_voice_id",
]
