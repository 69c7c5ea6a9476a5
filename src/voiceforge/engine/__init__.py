"""External synthesis engine clients."""

from voiceforge.engine.base import EngineRegistry
from voiceforge.engine.http import HttpEngine
from voiceforge.engine.placeholder import PlaceholderEngine

__all__ = [
    "EngineRegistry",
    "HttpEngine",
    "PlaceholderEngine",
]
