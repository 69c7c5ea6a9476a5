"""Engine registry and shared helpers."""

from voiceforge.core import Registry, BaseEngine

# Engine Registry - all engine clients register here
EngineRegistry = Registry[BaseEngine]("engine")
