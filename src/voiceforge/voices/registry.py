"""Voice registry: built-in and trained voice identities.

Built-in voices are fixed at construction and listed first in their
configured order; trained voices follow in creation order. Registration
is an atomic add-if-absent guarded by a lock, and the record store accepts
the identity before it becomes visible to readers.
"""

from __future__ import annotations

import json
import os
import tempfile
import threading
from pathlib import Path
from typing import Iterable, Protocol

from voiceforge.config import RegistryConfig
from voiceforge.core import (
    BaseVoiceStore,
    DuplicateVoice,
    RegistryError,
    UnknownVoice,
    VoiceIdentity,
    VoiceKind,
)
from voiceforge.utils import get_logger, logged

logger = get_logger(__name__)


class ReferenceLookup(Protocol):
    def exists(self, handle: str | None) -> bool: ...


class InMemoryVoiceStore(BaseVoiceStore):
    """Process-local record store."""

    def __init__(self, voices: Iterable[VoiceIdentity] = ()):
        self._voices = list(voices)

    def load(self) -> list[VoiceIdentity]:
        return list(self._voices)

    def add(self, identity: VoiceIdentity) -> None:
        self._voices.append(identity)


class JsonVoiceStore(BaseVoiceStore):
    """Trained voices persisted to a single JSON file.

    File layout: ``{"voices": [<VoiceIdentity.to_dict()>, ...]}`` in
    creation order. Every add rewrites the file through a temp file and
    an atomic rename.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path)
        self._voices: list[VoiceIdentity] | None = None

    def load(self) -> list[VoiceIdentity]:
        if self._voices is None:
            self._voices = self._read()
        return list(self._voices)

    @logged
    def add(self, identity: VoiceIdentity) -> None:
        voices = self.load() + [identity]
        self._write(voices)
        self._voices = voices

    def _read(self) -> list[VoiceIdentity]:
        if not self.path.exists():
            return []

        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise RegistryError(f"Voice registry file is corrupt: {self.path}: {e}") from e

        voices = []
        for entry in raw.get("voices", []):
            try:
                voices.append(VoiceIdentity.from_dict(entry))
            except (KeyError, ValueError) as e:
                logger.warning(f"Skipping invalid registry entry {entry!r}: {e}")
        return voices

    def _write(self, voices: list[VoiceIdentity]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = {"voices": [voice.to_dict() for voice in voices]}

        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2, ensure_ascii=False)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise


class VoiceRegistry:
    """Registry of voice identities.

    Usage:
        registry = VoiceRegistry.from_config(config.registry, reference_store)

        registry.list_voices()           # built-ins, then trained
        registry.resolve("default-male") # None -> engine default
        registry.register(identity)      # DuplicateVoice on collision
    """

    def __init__(
        self,
        builtins: Iterable[VoiceIdentity],
        store: BaseVoiceStore | None = None,
        references: ReferenceLookup | None = None,
    ):
        self._lock = threading.Lock()
        self._store = store or InMemoryVoiceStore()
        self._references = references

        self._builtins: dict[str, VoiceIdentity] = {}
        for voice in builtins:
            if voice.id in self._builtins:
                raise RegistryError(f"Duplicate built-in voice: {voice.id}")
            self._builtins[voice.id] = VoiceIdentity(
                id=voice.id,
                display_name=voice.display_name,
                kind=VoiceKind.BUILTIN,
                created_at=voice.created_at,
            )

        self._trained: dict[str, VoiceIdentity] = {}
        for voice in self._store.load():
            if voice.id in self._builtins or voice.id in self._trained:
                logger.warning(f"Ignoring stored voice colliding with existing id: {voice.id}")
                continue
            if voice.kind is not VoiceKind.TRAINED:
                logger.warning(f"Ignoring stored non-trained voice: {voice.id}")
                continue
            self._trained[voice.id] = voice

        logger.info(
            f"VoiceRegistry initialized: {len(self._builtins)} built-in, "
            f"{len(self._trained)} trained"
        )

    @classmethod
    def from_config(
        cls,
        config: RegistryConfig,
        references: ReferenceLookup | None = None,
    ) -> VoiceRegistry:
        store: BaseVoiceStore
        if config.store == "json":
            store = JsonVoiceStore(config.path)
        else:
            store = InMemoryVoiceStore()

        builtins = [
            VoiceIdentity(id=voice.id, display_name=voice.name, kind=VoiceKind.BUILTIN)
            for voice in config.builtin_voices
        ]
        return cls(builtins, store=store, references=references)

    def list_voices(self) -> list[VoiceIdentity]:
        """Built-ins in fixed order, then trained voices in creation order."""
        with self._lock:
            return list(self._builtins.values()) + list(self._trained.values())

    def get(self, voice_id: str) -> VoiceIdentity:
        with self._lock:
            voice = self._builtins.get(voice_id) or self._trained.get(voice_id)
        if voice is None:
            raise UnknownVoice(voice_id)
        return voice

    def resolve(self, voice_id: str) -> str | None:
        """Map a voice id to its reference handle.

        Returns:
            The stored reference handle, or None for the engine default voice

        Raises:
            UnknownVoice: If the id is not registered, or a trained voice's
                reference audio is missing
        """
        voice = self.get(voice_id)
        if voice.is_builtin:
            return voice.reference_handle

        handle = voice.reference_handle
        if not handle or (self._references is not None and not self._references.exists(handle)):
            logger.warning(f"Trained voice {voice_id} has no usable reference audio: {handle}")
            raise UnknownVoice(voice_id, reason="missing_reference")
        return handle

    def register(self, identity: VoiceIdentity) -> VoiceIdentity:
        """Add a trained identity if its id is free.

        Raises:
            DuplicateVoice: If the id is taken by a built-in or trained voice
            RegistryError: If a built-in identity is passed
        """
        if identity.kind is not VoiceKind.TRAINED:
            raise RegistryError("Built-in voices are fixed at startup")

        with self._lock:
            if identity.id in self._builtins:
                raise DuplicateVoice(identity.id, builtin=True)
            if identity.id in self._trained:
                raise DuplicateVoice(identity.id)

            self._store.add(identity)
            self._trained[identity.id] = identity

        logger.info(f"Registered voice: {identity.id} ({identity.display_name})")
        return identity

    def __contains__(self, voice_id: str) -> bool:
        with self._lock:
            return voice_id in self._builtins or voice_id in self._trained

    def __len__(self) -> int:
        with self._lock:
            return len(self._builtins) + len(self._trained)

    def __repr__(self) -> str:
        return f"VoiceRegistry(builtin={len(self._builtins)}, trained={len(self._trained)})"
