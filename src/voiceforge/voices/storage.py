"""Filesystem storage for trained voices' reference audio."""

from __future__ import annotations

import os
import re
import tempfile
from pathlib import Path

import aiofiles

from voiceforge.codec.datauri import base_mime
from voiceforge.core.base import AudioPayload
from voiceforge.utils import get_logger

logger = get_logger(__name__)

MIME_EXTENSIONS: dict[str, str] = {
    "audio/wav": ".wav",
    "audio/x-wav": ".wav",
    "audio/wave": ".wav",
    "audio/vnd.wave": ".wav",
    "audio/mpeg": ".mp3",
    "audio/mp3": ".mp3",
    "audio/ogg": ".ogg",
    "audio/flac": ".flac",
    "audio/x-flac": ".flac",
    "audio/webm": ".webm",
}

# Unknown audio-like types are stored with this extension
DEFAULT_EXTENSION = ".wav"

EXTENSION_MIMES: dict[str, str] = {
    ".wav": "audio/wav",
    ".mp3": "audio/mpeg",
    ".ogg": "audio/ogg",
    ".flac": "audio/flac",
    ".webm": "audio/webm",
}

_SAFE_KEY = re.compile(r"^[A-Za-z0-9_-]+$")


def extension_for(mime_type: str) -> str:
    """File extension for a MIME type, falling back to DEFAULT_EXTENSION."""
    return MIME_EXTENSIONS.get(base_mime(mime_type), DEFAULT_EXTENSION)


def mime_for(path: Path) -> str:
    """MIME type for a stored file, from its extension."""
    return EXTENSION_MIMES.get(path.suffix.lower(), "audio/wav")


class ReferenceAudioStore:
    """Stores raw reference audio as files keyed by voice id.

    Handles are absolute file paths inside ``root``. Writes go to a temp
    file in the same directory and are hard-linked into place, so a handle
    never points at a partially written file and existing audio is never
    overwritten.
    """

    def __init__(self, root: Path | str):
        self.root = Path(root)

    def path_for(self, voice_id: str, mime_type: str) -> Path:
        if not _SAFE_KEY.match(voice_id):
            raise ValueError(f"Voice id is not a safe storage key: {voice_id!r}")
        return self.root / f"{voice_id}{extension_for(mime_type)}"

    async def save(self, voice_id: str, payload: AudioPayload) -> str:
        """Write payload bytes and return the handle.

        Raises:
            FileExistsError: If audio is already stored under voice_id
        """
        target = self.path_for(voice_id, payload.mime_type)
        self.root.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(dir=self.root, prefix=f".{voice_id}.", suffix=".part")
        os.close(fd)
        tmp_path = Path(tmp_name)

        try:
            async with aiofiles.open(tmp_path, "wb") as f:
                await f.write(payload.data)
            # os.link refuses to overwrite an existing target
            os.link(tmp_path, target)
        finally:
            tmp_path.unlink(missing_ok=True)

        logger.info(f"Stored reference audio: {target.name} ({payload.size} bytes)")
        return str(target.resolve())

    def exists(self, handle: str | None) -> bool:
        path = self._resolve(handle)
        return path is not None and path.is_file()

    async def load(self, handle: str) -> AudioPayload:
        """Read stored audio back.

        Raises:
            FileNotFoundError: If the handle does not resolve to a stored file
        """
        path = self._resolve(handle)
        if path is None or not path.is_file():
            raise FileNotFoundError(f"No reference audio at {handle}")

        async with aiofiles.open(path, "rb") as f:
            data = await f.read()
        return AudioPayload(data=data, mime_type=mime_for(path))

    def delete(self, handle: str | None) -> bool:
        """Remove stored audio. Returns False if nothing was removed."""
        path = self._resolve(handle)
        if path is None:
            return False
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        logger.info(f"Removed reference audio: {path.name}")
        return True

    def _resolve(self, handle: str | None) -> Path | None:
        """Map a handle to a path, rejecting anything outside root."""
        if not handle:
            return None
        path = Path(handle).resolve()
        if self.root.resolve() not in path.parents:
            return None
        return path
