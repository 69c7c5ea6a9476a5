"""Data URI codec."""

from voiceforge.codec.datauri import encode, decode, base_mime, is_audio_mime

__all__ = [
    "encode",
    "decode",
    "base_mime",
    "is_audio_mime",
]
