"""Data URI codec for audio payloads.

Bridges opaque binary audio and self-describing strings of the form
``data:<mime>;base64,<payload>``. Pure functions, no side effects.
"""

from __future__ import annotations

import base64
import binascii

from voiceforge.core.exceptions import MalformedPayload

DATA_PREFIX = "data:"
BASE64_MARKER = ";base64,"


def encode(data: bytes, mime_type: str) -> str:
    """Encode bytes as a base64 data URI.

    Args:
        data: Raw bytes (may be empty)
        mime_type: MIME type embedded in the URI, kept verbatim

    Returns:
        ``data:<mime_type>;base64,<payload>``

    Raises:
        MalformedPayload: If the MIME type cannot be embedded unambiguously
    """
    _check_mime(mime_type)
    payload = base64.b64encode(bytes(data)).decode("ascii")
    return f"{DATA_PREFIX}{mime_type}{BASE64_MARKER}{payload}"


def decode(data_uri: str) -> tuple[bytes, str]:
    """Decode a base64 data URI into (bytes, mime_type).

    Raises:
        MalformedPayload: Missing ``data:`` prefix or ``;base64,`` marker,
            empty MIME segment, or invalid base64 payload
    """
    if not isinstance(data_uri, str):
        raise MalformedPayload("Data URI must be a string", reason="not_a_string")

    uri = data_uri.strip()
    if not uri.startswith(DATA_PREFIX):
        raise MalformedPayload("Data URI must start with 'data:'", reason="missing_prefix")

    marker_at = uri.find(BASE64_MARKER)
    if marker_at < 0:
        raise MalformedPayload("Data URI must be base64 encoded", reason="missing_base64_marker")

    mime_type = uri[len(DATA_PREFIX):marker_at]
    if not mime_type.strip():
        raise MalformedPayload("Data URI has an empty MIME type", reason="empty_mime")

    payload = uri[marker_at + len(BASE64_MARKER):]
    try:
        data = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise MalformedPayload(f"Invalid base64 payload: {e}", reason="invalid_base64") from e

    return data, mime_type


def base_mime(mime_type: str) -> str:
    """Lowercased MIME type without parameters: 'audio/WebM;codecs=opus' -> 'audio/webm'."""
    return mime_type.split(";", 1)[0].strip().lower()


def is_audio_mime(mime_type: str | None) -> bool:
    """True for audio/* MIME types."""
    return bool(mime_type) and base_mime(mime_type).startswith("audio/")


def _check_mime(mime_type: str) -> None:
    if not isinstance(mime_type, str) or not mime_type.strip():
        raise MalformedPayload("MIME type must not be empty", reason="empty_mime")
    # decode() splits at the first marker
    if BASE64_MARKER in mime_type:
        raise MalformedPayload(f"MIME type cannot be embedded: {mime_type!r}", reason="invalid_mime")
