"""Custom exceptions for the VoiceForge gateway.

Exception hierarchy:
    VoiceForgeError (base)
    ├── ConfigError            - Configuration loading/validation failed
    ├── RegistryError          - Component registry misuse
    ├── MalformedPayload       - Data URI could not be decoded
    ├── UnknownVoice           - Voice id not registered or unusable
    ├── DuplicateVoice         - Voice id already registered
    ├── InvalidParameter       - Request field out of domain
    ├── InvalidAudioSample     - Training sample rejected
    ├── SynthesisFailed        - Engine returned failure/invalid audio
    ├── TrainingFailed         - Training could not complete
    └── EngineUnavailable      - Engine unreachable or timed out
"""

from __future__ import annotations


class VoiceForgeError(Exception):
    """Base exception for all VoiceForge errors."""

    code = "INTERNAL_ERROR"

    def __init__(self, message: str, *, recoverable: bool = False) -> None:
        """Initialize error.

        Args:
            message: Error description
            recoverable: Whether the caller may retry the operation
        """
        self.message = message
        self.recoverable = recoverable
        super().__init__(message)


def _with_details(message: str, details: list[str]) -> str:
    if details:
        return f"{message} ({', '.join(details)})"
    return message


class ConfigError(VoiceForgeError):
    """Configuration loading or validation error."""

    code = "CONFIG_ERROR"


class RegistryError(VoiceForgeError):
    """Component registry error."""

    code = "REGISTRY_ERROR"


class MalformedPayload(VoiceForgeError):
    """Data URI lacks the data:<mime>;base64, structure or has a bad payload."""

    code = "MALFORMED_PAYLOAD"

    def __init__(self, message: str, *, reason: str | None = None) -> None:
        self.reason = reason
        super().__init__(_with_details(message, [f"reason={reason}"] if reason else []))


class UnknownVoice(VoiceForgeError):
    """Voice id is not registered, or its reference audio is gone.

    Raised when:
    - The id was never registered
    - A trained voice's reference handle no longer resolves to stored audio
    """

    code = "UNKNOWN_VOICE"

    def __init__(self, voice_id: str, *, reason: str = "not_registered") -> None:
        self.voice_id = voice_id
        self.reason = reason
        if reason == "missing_reference":
            message = f"Voice '{voice_id}' has no stored reference audio"
        else:
            message = f"Unknown voice: '{voice_id}'"
        super().__init__(message)


class DuplicateVoice(VoiceForgeError):
    """Voice id collides with an existing built-in or trained voice."""

    code = "DUPLICATE_VOICE"

    def __init__(self, voice_id: str, *, builtin: bool = False) -> None:
        self.voice_id = voice_id
        self.builtin = builtin
        kind = "built-in" if builtin else "trained"
        super().__init__(f"Voice '{voice_id}' already registered as {kind} voice")


class InvalidParameter(VoiceForgeError):
    """A request field is missing or outside its allowed domain."""

    code = "INVALID_PARAMETER"

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        value: object = None,
    ) -> None:
        self.field = field
        self.value = value

        details = []
        if field:
            details.append(f"field={field}")
        if value is not None:
            details.append(f"value={value!r}")

        super().__init__(_with_details(message, details))


class InvalidAudioSample(VoiceForgeError):
    """Training audio sample has a disallowed type or size.

    Raised when:
    - MIME type is not in the allow-list
    - Sample exceeds the size cap
    - Sample is empty
    """

    code = "INVALID_AUDIO"

    def __init__(
        self,
        message: str,
        *,
        reason: str | None = None,
        mime_type: str | None = None,
        size_bytes: int | None = None,
    ) -> None:
        self.reason = reason
        self.mime_type = mime_type
        self.size_bytes = size_bytes

        details = []
        if reason:
            details.append(f"reason={reason}")
        if mime_type:
            details.append(f"mime={mime_type}")
        if size_bytes is not None:
            details.append(f"size={size_bytes}")

        super().__init__(_with_details(message, details))


class SynthesisFailed(VoiceForgeError):
    """Engine rejected the request or returned unusable audio."""

    code = "SYNTHESIS_FAILED"

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        detail: str | None = None,
    ) -> None:
        self.status_code = status_code
        self.detail = detail

        details = []
        if status_code is not None:
            details.append(f"status={status_code}")
        if detail:
            details.append(f"detail={detail}")

        super().__init__(_with_details(message, details), recoverable=True)


class TrainingFailed(VoiceForgeError):
    """Voice training could not complete; partial storage was rolled back."""

    code = "TRAINING_FAILED"

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        detail: str | None = None,
    ) -> None:
        self.status_code = status_code
        self.detail = detail

        details = []
        if status_code is not None:
            details.append(f"status={status_code}")
        if detail:
            details.append(f"detail={detail}")

        super().__init__(_with_details(message, details), recoverable=True)


class EngineUnavailable(VoiceForgeError):
    """Synthesis engine is unreachable or did not answer in time."""

    code = "ENGINE_UNAVAILABLE"

    def __init__(
        self,
        message: str = "Synthesis engine unavailable",
        *,
        endpoint: str | None = None,
        timeout: float | None = None,
    ) -> None:
        self.endpoint = endpoint
        self.timeout = timeout

        details = []
        if endpoint:
            details.append(f"endpoint={endpoint}")
        if timeout is not None:
            details.append(f"timeout={timeout:.1f}s")

        super().__init__(_with_details(message, details), recoverable=True)
