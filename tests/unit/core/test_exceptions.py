"""Tests for domain exceptions."""

from voiceforge.core import (
    DuplicateVoice,
    EngineUnavailable,
    InvalidAudioSample,
    InvalidParameter,
    SynthesisFailed,
    UnknownVoice,
    VoiceForgeError,
)


class TestExceptions:
    def test_all_share_base(self):
        for exc in (
            UnknownVoice("x"),
            DuplicateVoice("x"),
            InvalidParameter("bad"),
            InvalidAudioSample("bad"),
            SynthesisFailed("bad"),
            EngineUnavailable(),
        ):
            assert isinstance(exc, VoiceForgeError)

    def test_codes_are_distinct(self):
        codes = {
            UnknownVoice.code,
            DuplicateVoice.code,
            InvalidParameter.code,
            InvalidAudioSample.code,
            SynthesisFailed.code,
            EngineUnavailable.code,
        }
        assert len(codes) == 6

    def test_unknown_voice_messages(self):
        assert "Unknown voice" in str(UnknownVoice("narrator"))
        missing = UnknownVoice("mine_abc123", reason="missing_reference")
        assert "reference audio" in str(missing)
        assert missing.reason == "missing_reference"

    def test_synthesis_failed_carries_engine_detail(self):
        exc = SynthesisFailed("Engine request failed", status_code=500, detail="CUDA out of memory")
        assert exc.status_code == 500
        assert "CUDA out of memory" in str(exc)
        assert exc.recoverable is True

    def test_invalid_parameter_names_field(self):
        exc = InvalidParameter("speed must be between 0.5 and 2.0", field="speed", value=3.0)
        assert exc.field == "speed"
        assert "field=speed" in str(exc)

    def test_engine_unavailable_details(self):
        exc = EngineUnavailable(endpoint="http://tts/api/tts", timeout=30.0)
        assert "endpoint=http://tts/api/tts" in str(exc)
        assert "timeout=30.0s" in str(exc)
