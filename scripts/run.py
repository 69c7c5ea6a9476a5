#!/usr/bin/env python
"""CLI for the VoiceForge gateway."""

import argparse
import asyncio
import mimetypes
import sys
from pathlib import Path

from voiceforge import AudioPayload, Failure, SynthesisRequest, TrainingRequest, VoiceForge


def cmd_serve(args):
    """Run the HTTP API."""
    import uvicorn

    from voiceforge.api import APIConfig, create_app

    config = APIConfig(
        host=args.host,
        port=args.port,
        config_env=args.env,
        config_dir=args.config_dir,
    )
    uvicorn.run(create_app(config), host=config.host, port=config.port)


def cmd_voices(args):
    """List registered voices."""
    forge = VoiceForge.from_config(env=args.env, config_dir=args.config_dir)

    print(f"\n{'ID':<32} {'KIND':<8} NAME")
    print("-" * 60)
    for voice in forge.list_voices():
        print(f"{voice.id:<32} {voice.kind.value:<8} {voice.display_name}")


async def _synthesize(args) -> int:
    forge = VoiceForge.from_config(env=args.env, config_dir=args.config_dir)
    try:
        result = await forge.synthesize(
            SynthesisRequest(
                text=args.text,
                voice_id=args.voice,
                speed=args.speed,
                variability=args.variability,
            )
        )
    finally:
        await forge.close()

    if isinstance(result, Failure):
        print(f"  ✗ {result.code}: {result.error}")
        return 1

    output = Path(args.output)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(result.value.data)
    print(f"  ✓ {result.value.size} bytes ({result.value.mime_type}) -> {output}")
    return 0


def cmd_synthesize(args):
    """Synthesize text to an audio file."""
    return asyncio.run(_synthesize(args))


async def _train(args) -> int:
    audio_path = Path(args.audio)
    if not audio_path.is_file():
        print(f"  ✗ File not found: {audio_path}")
        return 1

    mime_type, _ = mimetypes.guess_type(str(audio_path))
    sample = AudioPayload(data=audio_path.read_bytes(), mime_type=mime_type or "application/octet-stream")

    forge = VoiceForge.from_config(env=args.env, config_dir=args.config_dir)
    try:
        result = await forge.train_voice(TrainingRequest(model_name=args.name, audio_sample=sample))
    finally:
        await forge.close()

    if isinstance(result, Failure):
        print(f"  ✗ {result.code}: {result.error}")
        return 1

    trained = result.value
    print(f"  ✓ Voice '{trained.identity.display_name}' -> {trained.identity.id}")
    print(f"    Status: {trained.training_status}")
    return 0


def cmd_train(args):
    """Train a voice from an audio sample."""
    return asyncio.run(_train(args))


def main():
    parser = argparse.ArgumentParser(
        description="VoiceForge - voice registry and TTS gateway",
    )
    parser.add_argument("--env", "-e", default="development", help="Environment")
    parser.add_argument("--config-dir", "-c", default="configs", help="Config directory")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Serve
    p = subparsers.add_parser("serve", help="Run the HTTP API")
    p.add_argument("--host", default="0.0.0.0", help="Bind address")
    p.add_argument("--port", "-p", type=int, default=8080, help="Port")
    p.set_defaults(func=cmd_serve)

    # Voices
    p = subparsers.add_parser("voices", help="List voices")
    p.set_defaults(func=cmd_voices)

    # Synthesize
    p = subparsers.add_parser("synthesize", help="Synthesize speech")
    p.add_argument("text", help="Text to speak")
    p.add_argument("--voice", "-v", default="default-male", help="Voice id")
    p.add_argument("--speed", type=float, default=1.0, help="0.5 - 2.0")
    p.add_argument("--variability", type=float, default=0.5, help="0.0 - 1.0")
    p.add_argument("--output", "-o", default="./output/speech.wav", help="Audio path")
    p.set_defaults(func=cmd_synthesize)

    # Train
    p = subparsers.add_parser("train", help="Train a voice from a sample")
    p.add_argument("name", help="Name for the new voice")
    p.add_argument("audio", help="WAV or MP3 sample (max 5MB)")
    p.set_defaults(func=cmd_train)

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return

    sys.exit(args.func(args) or 0)


if __name__ == "__main__":
    main()
