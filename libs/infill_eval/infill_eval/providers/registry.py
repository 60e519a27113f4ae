"""Provider factory and registry."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from infill_eval.exceptions import ConfigurationError
from infill_eval.providers.cartesia.client import CartesiaClient
from infill_eval.providers.media.base import MediaProvider
from infill_eval.providers.transcription.base import TranscriptionProvider
from infill_eval.providers.voice.base import VoiceProvider


def get_cartesia_client(config: Mapping[str, Any]) -> CartesiaClient:
    return CartesiaClient(
        api_key=str(config.get("api_key") or ""),
        base_url=str(config.get("base_url") or "https://api.cartesia.ai"),
        api_version=str(config.get("api_version") or "2025-04-16"),
        timeout=float(config.get("timeout", 300.0)),
    )


def get_transcription_provider(
    config: Mapping[str, Any],
    client: CartesiaClient | None = None,
) -> TranscriptionProvider:
    """Get transcription provider based on configuration."""
    provider_type = str(config.get("provider", "cartesia")).strip().lower()

    match provider_type:
        case "cartesia":
            from infill_eval.providers.transcription.cartesia import CartesiaTranscriptionProvider

            return CartesiaTranscriptionProvider(
                client=client or get_cartesia_client(config),
                model=str(config.get("stt_model") or "ink-whisper"),
                language=str(config.get("language") or "en"),
            )
        case _:
            raise ConfigurationError(f"Unknown transcription provider: {provider_type}")


def get_voice_provider(
    config: Mapping[str, Any],
    client: CartesiaClient | None = None,
) -> VoiceProvider:
    """Get voice cloning/infill provider based on configuration."""
    provider_type = str(config.get("provider", "cartesia")).strip().lower()

    match provider_type:
        case "cartesia":
            from infill_eval.providers.voice.cartesia import CartesiaVoiceProvider

            return CartesiaVoiceProvider(
                client=client or get_cartesia_client(config),
                model=str(config.get("tts_model") or "sonic-2"),
                language=str(config.get("language") or "en"),
            )
        case _:
            raise ConfigurationError(f"Unknown voice provider: {provider_type}")


def get_media_provider(config: Mapping[str, Any]) -> MediaProvider:
    provider_type = str(config.get("provider", "ffmpeg")).strip().lower()

    match provider_type:
        case "ffmpeg" | "default":
            from infill_eval.providers.media.ffmpeg import FFmpegMediaProvider

            return FFmpegMediaProvider(
                ffmpeg_bin=str(config.get("ffmpeg_bin") or "ffmpeg"),
                ffprobe_bin=str(config.get("ffprobe_bin") or "ffprobe"),
                sample_rate=int(config.get("sample_rate", 44100)),
                channels=int(config.get("channels", 1)),
                codec=str(config.get("codec") or "pcm_s16le"),
            )
        case _:
            raise ConfigurationError(f"Unknown media provider: {provider_type}")
