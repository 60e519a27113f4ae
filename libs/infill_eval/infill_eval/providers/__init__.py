"""Provider abstractions for external services."""

from infill_eval.providers.registry import (
    get_cartesia_client,
    get_media_provider,
    get_transcription_provider,
    get_voice_provider,
)

__all__ = [
    "get_cartesia_client",
    "get_media_provider",
    "get_transcription_provider",
    "get_voice_provider",
]
