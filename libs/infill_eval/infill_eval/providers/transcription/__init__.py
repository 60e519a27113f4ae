"""Transcription provider implementations."""

from infill_eval.providers.transcription.base import TranscriptionProvider
from infill_eval.providers.transcription.cartesia import CartesiaTranscriptionProvider

__all__ = ["TranscriptionProvider", "CartesiaTranscriptionProvider"]
