"""Cartesia speech-to-text provider."""

from __future__ import annotations

import logging
from pathlib import Path

from infill_eval.error_codes import ErrorCode
from infill_eval.models.serializers import deserialize_words
from infill_eval.models.word import Word
from infill_eval.providers.cartesia.client import CartesiaClient, guess_mime_type
from infill_eval.providers.transcription.base import TranscriptionProvider

logger = logging.getLogger(__name__)


class CartesiaTranscriptionProvider(TranscriptionProvider):
    """Word-granularity transcription via `POST /stt`."""

    def __init__(self, client: CartesiaClient, model: str = "ink-whisper", language: str = "en") -> None:
        self.client = client
        self.model = model
        self.language = language

    async def transcribe(
        self,
        audio_path: str,
        language: str | None = None,
    ) -> list[Word]:
        filename = Path(audio_path).name
        data = {
            "model": self.model,
            "language": language or self.language,
            "timestamp_granularities[]": ["word"],
        }
        with open(audio_path, "rb") as f:
            files = {"file": (filename, f, guess_mime_type(audio_path))}
            payload = await self.client.post_json(
                "/stt",
                data=data,
                files=files,
                error_code=ErrorCode.TRANSCRIPTION_FAILED,
            )

        items = payload.get("words") or []
        words = deserialize_words([item for item in items if isinstance(item, dict)])
        logger.info("transcribed %s (words=%s, model=%s)", filename, len(words), self.model)
        return words
