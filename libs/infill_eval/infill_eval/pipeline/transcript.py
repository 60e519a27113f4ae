"""Word timestamp loading (cache -> transcriber -> cache -> normalize)."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from infill_eval.models.word import Word
from infill_eval.providers.transcription.base import TranscriptionProvider
from infill_eval.storage.timestamp_cache import TimestampCache
from infill_eval.utils.word_merge import merge_space_words

logger = logging.getLogger(__name__)


async def load_words(
    audio_path: str,
    transcriber: TranscriptionProvider,
    cache: TimestampCache,
    *,
    language: str | None = None,
) -> list[Word]:
    """Return normalized word timestamps for `audio_path`.

    The cache holds the raw transcriber output; space merging runs after
    every load so cached entries stay provider-shaped.
    """
    raw = await asyncio.to_thread(cache.get, audio_path)
    if raw is not None:
        logger.info("using cached timestamps (source=%s, words=%s)", Path(audio_path).name, len(raw))
    else:
        logger.info("fetching timestamps (source=%s)", Path(audio_path).name)
        raw = await transcriber.transcribe(audio_path, language=language)
        path = await asyncio.to_thread(cache.put, audio_path, raw)
        logger.info("cached %s words (path=%s)", len(raw), path)

    words = merge_space_words(raw)
    if len(words) != len(raw):
        logger.debug("merged %s whitespace tokens", len(raw) - len(words))
    return words
