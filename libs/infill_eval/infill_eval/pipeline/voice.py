"""Voice identity preparation shared by every trial of a batch."""

from __future__ import annotations

import logging
import time
from pathlib import Path

from infill_eval.exceptions import InsufficientWordsError
from infill_eval.models.word import Word
from infill_eval.providers.media.base import MediaProvider
from infill_eval.providers.voice.base import VoiceProvider

logger = logging.getLogger(__name__)


async def prepare_voice(
    audio_path: str,
    words: list[Word],
    *,
    media: MediaProvider,
    voice: VoiceProvider,
    output_dir: str | Path,
    sample_words: int = 20,
    voice_id: str | None = None,
    description: str = "Test voice",
    language: str | None = None,
    mode: str = "stability",
) -> str:
    """Return a voice identity, cloning one from the start of the recording if needed.

    Any failure here is fatal to the batch.
    """
    if voice_id:
        logger.info("using configured voice (voice_id=%s)", voice_id)
        return voice_id
    if not words:
        raise InsufficientWordsError(required=1, available=0)

    last = min(int(sample_words), len(words) - 1)
    start = words[0].start
    end = words[last].end
    sample_path = Path(output_dir) / "voice-sample.wav"

    logger.info("cloning voice (sample=%.2fs-%.2fs, words=%s)", start, end, last + 1)
    await media.extract_segment(audio_path, start, end, str(sample_path))
    cloned = await voice.clone_voice(
        str(sample_path),
        name=f"infill-eval-{int(time.time() * 1000)}",
        description=description,
        language=language,
        mode=mode,
    )
    logger.info("voice cloned (voice_id=%s)", cloned)
    return cloned
