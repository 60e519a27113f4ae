"""Batch runner: evenly spaced infill trials over one recording."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import replace
from pathlib import Path

from infill_eval.config import Settings
from infill_eval.error_codes import ErrorCode
from infill_eval.exceptions import ConfigurationError
from infill_eval.models.trial import BatchReport, EvaluationTrial, TrialResult, TrialStatus
from infill_eval.models.word import Word
from infill_eval.pipeline.driver import InfillTrialRunner
from infill_eval.pipeline.transcript import load_words
from infill_eval.pipeline.voice import prepare_voice
from infill_eval.providers import (
    get_cartesia_client,
    get_media_provider,
    get_transcription_provider,
    get_voice_provider,
)
from infill_eval.providers.cartesia.client import CartesiaClient
from infill_eval.providers.media.base import JoinOptions, MediaProvider
from infill_eval.providers.transcription.base import TranscriptionProvider
from infill_eval.providers.voice.base import OutputFormat, VoiceProvider
from infill_eval.storage.timestamp_cache import TimestampCache
from infill_eval.utils.segment_boundaries import trial_start_indices

logger = logging.getLogger(__name__)


class BatchRunner:
    """Runs `trial_count` trials sequentially.

    Transcription, the word-count check and voice preparation are fatal; a
    failing trial is recorded in the report and the batch moves on. The
    word-count check runs before any extraction or synthesis call.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        transcriber: TranscriptionProvider,
        voice: VoiceProvider,
        media: MediaProvider,
        cache: TimestampCache,
        client: CartesiaClient | None = None,
    ) -> None:
        self.settings = settings
        self.transcriber = transcriber
        self.voice = voice
        self.media = media
        self.cache = cache
        self._client = client

    @classmethod
    def from_settings(cls, settings: Settings) -> "BatchRunner":
        client = get_cartesia_client(settings.cartesia.model_dump())
        return cls(
            settings,
            transcriber=get_transcription_provider(settings.cartesia.model_dump(), client=client),
            voice=get_voice_provider(settings.cartesia.model_dump(), client=client),
            media=get_media_provider(settings.audio.model_dump()),
            cache=TimestampCache(
                settings.cache_dir,
                key_mode=settings.eval.cache_key,
                model=settings.cartesia.stt_model,
                language=settings.cartesia.language,
            ),
            client=client,
        )

    def _trial_runner(self, source_key: str) -> InfillTrialRunner:
        audio = self.settings.audio
        return InfillTrialRunner(
            media=self.media,
            voice=self.voice,
            output_dir=self.settings.output_dir,
            source_key=source_key,
            output_format=OutputFormat(
                container=audio.container,
                encoding=audio.codec,
                sample_rate=audio.sample_rate,
            ),
            join_options=JoinOptions(mode=audio.join_mode, crossfade_s=audio.crossfade_s),
            fade_s=audio.fade_ms / 1000,
            slug_length=self.settings.eval.slug_length,
            language=self.settings.cartesia.language,
        )

    async def run(self) -> BatchReport:
        cfg = self.settings.eval
        source = cfg.source_audio
        if not Path(source).is_file():
            raise ConfigurationError(f"Source audio not found: {source}")
        self.settings.output_dir.mkdir(parents=True, exist_ok=True)

        words = await load_words(
            source,
            self.transcriber,
            self.cache,
            language=self.settings.cartesia.language,
        )
        logger.info("total words: %s", len(words))

        starts = trial_start_indices(len(words), cfg.total_count, cfg.trial_count)

        source_key = await asyncio.to_thread(self.cache.key_for, source)
        runner = self._trial_runner(source_key)
        report = BatchReport(source_audio=source, voice_id=cfg.voice_id, word_count=len(words))

        for i, start_index in enumerate(starts, start=1):
            trial = EvaluationTrial(
                index=i,
                source_audio=source,
                start_index=start_index,
                left_count=cfg.left_count,
                middle_count=cfg.middle_count,
                right_count=cfg.right_count,
                voice_id=report.voice_id or "",
            )
            # The voice is only needed once a trial has work to do.
            if report.voice_id is None and not runner.is_complete(trial, words):
                report.voice_id = await self._prepare_voice(source, words)
                trial = replace(trial, voice_id=report.voice_id)
            report.results.append(await self._run_trial(runner, trial, words))

        logger.info(
            "batch done (completed=%s, skipped=%s, failed=%s)",
            len(report.completed),
            len(report.skipped),
            len(report.failed),
        )
        for failed in report.failed:
            logger.warning("[%s] failed: %s", failed.trial.prefix, failed.error)
        return report

    async def _prepare_voice(self, source: str, words: list[Word]) -> str:
        cfg = self.settings.eval
        return await prepare_voice(
            source,
            words,
            media=self.media,
            voice=self.voice,
            output_dir=self.settings.output_dir,
            sample_words=cfg.voice_sample_words,
            voice_id=cfg.voice_id,
            description=cfg.voice_description,
            language=self.settings.cartesia.language,
            mode=cfg.voice_mode,
        )

    async def _run_trial(
        self,
        runner: InfillTrialRunner,
        trial: EvaluationTrial,
        words: list[Word],
    ) -> TrialResult:
        try:
            return await runner.run(trial, words)
        except Exception as exc:
            logger.exception("[%s] trial failed (start_index=%s)", trial.prefix, trial.start_index)
            return TrialResult(
                trial=trial,
                status=TrialStatus.FAILED,
                error=str(exc),
                error_code=getattr(exc, "error_code", None) or ErrorCode.UNKNOWN,
            )

    async def close(self) -> None:
        if self._client is not None:
            await self._client.close()
        await self.transcriber.close()
        await self.voice.close()
        await self.media.close()
