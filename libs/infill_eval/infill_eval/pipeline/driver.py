"""Single infill trial: cut contexts, synthesize the middle, join."""

from __future__ import annotations

import logging
import os
import time
from pathlib import Path

from infill_eval.models.trial import EvaluationTrial, TrialResult, TrialStatus
from infill_eval.models.word import SegmentBoundaries, Word
from infill_eval.pipeline.artifacts import TrialArtifacts, build_trial_artifacts
from infill_eval.providers.media.base import JoinOptions, MediaProvider
from infill_eval.providers.voice.base import OutputFormat, VoiceProvider
from infill_eval.utils.segment_boundaries import compute_boundaries

logger = logging.getLogger(__name__)


class InfillTrialRunner:
    """Runs one `EvaluationTrial` against the media and voice providers.

    A trial whose final file already exists is skipped without any provider
    call. Errors propagate to the caller.
    """

    def __init__(
        self,
        *,
        media: MediaProvider,
        voice: VoiceProvider,
        output_dir: str | Path,
        source_key: str,
        output_format: OutputFormat | None = None,
        join_options: JoinOptions | None = None,
        fade_s: float = 0.05,
        slug_length: int = 40,
        language: str | None = None,
    ) -> None:
        self.media = media
        self.voice = voice
        self.output_dir = Path(output_dir)
        self.source_key = source_key
        self.output_format = output_format or OutputFormat()
        self.join_options = join_options or JoinOptions()
        self.fade_s = float(fade_s)
        self.slug_length = int(slug_length)
        self.language = language

    def _plan(self, trial: EvaluationTrial, words: list[Word]) -> tuple[SegmentBoundaries, TrialArtifacts]:
        boundaries = compute_boundaries(
            words,
            trial.start_index,
            trial.left_count,
            trial.middle_count,
            trial.right_count,
        )
        artifacts = build_trial_artifacts(
            self.output_dir,
            trial,
            boundaries,
            source_key=self.source_key,
            slug_length=self.slug_length,
        )
        return boundaries, artifacts

    def is_complete(self, trial: EvaluationTrial, words: list[Word]) -> bool:
        _, artifacts = self._plan(trial, words)
        return artifacts.final.exists()

    async def run(self, trial: EvaluationTrial, words: list[Word]) -> TrialResult:
        started = time.monotonic()
        boundaries, artifacts = self._plan(trial, words)
        middle_text = boundaries.middle.transcript

        if artifacts.final.exists():
            logger.info("[%s] skipping (exists): %s", trial.prefix, artifacts.final.name)
            return TrialResult(
                trial=trial,
                status=TrialStatus.SKIPPED,
                final_path=str(artifacts.final),
                middle_text=middle_text,
            )

        logger.info(
            "[%s] infilling %r (start_index=%s, voice_id=%s)",
            trial.prefix,
            middle_text,
            trial.start_index,
            trial.voice_id,
        )
        self.output_dir.mkdir(parents=True, exist_ok=True)

        left, right = boundaries.left, boundaries.right
        await self.media.extract_segment(trial.source_audio, left.start, left.end, str(artifacts.left))
        await self.media.extract_segment(trial.source_audio, right.start, right.end, str(artifacts.right))

        audio = await self._infill(trial, artifacts, middle_text)
        artifacts.generated.write_bytes(audio)

        # Join into a side file so an aborted join never satisfies the skip check.
        partial = artifacts.final_partial
        try:
            await self.media.join(
                [str(artifacts.left), str(artifacts.generated), str(artifacts.right)],
                str(partial),
                self.join_options,
            )
            os.replace(partial, artifacts.final)
        finally:
            partial.unlink(missing_ok=True)

        logger.info("[%s] saved: %s", trial.prefix, artifacts.final)
        return TrialResult(
            trial=trial,
            status=TrialStatus.COMPLETED,
            final_path=str(artifacts.final),
            middle_text=middle_text,
            duration_ms=int((time.monotonic() - started) * 1000),
        )

    async def _infill(self, trial: EvaluationTrial, artifacts: TrialArtifacts, transcript: str) -> bytes:
        left_ctx, right_ctx = artifacts.left, artifacts.right
        faded = [artifacts.left_faded, artifacts.right_faded]
        try:
            if self.fade_s > 0:
                await self.media.fade_out(str(artifacts.left), str(artifacts.left_faded), self.fade_s)
                await self.media.fade_in(str(artifacts.right), str(artifacts.right_faded), self.fade_s)
                left_ctx, right_ctx = artifacts.left_faded, artifacts.right_faded
            return await self.voice.infill(
                str(left_ctx),
                str(right_ctx),
                transcript=transcript,
                voice_id=trial.voice_id,
                output_format=self.output_format,
                language=self.language,
            )
        finally:
            for p in faded:
                p.unlink(missing_ok=True)
