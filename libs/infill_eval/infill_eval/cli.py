"""Command line entry point: run one infill evaluation batch."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from pydantic import ValidationError

from infill_eval.config import AudioConfig, EvalConfig, Settings, warn_missing_credentials
from infill_eval.exceptions import InfillEvalError
from infill_eval.pipeline.batch import BatchRunner
from infill_eval.utils.logging_setup import setup_logging

logger = logging.getLogger("infill_eval.cli")

EXIT_OK = 0
EXIT_TRIALS_FAILED = 1
EXIT_FATAL = 2


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Evaluate infill synthesis at evenly spaced positions of a recording."
    )
    parser.add_argument("--source", default=None, help="Source recording (default: EVAL_SOURCE_AUDIO)")
    parser.add_argument("--output-dir", default=None, help="Directory for trial artifacts")
    parser.add_argument("--trials", type=int, default=None, help="Number of trials")
    parser.add_argument("--join-mode", choices=["concat", "crossfade"], default=None)
    parser.add_argument("--crossfade-s", type=float, default=None, help="Crossfade length in seconds")
    parser.add_argument("--voice-id", default=None, help="Reuse an existing voice instead of cloning")
    return parser.parse_args(argv)


def _build_settings(args: argparse.Namespace) -> Settings:
    overrides: dict[str, object] = {}
    if args.source is not None:
        overrides["source_audio"] = args.source
    if args.output_dir is not None:
        overrides["output_dir"] = args.output_dir
    if args.trials is not None:
        overrides["trial_count"] = args.trials
    if args.voice_id is not None:
        overrides["voice_id"] = args.voice_id

    audio_overrides: dict[str, object] = {}
    if args.join_mode is not None:
        audio_overrides["join_mode"] = args.join_mode
    if args.crossfade_s is not None:
        audio_overrides["crossfade_s"] = args.crossfade_s

    base = Settings()
    return Settings(
        data_dir=base.data_dir,
        log_dir=base.log_dir,
        cartesia=base.cartesia,
        audio=AudioConfig.model_validate({**base.audio.model_dump(), **audio_overrides}),
        eval=EvalConfig.model_validate({**base.eval.model_dump(), **overrides}),
        logging=base.logging,
    )


async def _run(settings: Settings) -> int:
    runner = BatchRunner.from_settings(settings)
    try:
        report = await runner.run()
    finally:
        await runner.close()

    for result in report.results:
        print(f"[{result.trial.prefix}] {result.status.value} {result.final_path or result.error}")
    print("Done!")
    return EXIT_OK if report.ok else EXIT_TRIALS_FAILED


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)
    try:
        settings = _build_settings(args)
    except (InfillEvalError, ValidationError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(EXIT_FATAL) from exc

    setup_logging(settings)
    warn_missing_credentials(settings)

    try:
        code = asyncio.run(_run(settings))
    except InfillEvalError as exc:
        logger.error("Error: %s", exc)
        raise SystemExit(EXIT_FATAL) from exc
    except Exception as exc:
        logger.exception("Error: %s", exc)
        raise SystemExit(EXIT_FATAL) from exc
    raise SystemExit(code)


if __name__ == "__main__":
    main()
