"""Evaluation pipeline: transcript loading, trial driver and batch runner."""

from infill_eval.pipeline.artifacts import TrialArtifacts, build_trial_artifacts
from infill_eval.pipeline.batch import BatchRunner
from infill_eval.pipeline.driver import InfillTrialRunner
from infill_eval.pipeline.transcript import load_words
from infill_eval.pipeline.voice import prepare_voice

__all__ = [
    "BatchRunner",
    "InfillTrialRunner",
    "TrialArtifacts",
    "build_trial_artifacts",
    "load_words",
    "prepare_voice",
]
