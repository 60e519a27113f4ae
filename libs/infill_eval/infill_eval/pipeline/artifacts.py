"""Deterministic per-trial file layout."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from infill_eval.models.trial import EvaluationTrial
from infill_eval.models.word import SegmentBoundaries
from infill_eval.utils.naming import content_digest, slugify


def _name(*parts: str) -> str:
    return "-".join(p for p in parts if p) + ".wav"


def _with_stem_suffix(path: Path, suffix: str) -> Path:
    return path.with_name(f"{path.stem}{suffix}{path.suffix}")


@dataclass(frozen=True)
class TrialArtifacts:
    left: Path
    right: Path
    generated: Path
    final: Path

    @property
    def left_faded(self) -> Path:
        return _with_stem_suffix(self.left, "-faded")

    @property
    def right_faded(self) -> Path:
        return _with_stem_suffix(self.right, "-faded")

    @property
    def final_partial(self) -> Path:
        return _with_stem_suffix(self.final, ".partial")


def build_trial_artifacts(
    output_dir: str | Path,
    trial: EvaluationTrial,
    boundaries: SegmentBoundaries,
    *,
    source_key: str,
    slug_length: int = 40,
) -> TrialArtifacts:
    """Name files `NNN-<kind>-<slug>-<digest>.wav`.

    The digest covers the source identity, the window and its transcript, so
    a changed transcript no longer collides with an older final file.
    """
    out = Path(output_dir)
    digest = content_digest(
        source_key,
        trial.start_index,
        trial.left_count,
        trial.middle_count,
        trial.right_count,
        boundaries.text,
    )
    prefix = trial.prefix

    def _path(kind: str, text: str) -> Path:
        return out / _name(prefix, kind, slugify(text, slug_length), digest)

    return TrialArtifacts(
        left=_path("left", boundaries.left.text),
        right=_path("right", boundaries.right.text),
        generated=_path("gen", boundaries.middle.text),
        final=_path("final", boundaries.text),
    )
