"""Evaluation trial and batch report models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from infill_eval.error_codes import ErrorCode


class TrialStatus(str, Enum):
    COMPLETED = "completed"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class EvaluationTrial:
    """One infill evaluation at `start_index` of the source transcript."""

    index: int
    source_audio: str
    start_index: int
    left_count: int
    middle_count: int
    right_count: int
    voice_id: str

    @property
    def total_count(self) -> int:
        return int(self.left_count) + int(self.middle_count) + int(self.right_count)

    @property
    def prefix(self) -> str:
        return f"{int(self.index):03d}"


@dataclass
class TrialResult:
    trial: EvaluationTrial
    status: TrialStatus
    final_path: str | None = None
    middle_text: str = ""
    error: str | None = None
    error_code: ErrorCode | str | None = None
    duration_ms: int | None = None


@dataclass
class BatchReport:
    """Outcome of one batch run; failures are collected, not raised."""

    source_audio: str
    voice_id: str | None
    word_count: int
    results: list[TrialResult] = field(default_factory=list)

    def _with_status(self, status: TrialStatus) -> list[TrialResult]:
        return [r for r in self.results if r.status == status]

    @property
    def completed(self) -> list[TrialResult]:
        return self._with_status(TrialStatus.COMPLETED)

    @property
    def skipped(self) -> list[TrialResult]:
        return self._with_status(TrialStatus.SKIPPED)

    @property
    def failed(self) -> list[TrialResult]:
        return self._with_status(TrialStatus.FAILED)

    @property
    def ok(self) -> bool:
        return not self.failed
