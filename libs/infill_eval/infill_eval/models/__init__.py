"""Core data models for infill_eval."""

from infill_eval.models.serializers import deserialize_words, serialize_words
from infill_eval.models.trial import BatchReport, EvaluationTrial, TrialResult, TrialStatus
from infill_eval.models.word import Segment, SegmentBoundaries, Word

__all__ = [
    "BatchReport",
    "EvaluationTrial",
    "Segment",
    "SegmentBoundaries",
    "TrialResult",
    "TrialStatus",
    "Word",
    "deserialize_words",
    "serialize_words",
]
