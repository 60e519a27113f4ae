"""Utility helpers."""

from infill_eval.utils.naming import content_digest, slugify
from infill_eval.utils.segment_boundaries import (
    compute_boundaries,
    required_word_count,
    trial_start_indices,
    validate_window,
)
from infill_eval.utils.word_merge import merge_space_words

__all__ = [
    "compute_boundaries",
    "content_digest",
    "merge_space_words",
    "required_word_count",
    "slugify",
    "trial_start_indices",
    "validate_window",
]
