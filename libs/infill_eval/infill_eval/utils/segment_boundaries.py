"""Left/middle/right window computation over a word sequence."""

from __future__ import annotations

from infill_eval.exceptions import ConfigurationError, InsufficientWordsError
from infill_eval.models.word import Segment, SegmentBoundaries, Word


def required_word_count(left_count: int, middle_count: int, right_count: int) -> int:
    return int(left_count) + int(middle_count) + int(right_count)


def validate_window(
    word_count: int,
    start_index: int,
    left_count: int,
    middle_count: int,
    right_count: int,
) -> None:
    """Raise unless `[start_index, start_index + l + m + r)` fits in `word_count` words.

    Every part must hold at least one word: the contexts are cut from the
    source audio and the middle is the infill transcript.
    """
    if int(start_index) < 0:
        raise ConfigurationError(f"start_index must be >= 0 (got {start_index})")
    for name, count in (
        ("left_count", left_count),
        ("middle_count", middle_count),
        ("right_count", right_count),
    ):
        if int(count) < 1:
            raise ConfigurationError(f"{name} must be >= 1 (got {count})")

    required = int(start_index) + required_word_count(left_count, middle_count, right_count)
    if required > int(word_count):
        raise InsufficientWordsError(required=required, available=int(word_count))


def _segment(words: list[Word], start: int, stop: int) -> Segment:
    return Segment(words=list(words[start:stop]), start_index=start, stop_index=stop)


def compute_boundaries(
    words: list[Word],
    start_index: int,
    left_count: int,
    middle_count: int,
    right_count: int,
) -> SegmentBoundaries:
    """Split `words` into contiguous left/middle/right segments starting at `start_index`."""
    validate_window(len(words), start_index, left_count, middle_count, right_count)

    a = int(start_index)
    b = a + int(left_count)
    c = b + int(middle_count)
    d = c + int(right_count)
    return SegmentBoundaries(
        left=_segment(words, a, b),
        middle=_segment(words, b, c),
        right=_segment(words, c, d),
    )


def trial_start_indices(word_count: int, total_needed: int, trial_count: int) -> list[int]:
    """Evenly spaced start indices over `[0, word_count - total_needed]`.

    With too few spare words the step is zero and trials share index 0.
    """
    if int(trial_count) < 1:
        raise ConfigurationError(f"trial_count must be >= 1 (got {trial_count})")
    if int(word_count) < int(total_needed):
        raise InsufficientWordsError(required=int(total_needed), available=int(word_count))
    step = (int(word_count) - int(total_needed)) // int(trial_count)
    return [i * step for i in range(int(trial_count))]
