from __future__ import annotations

import pytest

from infill_eval.models.word import Word
from infill_eval.utils.word_merge import merge_space_words


def test_merge_space_words_prepends_gap_to_next_word() -> None:
    words = [Word("Hi", 0.0, 0.3), Word(" ", 0.3, 0.1), Word("there", 0.4, 0.3)]

    merged = merge_space_words(words)

    assert [w.text for w in merged] == ["Hi", " there"]
    assert merged[0] == Word("Hi", 0.0, 0.3)
    assert merged[1].start == pytest.approx(0.3)
    assert merged[1].duration == pytest.approx(0.4)


def test_merge_space_words_accumulates_consecutive_gaps() -> None:
    words = [Word("a", 0.0, 0.2), Word(" ", 0.2, 0.1), Word("\t", 0.3, 0.1), Word("b", 0.4, 0.2)]

    merged = merge_space_words(words)

    assert [w.text for w in merged] == ["a", " \tb"]
    assert merged[1].start == pytest.approx(0.2)
    assert merged[1].duration == pytest.approx(0.4)


def test_merge_space_words_drops_trailing_gap() -> None:
    words = [Word("a", 0.0, 0.2), Word("b", 0.2, 0.2), Word("  ", 0.4, 0.5)]

    merged = merge_space_words(words)

    assert merged == [Word("a", 0.0, 0.2), Word("b", 0.2, 0.2)]
    assert sum(w.duration for w in merged) == pytest.approx(sum(w.duration for w in words) - 0.5)


def test_merge_space_words_leading_gap_moves_first_start_earlier() -> None:
    merged = merge_space_words([Word(" ", 0.0, 0.25), Word("go", 0.25, 0.5)])
    assert merged == [Word(" go", 0.0, 0.75)]


def test_merge_space_words_handles_empty_and_all_space_input() -> None:
    assert merge_space_words([]) == []
    assert merge_space_words([Word(" ", 0.0, 0.1), Word("", 0.1, 0.1)]) == []


def test_merge_space_words_is_identity_on_clean_input() -> None:
    words = [Word("one", 0.0, 0.3), Word(" two", 0.3, 0.3), Word(" three", 0.6, 0.4)]
    assert merge_space_words(words) == words


def test_merge_space_words_is_idempotent() -> None:
    words = [
        Word(" ", 0.0, 0.1),
        Word("x", 0.1, 0.2),
        Word(" ", 0.3, 0.05),
        Word(" ", 0.35, 0.05),
        Word("y", 0.4, 0.2),
        Word("z", 0.6, 0.2),
        Word(" ", 0.8, 0.3),
    ]
    once = merge_space_words(words)
    assert merge_space_words(once) == once
    assert all(w.text.strip() for w in once)
    assert len(once) <= len(words)


def test_merge_space_words_preserves_total_duration_without_trailing_gap() -> None:
    words = [Word("a", 0.0, 0.2), Word(" ", 0.2, 0.1), Word("b", 0.3, 0.2), Word(" ", 0.5, 0.1), Word("c", 0.6, 0.2)]

    merged = merge_space_words(words)

    assert sum(w.duration for w in merged) == pytest.approx(sum(w.duration for w in words))
    assert merged[0].start == words[0].start
    assert merged[-1].end == pytest.approx(words[-1].end)


def test_merge_space_words_does_not_mutate_input() -> None:
    words = [Word("Hi", 0.0, 0.3), Word(" ", 0.3, 0.1), Word("there", 0.4, 0.3)]
    snapshot = [Word(w.text, w.start, w.duration) for w in words]

    merge_space_words(words)

    assert words == snapshot
