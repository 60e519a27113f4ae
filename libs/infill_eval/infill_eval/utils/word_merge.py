"""Fold whitespace-only transcriber tokens into the following word."""

from __future__ import annotations

from infill_eval.models.word import Word


def merge_space_words(words: list[Word]) -> list[Word]:
    """Merge whitespace-only words into the next spoken word.

    The gap token's text is prepended, the next word starts where the gap
    started and its duration grows by the gap duration. Consecutive gaps
    accumulate. A trailing gap with no successor is dropped.

    The input list and its items are left untouched.
    """
    out: list[Word] = []
    pending: Word | None = None

    for word in words:
        if word.is_space:
            if pending is None:
                pending = Word(text=word.text, start=word.start, duration=word.duration)
            else:
                pending = Word(
                    text=pending.text + word.text,
                    start=pending.start,
                    duration=pending.duration + word.duration,
                )
            continue

        if pending is None:
            out.append(word)
            continue

        out.append(
            Word(
                text=pending.text + word.text,
                start=pending.start,
                duration=word.duration + pending.duration,
            )
        )
        pending = None

    return out
