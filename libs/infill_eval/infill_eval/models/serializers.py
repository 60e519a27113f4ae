"""Serialization helpers for word lists stored in JSON."""

from __future__ import annotations

from typing import Any

from infill_eval.models.word import Word


def serialize_words(words: list[Word]) -> list[dict[str, Any]]:
    return [
        {"text": str(w.text), "start": float(w.start), "duration": float(w.duration)}
        for w in words
    ]


def deserialize_words(items: list[dict[str, Any]]) -> list[Word]:
    """Accept both the cached `{text,start,duration}` shape and raw `{word,start,end}` items."""
    out: list[Word] = []
    for item in items:
        if "duration" in item:
            text = item.get("text", item.get("word", ""))
            out.append(
                Word(
                    text=str(text or ""),
                    start=float(item.get("start") or 0.0),
                    duration=float(item["duration"] or 0.0),
                )
            )
            continue
        text = item.get("word", item.get("text", ""))
        start = float(item.get("start") or 0.0)
        end = float(item.get("end") if item.get("end") is not None else start)
        out.append(Word.from_span(str(text or ""), start, end))
    return out
