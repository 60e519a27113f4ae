"""Word and segment models for transcript alignment."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Word:
    """One transcribed token with timing in seconds.

    `text` keeps any leading whitespace captured by the transcriber.
    """

    text: str
    start: float
    duration: float

    @property
    def end(self) -> float:
        return float(self.start) + float(self.duration)

    @property
    def is_space(self) -> bool:
        return str(self.text).strip() == ""

    @classmethod
    def from_span(cls, text: str, start: float, end: float) -> "Word":
        start = max(0.0, float(start))
        return cls(text=str(text), start=start, duration=max(0.0, float(end) - start))


@dataclass(frozen=True)
class Segment:
    """A contiguous slice `words[start_index:stop_index]` of a transcript."""

    words: list[Word] = field(default_factory=list)
    start_index: int = 0
    stop_index: int = 0

    @property
    def text(self) -> str:
        return "".join(w.text for w in self.words)

    @property
    def transcript(self) -> str:
        return self.text.strip()

    @property
    def start(self) -> float:
        if not self.words:
            raise ValueError("empty segment has no start")
        return float(self.words[0].start)

    @property
    def end(self) -> float:
        if not self.words:
            raise ValueError("empty segment has no end")
        return self.words[-1].end

    @property
    def duration(self) -> float:
        return self.end - self.start

    def __len__(self) -> int:
        return len(self.words)


@dataclass(frozen=True)
class SegmentBoundaries:
    """Left context, infill target and right context of one trial."""

    left: Segment
    middle: Segment
    right: Segment

    @property
    def text(self) -> str:
        return self.left.text + self.middle.text + self.right.text
