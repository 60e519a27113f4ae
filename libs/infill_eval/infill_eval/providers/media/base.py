"""Media tool abstractions (trim, fade, join)."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Literal

JoinMode = Literal["concat", "crossfade"]


@dataclass(frozen=True)
class JoinOptions:
    """How adjacent clips are joined: hard cut or an overlapping crossfade."""

    mode: JoinMode = "concat"
    crossfade_s: float = 0.0


class MediaProvider(ABC):
    @abstractmethod
    async def extract_segment(self, audio_path: str, start: float, end: float, output_path: str) -> str:
        raise NotImplementedError

    @abstractmethod
    async def probe_duration(self, audio_path: str) -> float:
        raise NotImplementedError

    @abstractmethod
    async def fade_in(self, input_path: str, output_path: str, fade_s: float) -> str:
        raise NotImplementedError

    @abstractmethod
    async def fade_out(self, input_path: str, output_path: str, fade_s: float) -> str:
        raise NotImplementedError

    @abstractmethod
    async def join(self, input_paths: list[str], output_path: str, options: JoinOptions | None = None) -> str:
        raise NotImplementedError

    async def close(self) -> None:  # pragma: no cover
        return None
