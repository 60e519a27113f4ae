"""Voice cloning and infill synthesis abstractions."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class OutputFormat:
    container: str = "wav"
    encoding: str = "pcm_s16le"
    sample_rate: int = 44100


class VoiceProvider(ABC):
    @abstractmethod
    async def clone_voice(
        self,
        sample_path: str,
        *,
        name: str,
        description: str = "",
        language: str | None = None,
        mode: str = "stability",
    ) -> str:
        """Clone a voice from an audio sample and return its identity."""
        raise NotImplementedError

    @abstractmethod
    async def infill(
        self,
        left_path: str,
        right_path: str,
        *,
        transcript: str,
        voice_id: str,
        output_format: OutputFormat,
        language: str | None = None,
    ) -> bytes:
        """Synthesize audio for `transcript` that bridges the two context clips."""
        raise NotImplementedError

    async def close(self) -> None:  # pragma: no cover
        return None
