"""Speech-to-text provider base class."""

from abc import ABC, abstractmethod

from infill_eval.models.word import Word


class TranscriptionProvider(ABC):
    """Abstract base class for word-level transcription providers."""

    @abstractmethod
    async def transcribe(
        self,
        audio_path: str,
        language: str | None = None,
    ) -> list[Word]:
        """Transcribe an audio file into word timestamps.

        Args:
            audio_path: Path to the audio file.
            language: Optional language hint.

        Returns:
            Ordered words with start/duration in seconds.
        """
        ...

    async def close(self) -> None:  # pragma: no cover
        return None
