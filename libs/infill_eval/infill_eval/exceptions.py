"""infill_eval exception hierarchy."""

from __future__ import annotations

from collections.abc import Sequence

from infill_eval.error_codes import ErrorCode


class InfillEvalError(Exception):
    """Base error for infill_eval."""

    error_code: ErrorCode | str | None = None


class ConfigurationError(InfillEvalError):
    """Raised when configuration or inputs are invalid."""


class InsufficientWordsError(ConfigurationError):
    """Raised when a transcript is too short for the requested word window."""

    error_code = ErrorCode.INSUFFICIENT_WORDS

    def __init__(self, required: int, available: int) -> None:
        super().__init__(f"Need {required} words, got {available}")
        self.required = int(required)
        self.available = int(available)


class ProviderError(InfillEvalError):
    """Raised when an external provider call fails."""

    def __init__(
        self,
        provider: str,
        message: str,
        *,
        error_code: ErrorCode | str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(f"{provider}: {message}")
        self.provider = provider
        self.message = message
        self.error_code = error_code or ErrorCode.PROVIDER_FAILED
        self.status_code = status_code


class MediaError(InfillEvalError):
    """Raised when the external media tool exits with an error."""

    error_code = ErrorCode.MEDIA_FAILED

    def __init__(
        self,
        message: str,
        *,
        cmd: Sequence[str] = (),
        returncode: int | None = None,
        stderr: str = "",
    ) -> None:
        detail = message
        if returncode is not None:
            detail = f"{detail} (code={returncode})"
        if cmd:
            detail = f"{detail}\ncmd: {' '.join(cmd)}"
        if stderr:
            detail = f"{detail}\nstderr: {stderr}"
        super().__init__(detail)
        self.cmd = list(cmd)
        self.returncode = returncode
        self.stderr = stderr
