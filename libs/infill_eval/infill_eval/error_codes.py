"""Canonical error codes attached to failures and trial reports."""

from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    UNKNOWN = "UNKNOWN"
    INSUFFICIENT_WORDS = "INSUFFICIENT_WORDS"

    TRANSCRIPTION_FAILED = "TRANSCRIPTION_FAILED"
    VOICE_CLONE_FAILED = "VOICE_CLONE_FAILED"
    INFILL_FAILED = "INFILL_FAILED"
    MEDIA_FAILED = "MEDIA_FAILED"

    PROVIDER_FAILED = "PROVIDER_FAILED"
