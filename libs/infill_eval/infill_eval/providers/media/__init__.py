"""Media provider implementations."""

from infill_eval.providers.media.base import JoinMode, JoinOptions, MediaProvider
from infill_eval.providers.media.ffmpeg import FFmpegMediaProvider

__all__ = ["JoinMode", "JoinOptions", "MediaProvider", "FFmpegMediaProvider"]
