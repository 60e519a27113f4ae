"""Locate the ffmpeg/ffprobe executables."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

logger = logging.getLogger(__name__)


def _bundled_ffmpeg() -> str | None:
    try:
        import imageio_ffmpeg
    except ImportError:
        return None
    try:
        return str(imageio_ffmpeg.get_ffmpeg_exe())
    except RuntimeError as exc:
        logger.warning("imageio-ffmpeg has no usable binary (%s)", exc)
        return None


def _resolve(name: str, default: str) -> str | None:
    name = (name or default).strip()
    if Path(name).is_file():
        return name
    return shutil.which(name)


def resolve_ffmpeg_bin(ffmpeg_bin: str = "ffmpeg") -> str:
    """Explicit path, then PATH, then the `imageio-ffmpeg` bundled binary."""
    found = _resolve(ffmpeg_bin, "ffmpeg") or _bundled_ffmpeg()
    if found:
        return found
    logger.warning("ffmpeg not found (wanted %r); commands will fail", ffmpeg_bin)
    return ffmpeg_bin or "ffmpeg"


def resolve_ffprobe_bin(ffprobe_bin: str = "ffprobe") -> str:
    # imageio-ffmpeg ships no ffprobe.
    return _resolve(ffprobe_bin, "ffprobe") or ffprobe_bin or "ffprobe"
