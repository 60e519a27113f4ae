"""FFmpeg-based media operations."""

from __future__ import annotations

import logging
from pathlib import Path

from infill_eval.exceptions import MediaError
from infill_eval.providers.media.base import JoinOptions, MediaProvider
from infill_eval.utils.ffmpeg import resolve_ffmpeg_bin, resolve_ffprobe_bin
from infill_eval.utils.subprocess import RunResult, run_subprocess

logger = logging.getLogger(__name__)


def _fmt_seconds(value: float) -> str:
    return f"{float(value):.6f}".rstrip("0").rstrip(".") or "0"


def _concat_list_line(path: str) -> str:
    escaped = str(Path(path).resolve()).replace("'", "'\\''")
    return f"file '{escaped}'"


class FFmpegMediaProvider(MediaProvider):
    def __init__(
        self,
        ffmpeg_bin: str = "ffmpeg",
        ffprobe_bin: str = "ffprobe",
        *,
        sample_rate: int = 44100,
        channels: int = 1,
        codec: str = "pcm_s16le",
    ) -> None:
        self.ffmpeg_bin = resolve_ffmpeg_bin(ffmpeg_bin)
        self.ffprobe_bin = resolve_ffprobe_bin(ffprobe_bin)
        self.sample_rate = int(sample_rate)
        self.channels = int(channels)
        self.codec = codec

    def _output_args(self) -> list[str]:
        return ["-ar", str(self.sample_rate), "-ac", str(self.channels), "-c:a", self.codec]

    async def _run(self, args: list[str]) -> RunResult:
        try:
            result = await run_subprocess(args)
        except FileNotFoundError as exc:
            raise MediaError(
                f"binary not found: {args[0]}. Install ffmpeg and ensure it is in PATH "
                "(or install `imageio-ffmpeg`, or set AUDIO_FFMPEG_BIN).",
                cmd=args,
            ) from exc
        if not result.ok:
            raise MediaError(
                f"{Path(args[0]).name} failed",
                cmd=args,
                returncode=result.returncode,
                stderr=result.stderr_text,
            )
        return result

    async def extract_segment(self, audio_path: str, start: float, end: float, output_path: str) -> str:
        """Cut `[start, end)` seconds from `audio_path`."""
        if end <= start:
            raise ValueError("end must be greater than start")
        Path(output_path).parent.mkdir(parents=True, exist_ok=True)

        await self._run(
            [
                self.ffmpeg_bin,
                "-y",
                "-i",
                str(audio_path),
                "-ss",
                _fmt_seconds(start),
                "-t",
                _fmt_seconds(end - start),
                *self._output_args(),
                str(output_path),
            ]
        )
        return str(output_path)

    async def probe_duration(self, audio_path: str) -> float:
        result = await self._run(
            [
                self.ffprobe_bin,
                "-v",
                "error",
                "-show_entries",
                "format=duration",
                "-of",
                "csv=p=0",
                str(audio_path),
            ]
        )
        raw = result.stdout.decode(errors="ignore").strip()
        try:
            return float(raw)
        except ValueError as exc:
            raise MediaError(f"unparseable duration {raw!r} for {audio_path}") from exc

    async def fade_in(self, input_path: str, output_path: str, fade_s: float) -> str:
        await self._run(
            [
                self.ffmpeg_bin,
                "-y",
                "-i",
                str(input_path),
                "-af",
                f"afade=t=in:st=0:d={_fmt_seconds(fade_s)}",
                *self._output_args(),
                str(output_path),
            ]
        )
        return str(output_path)

    async def fade_out(self, input_path: str, output_path: str, fade_s: float) -> str:
        duration = await self.probe_duration(input_path)
        fade_start = max(0.0, duration - float(fade_s))
        await self._run(
            [
                self.ffmpeg_bin,
                "-y",
                "-i",
                str(input_path),
                "-af",
                f"afade=t=out:st={_fmt_seconds(fade_start)}:d={_fmt_seconds(fade_s)}",
                *self._output_args(),
                str(output_path),
            ]
        )
        return str(output_path)

    async def join(self, input_paths: list[str], output_path: str, options: JoinOptions | None = None) -> str:
        """Join clips in order, either concatenated or chained through `acrossfade`."""
        if not input_paths:
            raise ValueError("join requires at least one input")
        options = options or JoinOptions()
        Path(output_path).parent.mkdir(parents=True, exist_ok=True)

        if options.mode == "crossfade" and len(input_paths) > 1:
            await self._crossfade(input_paths, output_path, float(options.crossfade_s))
        else:
            await self._concat(input_paths, output_path)
        return str(output_path)

    async def _concat(self, input_paths: list[str], output_path: str) -> None:
        list_path = Path(str(output_path) + ".list.txt")
        list_path.write_text("\n".join(_concat_list_line(p) for p in input_paths), encoding="utf-8")
        try:
            await self._run(
                [
                    self.ffmpeg_bin,
                    "-y",
                    "-f",
                    "concat",
                    "-safe",
                    "0",
                    "-i",
                    str(list_path),
                    *self._output_args(),
                    str(output_path),
                ]
            )
        finally:
            list_path.unlink(missing_ok=True)

    async def _crossfade(self, input_paths: list[str], output_path: str, crossfade_s: float) -> None:
        if crossfade_s <= 0:
            raise ValueError("crossfade_s must be > 0")
        args = [self.ffmpeg_bin, "-y"]
        for p in input_paths:
            args.extend(["-i", str(p)])

        d = _fmt_seconds(crossfade_s)
        filters: list[str] = []
        prev = "[0:a]"
        for i in range(1, len(input_paths)):
            label = "[out]" if i == len(input_paths) - 1 else f"[x{i}]"
            filters.append(f"{prev}[{i}:a]acrossfade=d={d}:c1=tri:c2=tri{label}")
            prev = label

        args.extend(["-filter_complex", ";".join(filters), "-map", "[out]"])
        args.extend([*self._output_args(), str(output_path)])
        await self._run(args)
