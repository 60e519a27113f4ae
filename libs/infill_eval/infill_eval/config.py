"""Configuration management using pydantic-settings."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Literal

from pydantic import Field, model_validator
from pydantic.aliases import AliasChoices
from pydantic_settings import BaseSettings, SettingsConfigDict

from infill_eval.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

_ENV_FILES = (".env", "../.env", "../../.env")


def _resolve_path(value: str) -> str:
    raw = str(value or "").strip()
    if not raw:
        return raw
    return str(Path(raw).expanduser().resolve())


class CartesiaConfig(BaseSettings):
    """Cartesia API configuration (speech-to-text, voice cloning, infill)."""

    model_config = SettingsConfigDict(
        env_prefix="CARTESIA_",
        env_file=_ENV_FILES,
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    provider: str = "cartesia"
    # The original harness reads a bare CARTESIA_KEY.
    api_key: str = Field(
        default="",
        validation_alias=AliasChoices("CARTESIA_API_KEY", "CARTESIA_KEY"),
    )
    base_url: str = "https://api.cartesia.ai"
    api_version: str = "2025-04-16"
    stt_model: str = "ink-whisper"
    tts_model: str = "sonic-2"
    language: str = "en"
    timeout: float = Field(default=300.0, gt=0)


class AudioConfig(BaseSettings):
    """External media tool configuration."""

    model_config = SettingsConfigDict(
        env_prefix="AUDIO_",
        env_file=_ENV_FILES,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    provider: str = "ffmpeg"
    ffmpeg_bin: str = "ffmpeg"
    ffprobe_bin: str = "ffprobe"
    sample_rate: int = Field(default=44100, ge=8000)
    channels: int = Field(default=1, ge=1)
    codec: str = "pcm_s16le"
    container: str = "wav"

    # Fade applied to the context clips sent to the infill API.
    fade_ms: int = Field(default=50, ge=0)

    join_mode: Literal["concat", "crossfade"] = "concat"
    crossfade_s: float = Field(default=0.05, ge=0)

    @model_validator(mode="after")
    def _validate_join(self) -> "AudioConfig":
        if self.join_mode == "crossfade" and float(self.crossfade_s) <= 0:
            raise ConfigurationError("AUDIO_CROSSFADE_S must be > 0 when AUDIO_JOIN_MODE=crossfade")
        return self


class EvalConfig(BaseSettings):
    """Batch evaluation parameters."""

    model_config = SettingsConfigDict(
        env_prefix="EVAL_",
        env_file=_ENV_FILES,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    source_audio: str = "scripts/example-recording.mp3"
    output_dir: str = ""  # defaults to <data_dir>/output
    cache_dir: str = ""  # defaults to <data_dir>/cache

    left_count: int = Field(default=6, ge=1)
    middle_count: int = Field(default=3, ge=1)
    right_count: int = Field(default=6, ge=1)
    trial_count: int = Field(default=5, ge=1)

    # Voice sample spans words[0] .. words[voice_sample_words].
    voice_sample_words: int = Field(default=20, ge=0)
    voice_id: str | None = None
    voice_mode: Literal["stability", "similarity"] = "stability"
    voice_description: str = "Test voice"

    slug_length: int = Field(default=40, ge=1)
    cache_key: Literal["content", "basename"] = "content"

    @property
    def total_count(self) -> int:
        return int(self.left_count) + int(self.middle_count) + int(self.right_count)


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        env_file=_ENV_FILES,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    level: str = "INFO"
    format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"
    datefmt: str = "%Y-%m-%d %H:%M:%S"
    console: bool = True
    file: str | None = None
    max_bytes: int = Field(default=10 * 1024 * 1024, ge=0)
    backup_count: int = Field(default=5, ge=0)


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=_ENV_FILES, env_file_encoding="utf-8", extra="ignore"
    )

    data_dir: str = "./data"
    log_dir: str = "./logs"

    cartesia: CartesiaConfig = Field(default_factory=CartesiaConfig)
    audio: AudioConfig = Field(default_factory=AudioConfig)
    eval: EvalConfig = Field(default_factory=EvalConfig)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    def model_post_init(self, __context: Any) -> None:
        self.data_dir = _resolve_path(self.data_dir)
        self.log_dir = _resolve_path(self.log_dir)
        if not self.eval.output_dir:
            self.eval.output_dir = str(Path(self.data_dir) / "output")
        if not self.eval.cache_dir:
            self.eval.cache_dir = str(Path(self.data_dir) / "cache")
        self.eval.output_dir = _resolve_path(self.eval.output_dir)
        self.eval.cache_dir = _resolve_path(self.eval.cache_dir)
        self.eval.source_audio = _resolve_path(self.eval.source_audio)

    @property
    def output_dir(self) -> Path:
        return Path(self.eval.output_dir)

    @property
    def cache_dir(self) -> Path:
        return Path(self.eval.cache_dir)

    def ensure_dirs(self) -> None:
        """Create output/cache directories (called by the CLI, not on construction)."""
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.cache_dir.mkdir(parents=True, exist_ok=True)


def warn_missing_credentials(settings: Settings) -> bool:
    """Log a warning when the API key is absent; the first remote call will fail instead."""
    if str(settings.cartesia.api_key or "").strip():
        return True
    logger.warning("CARTESIA_KEY not set; remote calls will fail")
    return False
