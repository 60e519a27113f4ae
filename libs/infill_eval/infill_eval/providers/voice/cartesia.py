"""Cartesia voice cloning and infill provider."""

from __future__ import annotations

import logging
from pathlib import Path

from infill_eval.error_codes import ErrorCode
from infill_eval.exceptions import ProviderError
from infill_eval.providers.cartesia.client import CartesiaClient, guess_mime_type
from infill_eval.providers.voice.base import OutputFormat, VoiceProvider

logger = logging.getLogger(__name__)


class CartesiaVoiceProvider(VoiceProvider):
    def __init__(self, client: CartesiaClient, model: str = "sonic-2", language: str = "en") -> None:
        self.client = client
        self.model = model
        self.language = language

    async def clone_voice(
        self,
        sample_path: str,
        *,
        name: str,
        description: str = "",
        language: str | None = None,
        mode: str = "stability",
    ) -> str:
        data = {
            "name": name,
            "description": description,
            "language": language or self.language,
            "mode": mode,
        }
        with open(sample_path, "rb") as f:
            files = {"clip": (Path(sample_path).name, f, guess_mime_type(sample_path))}
            payload = await self.client.post_json(
                "/voices/clone",
                data=data,
                files=files,
                error_code=ErrorCode.VOICE_CLONE_FAILED,
            )

        voice_id = str(payload.get("id") or "").strip()
        if not voice_id:
            raise ProviderError(
                self.client.provider,
                "voice clone response has no id",
                error_code=ErrorCode.VOICE_CLONE_FAILED,
            )
        return voice_id

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
        data = {
            "model_id": self.model,
            "language": language or self.language,
            "transcript": transcript,
            "voice_id": voice_id,
            "output_format[container]": output_format.container,
            "output_format[encoding]": output_format.encoding,
            "output_format[sample_rate]": str(int(output_format.sample_rate)),
        }
        with open(left_path, "rb") as left, open(right_path, "rb") as right:
            files = {
                "left_audio": (Path(left_path).name, left, guess_mime_type(left_path)),
                "right_audio": (Path(right_path).name, right, guess_mime_type(right_path)),
            }
            audio = await self.client.post_bytes(
                "/infill/bytes",
                data=data,
                files=files,
                error_code=ErrorCode.INFILL_FAILED,
            )

        if not audio:
            raise ProviderError(
                self.client.provider,
                "infill returned no audio",
                error_code=ErrorCode.INFILL_FAILED,
            )
        logger.debug("infill ok (bytes=%s, voice_id=%s)", len(audio), voice_id)
        return audio
