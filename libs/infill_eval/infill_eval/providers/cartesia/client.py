"""Shared HTTP client for the Cartesia REST API."""

from __future__ import annotations

import logging
import mimetypes
from pathlib import Path
from typing import Any

import httpx

from infill_eval.error_codes import ErrorCode
from infill_eval.exceptions import ProviderError

logger = logging.getLogger(__name__)

_MAX_ERROR_BODY = 500


def guess_mime_type(path: str | Path) -> str:
    mime, _ = mimetypes.guess_type(str(path))
    return mime or "application/octet-stream"


class CartesiaClient:
    """Connection-pooled client carrying the API key and version headers.

    One instance is built from configuration at startup and handed to every
    Cartesia provider.
    """

    provider = "cartesia"

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.cartesia.ai",
        api_version: str = "2025-04-16",
        timeout: float = 300.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.api_version = api_version
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                transport=self._transport,
            )
        return self._client

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Cartesia-Version": self.api_version,
        }

    async def post(
        self,
        path: str,
        *,
        data: dict[str, Any] | None = None,
        files: Any = None,
        error_code: ErrorCode | str = ErrorCode.PROVIDER_FAILED,
    ) -> httpx.Response:
        client = await self._get_client()
        url = f"{self.base_url}/{path.lstrip('/')}"
        try:
            response = await client.post(url, headers=self._headers(), data=data, files=files)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            body = exc.response.text[:_MAX_ERROR_BODY]
            raise ProviderError(
                self.provider,
                f"POST {path} failed with HTTP {exc.response.status_code}: {body}",
                error_code=error_code,
                status_code=exc.response.status_code,
            ) from exc
        except httpx.HTTPError as exc:
            raise ProviderError(
                self.provider,
                f"POST {path} failed: {exc}",
                error_code=error_code,
            ) from exc
        return response

    async def post_json(self, path: str, **kwargs: Any) -> dict[str, Any]:
        response = await self.post(path, **kwargs)
        try:
            payload = response.json()
        except ValueError as exc:
            raise ProviderError(
                self.provider,
                f"POST {path} returned invalid JSON",
                error_code=kwargs.get("error_code", ErrorCode.PROVIDER_FAILED),
            ) from exc
        if not isinstance(payload, dict):
            raise ProviderError(
                self.provider,
                f"POST {path} returned {type(payload).__name__}, expected an object",
                error_code=kwargs.get("error_code", ErrorCode.PROVIDER_FAILED),
            )
        return payload

    async def post_bytes(self, path: str, **kwargs: Any) -> bytes:
        response = await self.post(path, **kwargs)
        return response.content

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "CartesiaClient":
        return self

    async def __aexit__(self, *args) -> None:
        await self.close()
