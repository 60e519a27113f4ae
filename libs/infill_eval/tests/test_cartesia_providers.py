from __future__ import annotations

import json

import httpx
import pytest

from infill_eval.error_codes import ErrorCode
from infill_eval.exceptions import ProviderError
from infill_eval.models.word import Word
from infill_eval.providers.cartesia.client import CartesiaClient
from infill_eval.providers.transcription.cartesia import CartesiaTranscriptionProvider
from infill_eval.providers.voice.base import OutputFormat
from infill_eval.providers.voice.cartesia import CartesiaVoiceProvider


def _client(handler) -> CartesiaClient:  # noqa: ANN001
    return CartesiaClient(
        api_key="secret",
        base_url="https://api.example.com/",
        api_version="2025-04-16",
        transport=httpx.MockTransport(handler),
    )


@pytest.fixture()
def wav(tmp_path):
    def _make(name: str) -> str:
        path = tmp_path / name
        path.write_bytes(b"RIFF" + name.encode())
        return str(path)

    return _make


@pytest.mark.asyncio
async def test_transcribe_posts_word_granularity_and_parses_words(wav) -> None:
    seen: list[httpx.Request] = []

    def _handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        body = {
            "text": "Hi there",
            "words": [
                {"word": "Hi", "start": 0.0, "end": 0.25},
                {"word": " ", "start": 0.25, "end": 0.5},
                {"word": "there", "start": 0.5, "end": 1.0},
            ],
        }
        return httpx.Response(200, json=body)

    client = _client(_handler)
    provider = CartesiaTranscriptionProvider(client, model="ink-whisper", language="en")
    try:
        words = await provider.transcribe(wav("talk.wav"))
    finally:
        await client.close()

    assert words == [Word("Hi", 0.0, 0.25), Word(" ", 0.25, 0.25), Word("there", 0.5, 0.5)]
    request = seen[0]
    assert request.method == "POST"
    assert request.url.path == "/stt"
    assert request.headers["Authorization"] == "Bearer secret"
    assert request.headers["Cartesia-Version"] == "2025-04-16"
    assert b'name="timestamp_granularities[]"' in request.content
    assert b"ink-whisper" in request.content
    assert b'filename="talk.wav"' in request.content


@pytest.mark.asyncio
async def test_transcribe_without_words_field_returns_empty_list(wav) -> None:
    client = _client(lambda request: httpx.Response(200, json={"text": ""}))
    try:
        words = await CartesiaTranscriptionProvider(client).transcribe(wav("a.wav"))
    finally:
        await client.close()
    assert words == []


@pytest.mark.asyncio
async def test_transcribe_wraps_http_errors(wav) -> None:
    client = _client(lambda request: httpx.Response(401, text="bad key"))
    try:
        with pytest.raises(ProviderError) as excinfo:
            await CartesiaTranscriptionProvider(client).transcribe(wav("a.wav"))
    finally:
        await client.close()

    assert excinfo.value.status_code == 401
    assert excinfo.value.error_code == ErrorCode.TRANSCRIPTION_FAILED
    assert "bad key" in str(excinfo.value)


@pytest.mark.asyncio
async def test_clone_voice_returns_id(wav) -> None:
    seen: list[httpx.Request] = []

    def _handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"id": "voice-1", "name": "x"})

    client = _client(_handler)
    try:
        voice_id = await CartesiaVoiceProvider(client).clone_voice(
            wav("voice-sample.wav"), name="infill-eval-1", description="Test voice", mode="stability"
        )
    finally:
        await client.close()

    assert voice_id == "voice-1"
    assert seen[0].url.path == "/voices/clone"
    assert b'name="clip"' in seen[0].content
    assert b"stability" in seen[0].content


@pytest.mark.asyncio
async def test_clone_voice_without_id_is_an_error(wav) -> None:
    client = _client(lambda request: httpx.Response(200, content=json.dumps({"name": "x"}).encode()))
    try:
        with pytest.raises(ProviderError) as excinfo:
            await CartesiaVoiceProvider(client).clone_voice(wav("s.wav"), name="n")
    finally:
        await client.close()
    assert excinfo.value.error_code == ErrorCode.VOICE_CLONE_FAILED


@pytest.mark.asyncio
async def test_infill_sends_both_contexts_and_returns_audio(wav) -> None:
    seen: list[httpx.Request] = []

    def _handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, content=b"RIFF-gen", headers={"content-type": "audio/wav"})

    client = _client(_handler)
    try:
        audio = await CartesiaVoiceProvider(client, model="sonic-2").infill(
            wav("left.wav"),
            wav("right.wav"),
            transcript="in the middle",
            voice_id="voice-1",
            output_format=OutputFormat(container="wav", encoding="pcm_s16le", sample_rate=44100),
        )
    finally:
        await client.close()

    assert audio == b"RIFF-gen"
    body = seen[0].content
    assert seen[0].url.path == "/infill/bytes"
    assert b'name="left_audio"; filename="left.wav"' in body
    assert b'name="right_audio"; filename="right.wav"' in body
    assert b"in the middle" in body
    assert b'name="output_format[sample_rate]"' in body
    assert b"44100" in body
    assert b"sonic-2" in body


@pytest.mark.asyncio
async def test_infill_network_error_is_provider_error(wav) -> None:
    def _handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("down", request=request)

    client = _client(_handler)
    try:
        with pytest.raises(ProviderError) as excinfo:
            await CartesiaVoiceProvider(client).infill(
                wav("l.wav"), wav("r.wav"), transcript="x", voice_id="v", output_format=OutputFormat()
            )
    finally:
        await client.close()
    assert excinfo.value.error_code == ErrorCode.INFILL_FAILED
