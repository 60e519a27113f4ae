from __future__ import annotations

from pathlib import Path

import pytest

from infill_eval.config import AudioConfig, CartesiaConfig, EvalConfig, Settings


@pytest.fixture()
def source_audio(tmp_path) -> Path:
    path = tmp_path / "example-recording.mp3"
    path.write_bytes(b"ID3-fake-audio")
    return path


@pytest.fixture()
def settings(tmp_path, source_audio) -> Settings:
    return Settings(
        data_dir=str(tmp_path / "data"),
        log_dir=str(tmp_path / "logs"),
        cartesia=CartesiaConfig(api_key="test-key"),
        audio=AudioConfig(),
        eval=EvalConfig(source_audio=str(source_audio)),
    )
