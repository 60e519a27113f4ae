"""Flat-file cache of word timestamps per source recording."""

from __future__ import annotations

import hashlib
import json
import logging
import os
from pathlib import Path
from typing import Literal

from infill_eval.models.serializers import deserialize_words, serialize_words
from infill_eval.models.word import Word
from infill_eval.utils.hashing import file_sha256

logger = logging.getLogger(__name__)

CacheKeyMode = Literal["content", "basename"]


class TimestampCache:
    """Stores raw transcriber output as `<cache_dir>/<key>.words.json`.

    In `content` mode the key hashes the audio bytes together with the
    transcription model and language, so renamed copies hit and edited files
    miss. `basename` mode keys by file name only.
    """

    def __init__(
        self,
        cache_dir: str | Path,
        *,
        key_mode: CacheKeyMode = "content",
        model: str = "",
        language: str = "",
    ) -> None:
        self.cache_dir = Path(cache_dir)
        self.key_mode = key_mode
        self.model = str(model or "")
        self.language = str(language or "")

    def key_for(self, audio_path: str | Path) -> str:
        if self.key_mode == "basename":
            return Path(audio_path).name
        file_hash = file_sha256(audio_path)
        h = hashlib.sha256(f"{file_hash}:{self.model}:{self.language}".encode("utf-8"))
        return h.hexdigest()[:32]

    def path_for(self, audio_path: str | Path) -> Path:
        return self.cache_dir / f"{self.key_for(audio_path)}.words.json"

    def get(self, audio_path: str | Path) -> list[Word] | None:
        path = self.path_for(audio_path)
        if not path.exists():
            return None
        items = json.loads(path.read_text(encoding="utf-8"))
        logger.debug("timestamp cache hit (path=%s, words=%s)", path, len(items))
        return deserialize_words(items)

    def put(self, audio_path: str | Path, words: list[Word]) -> Path:
        path = self.path_for(audio_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp = path.with_name(path.name + ".tmp")
        raw = json.dumps(serialize_words(words), ensure_ascii=False, indent=2)
        tmp.write_text(raw, encoding="utf-8")
        os.replace(tmp, path)
        return path
