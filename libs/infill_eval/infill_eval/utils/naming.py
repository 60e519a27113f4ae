"""Deterministic artifact names."""

from __future__ import annotations

import hashlib
import re

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def slugify(text: str, max_length: int = 40) -> str:
    slug = _NON_ALNUM.sub("-", str(text or "").lower()).strip("-")
    return slug[: max(0, int(max_length))]


def content_digest(*parts: object, length: int = 8) -> str:
    h = hashlib.sha256()
    for part in parts:
        h.update(str(part).encode("utf-8"))
        h.update(b"\x00")
    return h.hexdigest()[:length]
