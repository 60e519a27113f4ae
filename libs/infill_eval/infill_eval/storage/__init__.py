"""Local persistence."""

from infill_eval.storage.timestamp_cache import CacheKeyMode, TimestampCache

__all__ = ["CacheKeyMode", "TimestampCache"]
