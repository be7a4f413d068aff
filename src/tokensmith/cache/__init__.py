"""Stylesheet caching: content-addressed keys over pluggable stores."""

from .content_cache import (
    ABSENT_SOURCE_HASH,
    ContentAddressedCache,
    key_for,
    source_hash,
    stylesheet_key,
)
from .stores import CacheStore, FileStore, MemoryStore, RedisStore

__all__ = [
    "ABSENT_SOURCE_HASH",
    "CacheStore",
    "ContentAddressedCache",
    "FileStore",
    "MemoryStore",
    "RedisStore",
    "key_for",
    "source_hash",
    "stylesheet_key",
]
