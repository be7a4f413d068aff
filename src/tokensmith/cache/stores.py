"""
Key-value stores backing the stylesheet cache.

Every store maps string keys to string values with an optional expiry.
Backend failures surface as ``CacheUnavailableError``; callers decide how
to degrade.
"""

from __future__ import annotations

import hashlib
import json
import logging
import tempfile
import time
from collections.abc import Callable
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from ..core.errors import CacheUnavailableError

logger = logging.getLogger(__name__)


@runtime_checkable
class CacheStore(Protocol):
    """Opaque string -> string store with TTL support."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str, ttl: int | None = None) -> None: ...

    def delete(self, key: str) -> None: ...

    def delete_prefix(self, prefix: str) -> int: ...


# =============================================================================
# In-memory
# =============================================================================


class MemoryStore:
    """Process-local store. ``clock`` is injectable for expiry tests."""

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._data: dict[str, tuple[str, float | None]] = {}

    def get(self, key: str) -> str | None:
        item = self._data.get(key)
        if item is None:
            return None
        value, expires_at = item
        if expires_at is not None and self._clock() >= expires_at:
            del self._data[key]
            return None
        return value

    def set(self, key: str, value: str, ttl: int | None = None) -> None:
        expires_at = self._clock() + ttl if ttl else None
        self._data[key] = (value, expires_at)

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def delete_prefix(self, prefix: str) -> int:
        doomed = [key for key in self._data if key.startswith(prefix)]
        for key in doomed:
            del self._data[key]
        return len(doomed)

    def __len__(self) -> int:
        return len(self._data)


# =============================================================================
# Filesystem
# =============================================================================


class FileStore:
    """One JSON file per key under a directory."""

    def __init__(self, cache_dir: Path, clock: Callable[[], float] = time.time) -> None:
        """
        Initialize file store.

        Args:
            cache_dir: Directory to store cache files (created on first write)
            clock: Time source for expiry
        """
        self.cache_dir = cache_dir
        self._clock = clock

    def _get_cache_path(self, key: str) -> Path:
        digest = hashlib.sha256(key.encode()).hexdigest()
        return self.cache_dir / f"{digest}.json"

    def get(self, key: str) -> str | None:
        cache_path = self._get_cache_path(key)
        if not cache_path.exists():
            return None

        try:
            with cache_path.open("r", encoding="utf-8") as f:
                data = json.load(f)
            expires_at = data.get("expires_at")
            if expires_at is not None and self._clock() >= expires_at:
                cache_path.unlink(missing_ok=True)
                return None
            value = data["value"]
            return value if isinstance(value, str) else None
        except (ValueError, KeyError, TypeError, AttributeError):
            # Cache corrupted, ignore
            return None
        except OSError as e:
            raise CacheUnavailableError(f"Cannot read cache file {cache_path}: {e}") from e

    def set(self, key: str, value: str, ttl: int | None = None) -> None:
        data = {
            "key": key,
            "value": value,
            "expires_at": self._clock() + ttl if ttl else None,
        }
        cache_path = self._get_cache_path(key)
        tmp_path: Path | None = None
        try:
            self.cache_dir.mkdir(parents=True, exist_ok=True)
            # Each writer stages its own file; the rename is the commit point
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self.cache_dir,
                prefix=f"{cache_path.stem}.",
                suffix=".tmp",
                delete=False,
            ) as f:
                tmp_path = Path(f.name)
                json.dump(data, f)
            tmp_path.replace(cache_path)
        except OSError as e:
            if tmp_path is not None:
                tmp_path.unlink(missing_ok=True)
            raise CacheUnavailableError(f"Cannot write cache file {cache_path}: {e}") from e

    def delete(self, key: str) -> None:
        try:
            self._get_cache_path(key).unlink(missing_ok=True)
        except OSError as e:
            raise CacheUnavailableError(f"Cannot delete cache entry: {e}") from e

    def delete_prefix(self, prefix: str) -> int:
        if not self.cache_dir.exists():
            return 0
        removed = 0
        try:
            for cache_file in self.cache_dir.glob("*.json"):
                try:
                    with cache_file.open("r", encoding="utf-8") as f:
                        key = json.load(f).get("key", "")
                except (ValueError, AttributeError):
                    key = None
                if not isinstance(key, str):
                    key = None
                # Corrupt files are removed along with the prefix
                if key is None or key.startswith(prefix):
                    cache_file.unlink(missing_ok=True)
                    removed += 1
        except OSError as e:
            raise CacheUnavailableError(f"Cannot clear cache directory {self.cache_dir}: {e}") from e
        return removed


# =============================================================================
# Redis
# =============================================================================


class RedisStore:
    """Redis-backed store.

    Connects lazily on first use. Connection or command failures raise
    ``CacheUnavailableError`` so the cache layer can fall back.

    Args:
        redis_url: Redis URL (e.g. ``redis://localhost:6379/0``)
        client: Pre-built client, mainly for tests
    """

    def __init__(self, redis_url: str = "", client: Any = None) -> None:
        self._redis_url = redis_url
        self._redis: Any = client
        self._connected = client is not None

    def _client(self) -> Any:
        if self._connected:
            return self._redis
        if not self._redis_url:
            raise CacheUnavailableError("No Redis URL configured")
        try:
            import redis

            self._redis = redis.Redis.from_url(self._redis_url, decode_responses=True)
            self._redis.ping()
            self._connected = True
            logger.info("Redis cache store connected")
            return self._redis
        except Exception as e:
            self._redis = None
            self._connected = False
            raise CacheUnavailableError(f"Redis unavailable: {e}") from e

    @property
    def available(self) -> bool:
        return self._connected

    def get(self, key: str) -> str | None:
        client = self._client()
        try:
            raw = client.get(key)
        except Exception as e:
            raise CacheUnavailableError(f"Redis get failed: {e}") from e
        return raw if isinstance(raw, str) else None

    def set(self, key: str, value: str, ttl: int | None = None) -> None:
        client = self._client()
        try:
            if ttl:
                client.setex(key, ttl, value)
            else:
                client.set(key, value)
        except Exception as e:
            raise CacheUnavailableError(f"Redis set failed: {e}") from e

    def delete(self, key: str) -> None:
        client = self._client()
        try:
            client.delete(key)
        except Exception as e:
            raise CacheUnavailableError(f"Redis delete failed: {e}") from e

    def delete_prefix(self, prefix: str) -> int:
        client = self._client()
        try:
            keys = list(client.scan_iter(match=f"{prefix}*"))
            if keys:
                client.delete(*keys)
            return len(keys)
        except Exception as e:
            raise CacheUnavailableError(f"Redis delete_prefix failed: {e}") from e

    def close(self) -> None:
        """Close the Redis connection."""
        if self._redis is not None:
            try:
                self._redis.close()
            except Exception as e:
                logger.debug("Redis close failed: %s", e)
            self._redis = None
            self._connected = False
