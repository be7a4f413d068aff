"""Content-addressed cache for generated stylesheet text.

Entries are keyed by a digest of the inputs that produced them, so
regenerating and overwriting an entry is always safe. Concurrent
renderers racing on the same key simply write the same text twice.

Key structure::

    {namespace}:css:{sha256}          → envelope JSON {value, created_at, ttl}
    {namespace}:meta:source_hash      → digest of the upstream document

Usage::

    cache = ContentAddressedCache(MemoryStore())
    key = cache.stylesheet_key(registry, manifest.settings_flags())
    css = cache.get_or_generate(key, lambda: generate_all(registry))

Every store failure degrades to a miss; the cache never makes generation
fail.
"""

from __future__ import annotations

import hashlib
import json
import logging
import time
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

from ..core.errors import CacheUnavailableError
from ..core.ir.presets import Preset
from .stores import CacheStore

logger = logging.getLogger(__name__)

_DEFAULT_TTL = 86400  # 24 hours

ABSENT_SOURCE_HASH = "absent"


def canonical_json(inputs: Any) -> str:
    """Serialize *inputs* with sorted mapping keys and no insignificant whitespace."""
    return json.dumps(inputs, sort_keys=True, separators=(",", ":"), ensure_ascii=False, default=str)


def key_for(inputs: Any) -> str:
    """Stable sha256 digest of the canonical serialization of *inputs*.

    Mapping key order does not affect the digest. Sequences keep their
    order, so ordered data (registry order, property order) must be passed
    as lists.
    """
    return hashlib.sha256(canonical_json(inputs).encode("utf-8")).hexdigest()


def source_hash(path: Path | None) -> str:
    """Digest of the upstream document bytes, or ``"absent"`` when there is none."""
    if path is None:
        return ABSENT_SOURCE_HASH
    try:
        return hashlib.sha256(path.read_bytes()).hexdigest()
    except FileNotFoundError:
        return ABSENT_SOURCE_HASH
    except OSError as e:
        logger.debug("Cannot hash preset source %s: %s", path, e)
        return ABSENT_SOURCE_HASH


def _preset_inputs(preset: Preset | Mapping[str, Any]) -> dict[str, Any]:
    if isinstance(preset, Preset):
        label, properties = preset.label, preset.properties
    else:
        label, properties = preset.get("label"), preset.get("properties")
    pairs = list(properties.items()) if isinstance(properties, Mapping) else []
    return {"label": label, "properties": [[str(name), value] for name, value in pairs]}


def stylesheet_key(
    registry: Mapping[str, Preset | Mapping[str, Any]],
    flags: Mapping[str, Any] | None = None,
) -> str:
    """Key for the stylesheet generated from *registry* under *flags*.

    Preset order and property order are significant (they change the
    generated text); flag order is not.
    """
    return key_for(
        {
            "presets": [[preset_id, _preset_inputs(preset)] for preset_id, preset in registry.items()],
            "flags": dict(flags or {}),
        }
    )


class ContentAddressedCache:
    """Stylesheet cache over any ``CacheStore``.

    Args:
        store: Backing key-value store
        namespace: Key prefix, so several projects can share a store
        default_ttl: Seconds before an entry goes stale (``0`` = never)
        clock: Time source, injectable for expiry tests
    """

    def __init__(
        self,
        store: CacheStore,
        namespace: str = "tokensmith",
        default_ttl: int = _DEFAULT_TTL,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.store = store
        self.namespace = namespace
        self.default_ttl = default_ttl
        self._clock = clock

    # -- keys ------------------------------------------------------------------

    @property
    def _entry_prefix(self) -> str:
        return f"{self.namespace}:css:"

    @property
    def _source_hash_key(self) -> str:
        return f"{self.namespace}:meta:source_hash"

    def _entry_key(self, key: str) -> str:
        return f"{self._entry_prefix}{key}"

    @staticmethod
    def key_for(inputs: Any) -> str:
        return key_for(inputs)

    @staticmethod
    def stylesheet_key(
        registry: Mapping[str, Preset | Mapping[str, Any]],
        flags: Mapping[str, Any] | None = None,
    ) -> str:
        return stylesheet_key(registry, flags)

    # -- entries -----------------------------------------------------------------

    def get(self, key: str) -> str | None:
        """Return the cached text, or ``None`` on a miss or a stale entry.

        Raises:
            CacheUnavailableError: If the store cannot be reached
        """
        raw = self.store.get(self._entry_key(key))
        if raw is None:
            return None
        try:
            envelope = json.loads(raw)
            value = envelope["value"]
            created_at = float(envelope["created_at"])
            ttl = int(envelope.get("ttl") or 0)
        except (json.JSONDecodeError, KeyError, TypeError, ValueError):
            logger.debug("Discarding corrupt cache entry %s", key)
            return None
        if not isinstance(value, str):
            return None
        if ttl and self._clock() >= created_at + ttl:
            logger.debug("Cache entry %s is stale", key)
            return None
        return value

    def put(self, key: str, text: str, ttl: int | None = None) -> None:
        """Store *text* under *key*.

        Raises:
            CacheUnavailableError: If the store cannot be reached
        """
        effective_ttl = self.default_ttl if ttl is None else ttl
        envelope = {"value": text, "created_at": self._clock(), "ttl": effective_ttl}
        self.store.set(self._entry_key(key), json.dumps(envelope), effective_ttl or None)

    def clear_all(self) -> int:
        """Remove every stylesheet entry. Returns the number removed."""
        removed = self.store.delete_prefix(self._entry_prefix)
        logger.info("Cleared %d cached stylesheet(s)", removed)
        return removed

    def stored_source_hash(self) -> str | None:
        return self.store.get(self._source_hash_key)

    def invalidate_if_source_changed(self, current_source_hash: str) -> bool:
        """Clear all entries when the upstream document hash changed.

        Repeated calls with an unchanged hash perform no writes.

        Returns:
            True if entries were invalidated
        """
        try:
            stored = self.store.get(self._source_hash_key)
            if stored == current_source_hash:
                return False
            self.store.delete_prefix(self._entry_prefix)
            self.store.set(self._source_hash_key, current_source_hash)
        except CacheUnavailableError as e:
            logger.debug("Source change check skipped: %s", e)
            return False
        logger.info("Preset source changed, stylesheet cache invalidated")
        return True

    def get_or_generate(self, key: str, generate: Callable[[], str], ttl: int | None = None) -> str:
        """Return the cached text for *key*, generating and storing it on a miss.

        Store failures fall back to calling *generate* directly.
        """
        try:
            cached = self.get(key)
        except CacheUnavailableError as e:
            logger.debug("Cache get failed: %s", e)
            return generate()
        if cached is not None:
            return cached

        text = generate()
        try:
            self.put(key, text, ttl)
        except CacheUnavailableError as e:
            logger.debug("Cache put failed: %s", e)
        return text
