"""
Compiler context.

Bundles everything a render needs (presets, token attributes, output
settings and an optional cache handle) into one object that the host
builds once per request or session and passes down explicitly.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from ..cache.content_cache import ContentAddressedCache, source_hash, stylesheet_key
from ..cache.stores import CacheStore, FileStore, MemoryStore, RedisStore
from ..core.ir.tokens import Breakpoint, SpacingSize
from ..core.manifest import CacheConfig, OutputConfig, TokensmithManifest
from .class_names import compile_spacing_classes
from .css_generator import generate_all
from .normalizer import MalformedHook
from .registry import PresetRegistry, load_presets
from .utilities import generate_utilities_css

logger = logging.getLogger(__name__)


@dataclass
class CompilerContext:
    """
    Explicit compiler state.

    Attributes:
        presets: Loaded preset registry (possibly empty)
        tokens: Default spacing attributes keyed by category
        cache: Stylesheet cache, or ``None`` to always generate
        settings: Output settings (annotate flag, breakpoint order, ...)
        breakpoints: Configured breakpoints for utility CSS
        spacing: Configured spacing scale for utility CSS
        on_malformed: Optional hook called for malformed token entries
    """

    presets: PresetRegistry
    tokens: Mapping[str, Any] = field(default_factory=dict)
    cache: ContentAddressedCache | None = None
    settings: OutputConfig = field(default_factory=OutputConfig)
    breakpoints: list[Breakpoint] = field(default_factory=list)
    spacing: list[SpacingSize] = field(default_factory=list)
    on_malformed: MalformedHook | None = None

    def settings_flags(self) -> dict[str, Any]:
        return {"annotate": self.settings.annotate, "preset_css": self.settings.preset_css}

    def stylesheet_key(self) -> str:
        """Content-addressed key of the current preset stylesheet."""
        return stylesheet_key(self.presets, self.settings_flags())

    def stylesheet(self) -> str:
        """Preset stylesheet text, served from the cache when possible."""

        def _generate() -> str:
            return generate_all(self.presets, annotate=self.settings.annotate)

        if self.cache is None:
            return _generate()
        return self.cache.get_or_generate(self.stylesheet_key(), _generate)

    def classes_for(self, attributes: Mapping[str, Any] | None = None) -> str:
        """Spacing classes for one element; falls back to the context's tokens."""
        return compile_spacing_classes(
            attributes if attributes is not None else self.tokens,
            self.settings.breakpoint_order,
            self.on_malformed,
        )

    def utilities_css(self) -> str:
        return generate_utilities_css(
            self.spacing,
            self.breakpoints,
            variable_prefix=self.settings.variable_prefix,
        )


def build_store(config: CacheConfig) -> CacheStore | None:
    """Create the store selected by ``[cache] backend``; ``none`` disables caching."""
    if config.backend == "none":
        return None
    if config.backend == "file":
        return FileStore(config.directory)
    if config.backend == "redis":
        return RedisStore(config.redis_url)
    return MemoryStore()


def build_cache(config: CacheConfig, store: CacheStore | None = None) -> ContentAddressedCache | None:
    store = store if store is not None else build_store(config)
    if store is None:
        return None
    return ContentAddressedCache(store, namespace=config.namespace, default_ttl=config.ttl)


def build_context(
    manifest: TokensmithManifest,
    tokens: Mapping[str, Any] | None = None,
    store: CacheStore | None = None,
    use_cache: bool = True,
) -> CompilerContext:
    """
    Build a context from a manifest.

    Loads the preset registry, opens the configured cache and drops stale
    entries if the upstream document changed since the last check.

    Args:
        manifest: Project manifest
        tokens: Default spacing attributes for ``classes_for``
        store: Store to use instead of the configured backend
        use_cache: Set ``False`` to skip caching entirely

    Returns:
        Ready-to-use CompilerContext
    """
    registry = load_presets(
        manifest.source.path,
        manifest.source.container,
        manifest.source.default_group,
    )
    if manifest.source.path is not None and not registry.available:
        logger.warning("No presets loaded: %s", registry.source_error)

    cache = build_cache(manifest.cache, store) if use_cache else None
    if cache is not None:
        cache.invalidate_if_source_changed(source_hash(manifest.source.path))

    return CompilerContext(
        presets=registry,
        tokens=dict(tokens or {}),
        cache=cache,
        settings=manifest.output,
        breakpoints=list(manifest.breakpoints),
        spacing=list(manifest.spacing),
    )
