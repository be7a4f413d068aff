"""
Project manifest loading for tokensmith.

Reads ``tokensmith.toml`` into plain dataclasses. Every section is optional;
missing keys fall back to the defaults declared below.
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .errors import ConfigError, ErrorContext
from .ir.tokens import Breakpoint, SpacingSize

MANIFEST_FILE = "tokensmith.toml"

CACHE_BACKENDS = ("memory", "file", "redis", "none")

DEFAULT_BREAKPOINT_ORDER = ["base", "sm", "md", "lg", "xl"]


# =============================================================================
# Sections
# =============================================================================


@dataclass
class SourceConfig:
    """Where the upstream preset document lives.

    Examples in tokensmith.toml:

        [source]
        path = "config/tokens.json"
        container = "modules.typographyPresets"
        default_group = "theme"
    """

    path: Path | None = None
    container: tuple[str, ...] = ("modules", "typographyPresets")
    default_group: str = "theme"


@dataclass
class CacheConfig:
    """Stylesheet cache policy."""

    backend: str = "memory"  # "memory" | "file" | "redis" | "none"
    ttl: int = 86400  # 24 hours
    directory: Path = Path(".tokensmith/cache")
    redis_url: str = ""
    namespace: str = "tokensmith"


@dataclass
class OutputConfig:
    """Rendered output settings."""

    style_id: str = "tokensmith-type-presets"
    preset_css: bool = True
    annotate: bool = False
    breakpoint_order: list[str] = field(default_factory=lambda: list(DEFAULT_BREAKPOINT_ORDER))
    variable_prefix: str = "--spacing--"


@dataclass
class LoggingConfig:
    """Logging settings; file logging is enabled only when a directory is set."""

    level: str = "INFO"
    directory: Path | None = None


@dataclass
class TokensmithManifest:
    """
    Project manifest loaded from tokensmith.toml.

    ``project_root`` is the directory containing the manifest; relative
    paths in the file are resolved against it.
    """

    project_root: Path
    source: SourceConfig = field(default_factory=SourceConfig)
    cache: CacheConfig = field(default_factory=CacheConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    breakpoints: list[Breakpoint] = field(default_factory=list)
    spacing: list[SpacingSize] = field(default_factory=list)

    def settings_flags(self) -> dict[str, Any]:
        """Settings that change generated stylesheet text (part of the cache key)."""
        return {
            "annotate": self.output.annotate,
            "preset_css": self.output.preset_css,
        }


# =============================================================================
# Loading
# =============================================================================


def default_manifest(project_root: Path) -> TokensmithManifest:
    """Return a manifest with every setting at its default."""
    manifest = TokensmithManifest(project_root=project_root)
    manifest.cache.directory = project_root / manifest.cache.directory
    manifest.cache.redis_url = _redis_url_from_env()
    return manifest


def load_manifest(path: Path) -> TokensmithManifest:
    """
    Load tokensmith.toml.

    Args:
        path: Path to the manifest file

    Returns:
        Parsed manifest

    Raises:
        ConfigError: If the file is unreadable, not valid TOML, or has
            invalid values.
    """
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(f"Cannot read manifest: {e}", ErrorContext(path)) from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML: {e}", ErrorContext(path)) from e

    root = path.parent.resolve()

    source_data = _section(data, "source", path)
    cache_data = _section(data, "cache", path)
    output_data = _section(data, "output", path)
    logging_data = _section(data, "logging", path)

    source_path = source_data.get("path")
    source_config = SourceConfig(
        path=_resolve(root, source_path) if source_path else None,
        container=_parse_container(source_data.get("container"), path),
        default_group=source_data.get("default_group", "theme"),
    )

    backend = cache_data.get("backend", "memory")
    if backend not in CACHE_BACKENDS:
        raise ConfigError(
            f"Unknown cache backend '{backend}' (expected one of {', '.join(CACHE_BACKENDS)})",
            ErrorContext(path, "cache.backend"),
        )

    ttl = cache_data.get("ttl", 86400)
    if not isinstance(ttl, int) or isinstance(ttl, bool) or ttl < 0:
        raise ConfigError("Cache TTL must be a non-negative integer", ErrorContext(path, "cache.ttl"))

    cache_config = CacheConfig(
        backend=backend,
        ttl=ttl,
        directory=_resolve(root, cache_data.get("directory", ".tokensmith/cache")),
        redis_url=cache_data.get("redis_url") or _redis_url_from_env(),
        namespace=cache_data.get("namespace", "tokensmith"),
    )

    output_config = OutputConfig(
        style_id=output_data.get("style_id", "tokensmith-type-presets"),
        preset_css=output_data.get("preset_css", True),
        annotate=output_data.get("annotate", False),
        breakpoint_order=list(output_data.get("breakpoint_order", DEFAULT_BREAKPOINT_ORDER)),
        variable_prefix=output_data.get("variable_prefix", "--spacing--"),
    )

    log_dir = logging_data.get("directory")
    logging_config = LoggingConfig(
        level=str(logging_data.get("level", "INFO")).upper(),
        directory=_resolve(root, log_dir) if log_dir else None,
    )

    return TokensmithManifest(
        project_root=root,
        source=source_config,
        cache=cache_config,
        output=output_config,
        logging=logging_config,
        breakpoints=_parse_breakpoints(data.get("breakpoints", []), path),
        spacing=_parse_spacing(data.get("spacing", []), path),
    )


def find_manifest(start: Path) -> Path | None:
    """Walk up from *start* looking for tokensmith.toml."""
    current = start.resolve()
    for candidate in (current, *current.parents):
        manifest_path = candidate / MANIFEST_FILE
        if manifest_path.exists():
            return manifest_path
    return None


def _resolve(root: Path, value: str | Path) -> Path:
    candidate = Path(value)
    return candidate if candidate.is_absolute() else root / candidate


def _redis_url_from_env() -> str:
    return os.environ.get("TOKENSMITH_REDIS_URL") or os.environ.get("REDIS_URL", "")


def _section(data: dict[str, Any], name: str, path: Path) -> dict[str, Any]:
    section = data.get(name, {})
    if not isinstance(section, dict):
        raise ConfigError(f"[{name}] must be a table", ErrorContext(path, name))
    return section


def _entry_list(entries: Any, name: str, path: Path) -> list[Any]:
    if not isinstance(entries, list):
        raise ConfigError(
            f"{name} must be an array of tables ([[{name}]])", ErrorContext(path, name)
        )
    return entries


def _parse_container(value: Any, path: Path) -> tuple[str, ...]:
    if value is None:
        return ("modules", "typographyPresets")
    if isinstance(value, str):
        return tuple(part for part in value.split(".") if part)
    if isinstance(value, list) and all(isinstance(part, str) for part in value):
        return tuple(value)
    raise ConfigError(
        "Container must be a dotted string or a list of keys",
        ErrorContext(path, "source.container"),
    )


def _parse_breakpoints(entries: Any, path: Path) -> list[Breakpoint]:
    breakpoints: list[Breakpoint] = []
    for index, entry in enumerate(_entry_list(entries, "breakpoints", path)):
        if not isinstance(entry, dict) or "slug" not in entry:
            raise ConfigError(
                "Breakpoint entries need at least a slug",
                ErrorContext(path, f"breakpoints[{index}]"),
            )
        breakpoints.append(
            Breakpoint(
                slug=str(entry["slug"]),
                name=str(entry.get("name", entry["slug"])),
                value=str(entry.get("value", "0")),
            )
        )
    return breakpoints


def _parse_spacing(entries: Any, path: Path) -> list[SpacingSize]:
    sizes: list[SpacingSize] = []
    for index, entry in enumerate(_entry_list(entries, "spacing", path)):
        if not isinstance(entry, dict) or "slug" not in entry or "size" not in entry:
            raise ConfigError(
                "Spacing entries need a slug and a size",
                ErrorContext(path, f"spacing[{index}]"),
            )
        sizes.append(
            SpacingSize(
                slug=str(entry["slug"]),
                name=str(entry.get("name", f"Size {entry['slug']}")),
                size=str(entry["size"]),
            )
        )
    return sizes
