"""
Preset registry.

Loads named style presets from the upstream configuration document. The
document holds, at a configurable nested path, an ``items`` container
(preset id -> ``{label?, description?, group?, properties}``) and an
optional ``groups`` container (group id -> ``{title}``).

Loading fails soft: a missing, malformed or incomplete document yields an
empty registry whose ``source_status`` says why.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Iterator, Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

from ..core.errors import SourceUnavailableError
from ..core.ir.presets import Preset, PresetGroup, SourceStatus
from ..core.strings import kebab_case, ucfirst

logger = logging.getLogger(__name__)

DEFAULT_CONTAINER: tuple[str, ...] = ("modules", "typographyPresets")
DEFAULT_GROUP = "theme"

PRESET_ID_PATTERN = re.compile(r"[a-z0-9_-]+")

FONT_WEIGHT_NAMES: dict[int, str] = {
    100: "Thin",
    200: "Extra Light",
    300: "Light",
    400: "Regular",
    500: "Medium",
    600: "Semi Bold",
    700: "Bold",
    800: "Extra Bold",
    900: "Black",
}

_YAML_SUFFIXES = {".yaml", ".yml"}


# =============================================================================
# Lexical helpers
# =============================================================================


def canonical_property_name(name: str) -> str:
    """Canonicalize a property name to kebab-case (``fontSize`` -> ``font-size``)."""
    return kebab_case(name)


def derive_label(preset_id: str) -> str:
    """
    Build a human label from a preset id.

    Ids with exactly three hyphen-separated segments and a numeric middle
    segment follow the ``font-size-weight`` convention::

        termina-16-400  ->  Termina • 16px • Regular

    Anything else is split on ``-``/``_`` with each segment's first letter
    upper-cased.
    """
    segments = preset_id.split("-")
    if len(segments) == 3 and segments[1].isdigit() and segments[1].isascii():
        family, size, weight = segments
        return f"{ucfirst(family)} • {size}px • {_weight_name(weight)}"
    return " ".join(ucfirst(part) for part in re.split(r"[-_]", preset_id))


def _weight_name(weight: str) -> str:
    if weight.isdigit() and weight.isascii():
        name = FONT_WEIGHT_NAMES.get(int(weight))
        if name:
            return name
    return ucfirst(weight)


def normalize_properties(properties: Any) -> dict[str, Any]:
    """
    Canonicalize property names, preserving source order.

    Differently-cased keys that canonicalize to the same name overwrite each
    other in iteration order (last wins).
    """
    if not isinstance(properties, Mapping):
        return {}
    normalized: dict[str, Any] = {}
    for name, value in properties.items():
        normalized[canonical_property_name(str(name))] = value
    return normalized


def _text(value: Any) -> str | None:
    """Return non-empty strings; any other type counts as absent."""
    return value if isinstance(value, str) and value else None


# =============================================================================
# Source document
# =============================================================================


def load_source_document(path: Path | str) -> Any:
    """
    Read and parse the upstream document (JSON, or YAML by suffix).

    Raises:
        SourceUnavailableError: If the file is missing, unreadable or not
            well-formed. ``reason`` is ``"missing"`` or ``"malformed"``.
    """
    path = Path(path)
    if not path.exists():
        raise SourceUnavailableError(path, SourceStatus.MISSING)

    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SourceUnavailableError(
            path, SourceStatus.MALFORMED, f"Cannot read preset source {path}: {e}"
        ) from e

    try:
        if path.suffix.lower() in _YAML_SUFFIXES:
            return yaml.safe_load(content)
        return json.loads(content)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise SourceUnavailableError(
            path, SourceStatus.MALFORMED, f"Invalid preset source {path}: {e}"
        ) from e


def _find_container(document: Any, container_path: Sequence[str]) -> Mapping[str, Any] | None:
    node = document
    for key in container_path:
        if not isinstance(node, Mapping) or key not in node:
            return None
        node = node[key]
    return node if isinstance(node, Mapping) else None


# =============================================================================
# Registry
# =============================================================================


class PresetRegistry(Mapping[str, Preset]):
    """
    Read-only mapping of preset id -> Preset, in source order.

    Attributes:
        source_status: Outcome of reading the upstream document
        source_error: Human-readable reason when status is not ``ok``
        source_path: Path the presets were read from, if any
    """

    def __init__(
        self,
        presets: Mapping[str, Preset] | None = None,
        groups: Mapping[str, str] | None = None,
        source_status: SourceStatus = SourceStatus.OK,
        source_error: str | None = None,
        source_path: Path | None = None,
    ) -> None:
        self._presets: dict[str, Preset] = dict(presets or {})
        self._group_titles: dict[str, str] = dict(groups or {})
        self.source_status = source_status
        self.source_error = source_error
        self.source_path = source_path

    def __getitem__(self, preset_id: str) -> Preset:
        return self._presets[preset_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._presets)

    def __len__(self) -> int:
        return len(self._presets)

    def __repr__(self) -> str:
        return (
            f"PresetRegistry({len(self._presets)} presets, status={self.source_status.value})"
        )

    @property
    def available(self) -> bool:
        """Whether the upstream document was read successfully."""
        return self.source_status is SourceStatus.OK

    def has_presets(self) -> bool:
        return bool(self._presets)

    def grouped(self) -> dict[str, PresetGroup]:
        """
        Group presets by group id, in first-seen order.

        Title resolution: the document's ``groups`` container, then the
        preset's own ``group_title``, then the capitalised group id.
        """
        grouped: dict[str, PresetGroup] = {}
        for preset_id, preset in self._presets.items():
            group_id = preset.group
            if group_id not in grouped:
                title = (
                    self._group_titles.get(group_id)
                    or preset.group_title
                    or ucfirst(group_id)
                )
                grouped[group_id] = PresetGroup(id=group_id, title=title)
            grouped[group_id].preset_ids.append(preset_id)
        return grouped

    @classmethod
    def empty(
        cls,
        status: SourceStatus,
        error: str | None = None,
        source_path: Path | None = None,
    ) -> PresetRegistry:
        return cls(source_status=status, source_error=error, source_path=source_path)


def parse_presets(
    config: Mapping[str, Any],
    default_group: str = DEFAULT_GROUP,
) -> tuple[dict[str, Preset], dict[str, str]]:
    """
    Parse the preset container into presets and group titles.

    Invalid ids (outside ``[a-z0-9_-]``) and non-mapping items are skipped.
    """
    items = config.get("items")
    if not isinstance(items, Mapping):
        return {}, {}

    group_titles: dict[str, str] = {}
    groups = config.get("groups")
    if isinstance(groups, Mapping):
        for group_id, group_data in groups.items():
            title = _text(group_data.get("title")) if isinstance(group_data, Mapping) else None
            if title:
                group_titles[str(group_id)] = title

    presets: dict[str, Preset] = {}
    for preset_id, preset_data in items.items():
        preset_id = str(preset_id)
        if not PRESET_ID_PATTERN.fullmatch(preset_id):
            logger.warning("Skipping preset with unsafe id %r", preset_id)
            continue
        if not isinstance(preset_data, Mapping):
            logger.warning("Skipping preset %r: definition is not an object", preset_id)
            continue

        group_id = _text(preset_data.get("group")) or default_group
        group_title = group_titles.get(group_id) or _text(preset_data.get("group_title"))

        presets[preset_id] = Preset(
            id=preset_id,
            label=_text(preset_data.get("label")) or derive_label(preset_id),
            description=_text(preset_data.get("description")) or "",
            group=group_id,
            group_title=group_title,
            properties=normalize_properties(preset_data.get("properties")),
        )

    return presets, group_titles


def load_presets(
    source: Path | str | Mapping[str, Any] | None,
    container_path: Sequence[str] = DEFAULT_CONTAINER,
    default_group: str = DEFAULT_GROUP,
) -> PresetRegistry:
    """
    Load presets from a file path or an already-parsed document.

    Never raises for bad input; inspect ``source_status`` on the result.

    Args:
        source: Path to a JSON/YAML document, a parsed document, or ``None``
        container_path: Keys leading to the preset container
        default_group: Group assigned when a preset names none

    Returns:
        PresetRegistry (possibly empty)
    """
    source_path: Path | None = None
    if source is None:
        return PresetRegistry.empty(SourceStatus.MISSING, "No preset source configured")

    if isinstance(source, Mapping):
        document: Any = source
    else:
        source_path = Path(source)
        try:
            document = load_source_document(source_path)
        except SourceUnavailableError as e:
            logger.info("%s", e.message)
            return PresetRegistry.empty(SourceStatus(e.reason), e.message, source_path)

    config = _find_container(document, container_path)
    if config is None or not isinstance(config.get("items"), Mapping):
        where = ".".join([*container_path, "items"])
        message = f"Preset source has no '{where}' container"
        logger.info(message)
        return PresetRegistry.empty(SourceStatus.NO_CONTAINER, message, source_path)

    presets, group_titles = parse_presets(config, default_group)
    logger.debug("Loaded %d presets from %s", len(presets), source_path or "<document>")
    return PresetRegistry(presets, group_titles, SourceStatus.OK, None, source_path)
