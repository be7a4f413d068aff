"""
CSS rule generator for style presets.

Emits one rule block per preset::

    .has-type-preset-{id} {
        {property}: {value};
    }

Blocks are joined with a blank line, in registry order. Properties that
fail sanitization and values that are empty are dropped silently.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from ..core.ir.presets import Preset
from ..core.strings import format_number, format_scalar, kebab_case, strip_markup

SELECTOR_PREFIX = ".has-type-preset-"

_PROPERTY_PATTERN = re.compile(r"[a-z0-9-]+")
_PERCENTAGE = re.compile(r"(-?[0-9]+(?:\.[0-9]+)?)%")
_EMPTY_VALUES = {"", "undefined", "null"}


def sanitize_property(name: str) -> str | None:
    """Return the kebab-case property name, or ``None`` if it is not ``[a-z0-9-]+``."""
    candidate = kebab_case(name)
    return candidate if _PROPERTY_PATTERN.fullmatch(candidate) else None


def _value_to_text(value: Any) -> str | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return format_scalar(value)
    if isinstance(value, str):
        return value
    return None


def process_value(css_property: str, value: Any) -> str | None:
    """
    Apply property-specific transforms and sanitization to a value.

    - ``line-height: auto`` becomes ``normal``
    - ``letter-spacing: N%`` becomes ``N * 0.01`` em
    - ``<``, ``>``, ``"`` and ``'`` are stripped
    - empty, ``"undefined"`` and ``"null"`` are dropped (``"0"`` is kept)

    Returns:
        Processed value, or ``None`` when it should not be emitted.
    """
    text = _value_to_text(value)
    if text is None or text in _EMPTY_VALUES:
        return None

    if css_property == "line-height" and text == "auto":
        text = "normal"

    if css_property == "letter-spacing":
        match = _PERCENTAGE.fullmatch(text)
        if match:
            text = f"{format_number(float(match.group(1)) * 0.01)}em"

    text = strip_markup(text)
    return text or None


def format_declarations(properties: Mapping[str, Any]) -> list[str]:
    """Format the valid declarations of a property bag, in its own order."""
    lines: list[str] = []
    for name, value in properties.items():
        css_property = sanitize_property(str(name))
        if css_property is None:
            continue
        css_value = process_value(css_property, value)
        if css_value is None:
            continue
        lines.append(f"    {css_property}: {css_value};")
    return lines


def preset_selector(preset_id: str) -> str:
    return f"{SELECTOR_PREFIX}{preset_id}"


def _preset_parts(preset: Preset | Mapping[str, Any]) -> tuple[Any, str | None]:
    if isinstance(preset, Preset):
        return preset.properties, preset.label
    return preset.get("properties"), preset.get("label")


def generate(preset_id: str, preset: Preset | Mapping[str, Any], annotate: bool = False) -> str:
    """
    Generate the rule block for one preset.

    Args:
        preset_id: Preset id, used verbatim in the selector
        preset: Preset model or a mapping with a ``properties`` bag
        annotate: Prefix the block with a ``/* Typography Preset: label */`` comment

    Returns:
        The rule block, or ``""`` when no declaration survives.
    """
    properties, label = _preset_parts(preset)
    if not isinstance(properties, Mapping):
        return ""

    lines = format_declarations(properties)
    if not lines:
        return ""

    block = f"{preset_selector(preset_id)} {{\n" + "\n".join(lines) + "\n}"
    if annotate:
        text = label if isinstance(label, str) and label else preset_id
        comment = strip_markup(text).replace("*/", "")
        block = f"/* Typography Preset: {comment} */\n{block}"
    return block


def generate_all(registry: Mapping[str, Preset | Mapping[str, Any]], annotate: bool = False) -> str:
    """Concatenate every non-empty preset block, separated by a blank line."""
    blocks = (generate(preset_id, preset, annotate) for preset_id, preset in registry.items())
    return "\n\n".join(block for block in blocks if block)
