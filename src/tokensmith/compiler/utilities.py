"""
Spacing utility stylesheet generator.

Generates the CSS that backs compiled spacing classes: one rule per
category, side and spacing size, then the same rules inside a min-width
media query for each non-base breakpoint. Selectors use the class name
grammar from ``class_names`` with ``:`` escaped.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from ..core.ir.tokens import SIDE_ORDER, Breakpoint, SpacingSize, StyleCategory
from .class_names import compile_class_name

_LEADING_NUMBER = re.compile(r"^\s*(-?\d+(?:\.\d+)?)")

# Longhand properties written for each side of padding/margin
_BOX_SIDES: dict[str, tuple[str, ...]] = {
    "all": ("",),
    "x": ("-left", "-right"),
    "y": ("-top", "-bottom"),
    "top": ("-top",),
    "right": ("-right",),
    "bottom": ("-bottom",),
    "left": ("-left",),
}

# Gap only has an all/row/column split
_GAP_SIDES: dict[str, tuple[str, ...]] = {
    "all": ("gap",),
    "x": ("column-gap",),
    "y": ("row-gap",),
}


def normalize_spacing_sizes(sizes: Iterable[SpacingSize | Mapping[str, Any]]) -> list[SpacingSize]:
    """
    Coerce spacing sizes and make sure a ``0`` step comes first.

    Entries without a slug or size are skipped.
    """
    normalized: list[SpacingSize] = []
    for size in sizes:
        if isinstance(size, SpacingSize):
            normalized.append(size)
            continue
        if not isinstance(size, Mapping) or "slug" not in size or "size" not in size:
            continue
        slug = str(size["slug"])
        normalized.append(
            SpacingSize(slug=slug, name=str(size.get("name") or f"Size {slug}"), size=str(size["size"]))
        )

    if not any(size.slug == "0" for size in normalized):
        normalized.insert(0, SpacingSize(slug="0", name="None", size="0"))
    return normalized


def sort_breakpoints(breakpoints: Iterable[Breakpoint]) -> list[Breakpoint]:
    """Non-base breakpoints ordered by ascending numeric min-width."""
    return sorted(
        (bp for bp in breakpoints if not bp.is_base),
        key=lambda bp: _numeric_width(bp.value),
    )


def _numeric_width(value: str) -> float:
    match = _LEADING_NUMBER.match(value)
    return float(match.group(1)) if match else 0.0


def escape_selector(class_name: str) -> str:
    return class_name.replace(":", "\\:")


def _size_value(size: SpacingSize, variable_prefix: str) -> str:
    if size.slug == "0" or size.size == "0":
        return "0"
    return f"var({variable_prefix}{size.slug}, {size.size})"


def _declarations(category: StyleCategory, side_key: str, value: str) -> list[str] | None:
    if category is StyleCategory.GAP:
        properties = _GAP_SIDES.get(side_key)
        if properties is None:
            return None
        return [f"{prop}: {value};" for prop in properties]
    return [f"{category.css_property}{suffix}: {value};" for suffix in _BOX_SIDES[side_key]]


def _rules(
    breakpoint_slug: str,
    sizes: Sequence[SpacingSize],
    categories: Sequence[StyleCategory],
    variable_prefix: str,
    indent: str,
) -> list[str]:
    lines: list[str] = []
    for category in categories:
        for side in SIDE_ORDER:
            for size in sizes:
                declarations = _declarations(category, side.value, _size_value(size, variable_prefix))
                if declarations is None:
                    continue
                class_name = compile_class_name(category.abbrev, breakpoint_slug, side.value, size.slug)
                selector = f".{escape_selector(class_name)}"
                if category.marker:
                    selector = f".{category.marker}{selector}"
                lines.append(f"{indent}{selector} {{ {' '.join(declarations)} }}")
    return lines


def generate_utilities_css(
    spacing_sizes: Iterable[SpacingSize | Mapping[str, Any]],
    breakpoints: Iterable[Breakpoint] = (),
    categories: Sequence[StyleCategory | str] = (
        StyleCategory.GAP,
        StyleCategory.PADDING,
        StyleCategory.MARGIN,
    ),
    variable_prefix: str = "--spacing--",
) -> str:
    """
    Generate the spacing utility stylesheet.

    Args:
        spacing_sizes: Spacing scale (a ``0`` step is added when missing)
        breakpoints: Breakpoints; ``base`` entries are ignored
        categories: Categories to emit rules for
        variable_prefix: Custom property prefix for size variables

    Returns:
        CSS text, or ``""`` when the spacing scale is empty.
    """
    raw_sizes = list(spacing_sizes)
    if not raw_sizes:
        return ""

    sizes = normalize_spacing_sizes(raw_sizes)
    resolved = [StyleCategory(category) for category in categories]

    sections = ["\n".join(_rules("base", sizes, resolved, variable_prefix, ""))]
    for breakpoint in sort_breakpoints(breakpoints):
        body = "\n".join(_rules(breakpoint.slug, sizes, resolved, variable_prefix, "    "))
        sections.append(f"@media (min-width: {breakpoint.value}) {{\n{body}\n}}")

    return "\n\n".join(sections) + "\n"
