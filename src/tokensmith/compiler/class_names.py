"""
Utility class name compiler.

Grammar (fixed and total over valid side keys)::

    prefix      = "" if breakpoint == "base" else breakpoint + ":"
    abbrev      = property_abbrev + side_suffix      # x, y, t, r, b, l; "" for all
    class_name  = prefix + abbrev + "-" + value

Examples: ``md:pt-4``, ``gap-2``, ``mx-0``.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from ..core.ir.tokens import BASE_BREAKPOINT, SIDE_SUFFIXES, StyleCategory
from .normalizer import MalformedHook, normalize

SPACING_MARKER = "has-spacing"


def compile_class_name(
    property_abbrev: str,
    breakpoint_slug: str,
    side_key: str,
    value: str,
) -> str:
    """
    Compile one canonical token into a utility class name.

    Args:
        property_abbrev: Category abbreviation (``p``, ``m``, ``gap``)
        breakpoint_slug: Breakpoint slug; ``base`` emits no prefix
        side_key: One of ``all, x, y, top, right, bottom, left``
        value: Token value

    Raises:
        ValueError: If *side_key* is not a canonical side key
    """
    try:
        suffix = SIDE_SUFFIXES[side_key]
    except KeyError:
        raise ValueError(f"Unknown side key: {side_key!r}") from None

    prefix = "" if breakpoint_slug == BASE_BREAKPOINT else f"{breakpoint_slug}:"
    return f"{prefix}{property_abbrev}{suffix}-{value}"


def ordered_breakpoints(
    value_map: Mapping[str, Any],
    breakpoint_order: Sequence[str] | None = None,
) -> list[str]:
    """
    Return the breakpoint slugs of *value_map* in compilation order.

    Without an explicit order, the map's insertion order is used. With one,
    listed slugs come first in that order, followed by any others in
    insertion order.
    """
    keys = list(value_map.keys())
    if not breakpoint_order:
        return keys
    listed = [slug for slug in dict.fromkeys(breakpoint_order) if slug in value_map]
    return listed + [slug for slug in keys if slug not in listed]


def compile_responsive_list(
    category: StyleCategory | str,
    value_map: Any,
    breakpoint_order: Sequence[str] | None = None,
    on_malformed: MalformedHook | None = None,
) -> list[str]:
    """List form of :func:`compile_responsive`."""
    if not isinstance(value_map, Mapping) or not value_map:
        return []

    category = StyleCategory(category)
    classes: list[str] = []
    for slug in ordered_breakpoints(value_map, breakpoint_order):
        for side_key, value in normalize(value_map[slug], on_malformed).items():
            classes.append(compile_class_name(category.abbrev, slug, side_key, value))

    if classes and category.marker:
        classes.insert(0, category.marker)
    return classes


def compile_responsive(
    category: StyleCategory | str,
    value_map: Any,
    breakpoint_order: Sequence[str] | None = None,
    on_malformed: MalformedHook | None = None,
) -> str:
    """
    Compile a responsive value map (breakpoint -> Token Entry) to classes.

    The gap category prepends a single ``has-gap`` marker whenever any
    breakpoint produced a class. Returns ``""`` when nothing is set.

    Examples:
        >>> compile_responsive("padding", {"base": {"type": "sides", "top": "2", "left": "1"}})
        'pt-2 pl-1'
        >>> compile_responsive("gap", {"base": "2", "md": "4"})
        'has-gap gap-2 md:gap-4'
    """
    return " ".join(compile_responsive_list(category, value_map, breakpoint_order, on_malformed))


def compile_spacing_classes(
    attributes: Mapping[str, Any] | None,
    breakpoint_order: Sequence[str] | None = None,
    on_malformed: MalformedHook | None = None,
) -> str:
    """
    Compile gap, padding and margin maps for one element.

    *attributes* is keyed by category name. When any class results, the
    string is prefixed with one ``has-spacing`` marker.
    """
    if not attributes:
        return ""

    classes: list[str] = []
    for category in (StyleCategory.GAP, StyleCategory.PADDING, StyleCategory.MARGIN):
        classes.extend(
            compile_responsive_list(
                category, attributes.get(category.value), breakpoint_order, on_malformed
            )
        )

    if not classes:
        return ""
    return " ".join([SPACING_MARKER, *classes])


def append_classes(existing: str | None, classes: str | Iterable[str]) -> str:
    """
    Append compiled classes to an existing class attribute value.

    No de-duplication is performed; appending the same classes twice
    yields them twice.
    """
    addition = classes if isinstance(classes, str) else " ".join(c for c in classes if c)
    return f"{existing or ''} {addition}".strip()
