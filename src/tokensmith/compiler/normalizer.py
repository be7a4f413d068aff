"""
Shorthand normalizer.

Turns one raw Token Entry (bare value, ``all``, ``split`` or ``sides``
object) into a canonical side value map. Unrecognised input produces an
empty map; it never raises.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

from pydantic import TypeAdapter, ValidationError

from ..core.ir.tokens import (
    SIDE_ORDER,
    AllEntry,
    ScalarEntry,
    SidesEntry,
    SplitEntry,
    TaggedEntry,
    TokenEntry,
    coerce_side_value,
)

logger = logging.getLogger(__name__)

MalformedHook = Callable[[Any, str], None]

_TAGGED_ADAPTER: TypeAdapter[AllEntry | SplitEntry | SidesEntry] = TypeAdapter(TaggedEntry)


def parse_token_entry(
    raw: Any,
    on_malformed: MalformedHook | None = None,
) -> TokenEntry | None:
    """
    Parse untyped input into one of the Token Entry variants.

    Args:
        raw: Value as deserialized from settings storage
        on_malformed: Optional diagnostic callback ``(raw, reason)``

    Returns:
        The typed entry, or ``None`` when the input is empty or malformed.
    """
    if isinstance(raw, ScalarEntry | AllEntry | SplitEntry | SidesEntry):
        return raw

    if raw is None or raw is False or raw == "":
        return None

    if isinstance(raw, Mapping):
        if not raw:
            return None
        try:
            return _TAGGED_ADAPTER.validate_python(dict(raw))
        except ValidationError as e:
            _report(raw, _describe(e), on_malformed)
            return None

    try:
        value = coerce_side_value(raw)
    except ValueError as e:
        _report(raw, str(e), on_malformed)
        return None
    return ScalarEntry(value=value) if value is not None else None


def normalize(raw: Any, on_malformed: MalformedHook | None = None) -> dict[str, str]:
    """
    Normalize a Token Entry into a canonical side value map.

    Keys are drawn from ``all, x, y, top, right, bottom, left`` and appear in
    that order. Absent values are dropped, never stored as empty strings.

    Examples:
        >>> normalize("4")
        {'all': '4'}
        >>> normalize({"type": "split", "x": "2"})
        {'x': '2'}
        >>> normalize({"type": "bogus"})
        {}
    """
    entry = parse_token_entry(raw, on_malformed)
    if entry is None:
        return {}
    return canonical_sides(entry)


def canonical_sides(entry: TokenEntry) -> dict[str, str]:
    """Exhaustively map a typed entry to its present sides."""
    if isinstance(entry, ScalarEntry):
        sides: dict[str, str | None] = {"all": entry.value}
    elif isinstance(entry, AllEntry):
        sides = {"all": entry.value}
    elif isinstance(entry, SplitEntry):
        sides = {"x": entry.x, "y": entry.y}
    elif isinstance(entry, SidesEntry):
        sides = {
            "top": entry.top,
            "right": entry.right,
            "bottom": entry.bottom,
            "left": entry.left,
        }
    else:
        raise TypeError(f"Unknown token entry type: {type(entry).__name__}")

    canonical: dict[str, str] = {}
    for key in SIDE_ORDER:
        value = sides.get(key.value)
        if value:
            canonical[key.value] = value
    return canonical


def _describe(error: ValidationError) -> str:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ())) or "entry"
    return f"{location}: {first.get('msg', 'invalid')}"


def _report(raw: Any, reason: str, on_malformed: MalformedHook | None) -> None:
    logger.debug("Skipping malformed token entry %r (%s)", raw, reason)
    if on_malformed is not None:
        on_malformed(raw, reason)
