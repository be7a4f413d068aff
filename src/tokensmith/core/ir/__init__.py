"""
tokensmith intermediate representation types.

Token entries, breakpoints and spacing sizes live in ``tokens``; presets and
source status live in ``presets``.
"""

from .presets import Preset, PresetGroup, SourceStatus
from .tokens import (
    BASE_BREAKPOINT,
    SIDE_ORDER,
    SIDE_SUFFIXES,
    AllEntry,
    Breakpoint,
    EntryShape,
    ScalarEntry,
    SideKey,
    SidesEntry,
    SpacingSize,
    SplitEntry,
    StyleCategory,
    TaggedEntry,
    TokenEntry,
)

__all__ = [
    # Tokens
    "BASE_BREAKPOINT",
    "SIDE_ORDER",
    "SIDE_SUFFIXES",
    "AllEntry",
    "Breakpoint",
    "EntryShape",
    "ScalarEntry",
    "SideKey",
    "SidesEntry",
    "SpacingSize",
    "SplitEntry",
    "StyleCategory",
    "TaggedEntry",
    "TokenEntry",
    # Presets
    "Preset",
    "PresetGroup",
    "SourceStatus",
]
