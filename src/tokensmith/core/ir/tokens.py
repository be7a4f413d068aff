"""
Token IR types for responsive spacing configuration.

A Token Entry is one breakpoint's worth of raw configuration for one style
category. Four shapes exist: a legacy bare value, and three tagged objects
(``all``, ``split``, ``sides``) discriminated on their ``type`` field.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

from ..strings import format_scalar

# =============================================================================
# Enums
# =============================================================================


class SideKey(StrEnum):
    """Keys of a canonical side value map."""

    ALL = "all"
    X = "x"
    Y = "y"
    TOP = "top"
    RIGHT = "right"
    BOTTOM = "bottom"
    LEFT = "left"


# Emission order for classes within one breakpoint
SIDE_ORDER: tuple[SideKey, ...] = (
    SideKey.ALL,
    SideKey.X,
    SideKey.Y,
    SideKey.TOP,
    SideKey.RIGHT,
    SideKey.BOTTOM,
    SideKey.LEFT,
)

# Suffix appended to the property abbreviation for each side
SIDE_SUFFIXES: dict[str, str] = {
    SideKey.ALL: "",
    SideKey.X: "x",
    SideKey.Y: "y",
    SideKey.TOP: "t",
    SideKey.RIGHT: "r",
    SideKey.BOTTOM: "b",
    SideKey.LEFT: "l",
}


class EntryShape(StrEnum):
    """Tag values accepted in the ``type`` field of an object entry."""

    ALL = "all"
    SPLIT = "split"
    SIDES = "sides"


class StyleCategory(StrEnum):
    """Responsive style categories that compile to utility classes."""

    GAP = "gap"
    PADDING = "padding"
    MARGIN = "margin"

    @property
    def abbrev(self) -> str:
        return _CATEGORY_ABBREVS[self]

    @property
    def css_property(self) -> str:
        return _CATEGORY_PROPERTIES[self]

    @property
    def marker(self) -> str | None:
        """Presence class emitted once per responsive set, if any."""
        return "has-gap" if self is StyleCategory.GAP else None


_CATEGORY_ABBREVS: dict[str, str] = {
    StyleCategory.GAP: "gap",
    StyleCategory.PADDING: "p",
    StyleCategory.MARGIN: "m",
}

_CATEGORY_PROPERTIES: dict[str, str] = {
    StyleCategory.GAP: "gap",
    StyleCategory.PADDING: "padding",
    StyleCategory.MARGIN: "margin",
}

BASE_BREAKPOINT = "base"


# =============================================================================
# Side values
# =============================================================================


def coerce_side_value(value: Any) -> str | None:
    """
    Coerce one raw side value to a string, or ``None`` when absent.

    ``None``, ``False`` and ``""`` are absent. ``True``, containers and other
    objects are wrong field types and raise ``ValueError``.
    """
    if value is None or value is False:
        return None
    if isinstance(value, bool):
        raise ValueError("boolean is not a valid side value")
    if isinstance(value, (int, float)):
        return format_scalar(value)
    if isinstance(value, str):
        return value or None
    raise ValueError(f"unsupported side value type: {type(value).__name__}")


SideValue = Annotated[str | None, BeforeValidator(coerce_side_value)]


# =============================================================================
# Token entries
# =============================================================================


class ScalarEntry(BaseModel):
    """Legacy entry: a single value applied uniformly."""

    model_config = ConfigDict(frozen=True)

    value: str


class AllEntry(BaseModel):
    """``{type: "all", value}``: one value on all sides."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    type: Literal["all"] = "all"
    value: SideValue = None


class SplitEntry(BaseModel):
    """``{type: "split", x?, y?}``: independent horizontal/vertical values."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    type: Literal["split"] = "split"
    x: SideValue = None
    y: SideValue = None


class SidesEntry(BaseModel):
    """``{type: "sides", top?, right?, bottom?, left?}``."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    type: Literal["sides"] = "sides"
    top: SideValue = None
    right: SideValue = None
    bottom: SideValue = None
    left: SideValue = None


TaggedEntry = Annotated[AllEntry | SplitEntry | SidesEntry, Field(discriminator="type")]

TokenEntry = ScalarEntry | AllEntry | SplitEntry | SidesEntry


# =============================================================================
# Breakpoints and spacing scale
# =============================================================================


class Breakpoint(BaseModel):
    """A named min-width breakpoint. ``base`` is implicit and unconditional."""

    model_config = ConfigDict(frozen=True)

    slug: str = Field(description="Prefix used in class names (e.g. 'md')")
    name: str = Field(default="", description="Human label")
    value: str = Field(default="0", description="Min-width CSS length (e.g. '768px')")

    @property
    def is_base(self) -> bool:
        return self.slug == BASE_BREAKPOINT


class SpacingSize(BaseModel):
    """One step of the spacing scale."""

    model_config = ConfigDict(frozen=True)

    slug: str
    name: str
    size: str
