"""
Preset IR types.

A preset is a named, reusable bag of CSS property -> value pairs (typically a
typography style) loaded from the upstream configuration document.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class SourceStatus(StrEnum):
    """Outcome of reading the upstream preset document."""

    OK = "ok"
    MISSING = "missing"
    MALFORMED = "malformed"
    NO_CONTAINER = "no_container"


class Preset(BaseModel):
    """
    A named style preset.

    Example:
        Preset(
            id="termina-16-400",
            label="Termina • 16px • Regular",
            group="theme",
            properties={"font-size": "16px", "letter-spacing": "5%"},
        )
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Unique preset key, used verbatim in the selector")
    label: str = Field(description="Human label")
    description: str = Field(default="", description="Free-form description")
    group: str = Field(default="theme", description="Group id")
    group_title: str | None = Field(default=None, description="Resolved group title")
    properties: dict[str, Any] = Field(
        default_factory=dict, description="Canonical kebab-case property -> raw value"
    )


class PresetGroup(BaseModel):
    """Presets sharing a group id, in registry order."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    preset_ids: list[str] = Field(default_factory=list)
