"""Shared pytest fixtures for tokensmith tests."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import pytest

from tokensmith.runtime.js_loader import clear_cache


@pytest.fixture(autouse=True)
def _reset_tokensmith_logging():
    """Undo handlers the CLI attaches so caplog keeps seeing library records."""
    yield
    root = logging.getLogger("tokensmith")
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    root.propagate = True
    root.setLevel(logging.NOTSET)
    clear_cache()


@pytest.fixture
def preset_document() -> dict[str, Any]:
    """An upstream document with groups, a derived label and a bad id."""
    return {
        "modules": {
            "typographyPresets": {
                "groups": {"headings": {"title": "Headings"}},
                "items": {
                    "termina-16-400": {
                        "properties": {"fontSize": "16px", "letterSpacing": "5%"},
                    },
                    "h1": {
                        "label": "Heading 1",
                        "group": "headings",
                        "properties": {"fontSize": "40px", "lineHeight": "auto"},
                    },
                    "Bad Id": {"properties": {"color": "red"}},
                },
            }
        }
    }


@pytest.fixture
def preset_file(tmp_path: Path, preset_document: dict[str, Any]) -> Path:
    """The preset document written to disk as JSON."""
    path = tmp_path / "config" / "tokens.json"
    path.parent.mkdir(parents=True)
    path.write_text(json.dumps(preset_document), encoding="utf-8")
    return path


@pytest.fixture
def manifest_file(tmp_path: Path, preset_file: Path) -> Path:
    """A tokensmith.toml pointing at ``preset_file`` with a file cache."""
    path = tmp_path / "tokensmith.toml"
    path.write_text(
        """
[source]
path = "config/tokens.json"

[cache]
backend = "file"
directory = ".tokensmith/cache"

[[breakpoints]]
slug = "md"
name = "Medium"
value = "768px"

[[spacing]]
slug = "2"
name = "Small"
size = "0.5rem"
""",
        encoding="utf-8",
    )
    return path
