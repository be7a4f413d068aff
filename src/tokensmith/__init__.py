"""
tokensmith - responsive style-token compiler.

Turns design-token configuration (spacing shorthand, typography presets)
into utility class names and CSS rule text, identically at render time and
in the live editor preview.
"""

from __future__ import annotations

import re
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _metadata_version
from pathlib import Path as _Path

from .compiler import (
    CompilerContext,
    build_context,
    compile_class_name,
    compile_responsive,
    compile_spacing_classes,
    generate,
    generate_all,
    load_presets,
    normalize,
)
from .core.errors import (
    CacheUnavailableError,
    ConfigError,
    SourceUnavailableError,
    TokensmithError,
)


def _get_version() -> str:
    """Get version from pyproject.toml (editable) or importlib.metadata (installed)."""
    pyproject = _Path(__file__).parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        content = pyproject.read_text(encoding="utf-8")
        if match := re.search(r'^version\s*=\s*["\']([^"\']+)["\']', content, re.MULTILINE):
            return match.group(1)

    try:
        return _metadata_version("tokensmith")
    except PackageNotFoundError:
        return "0.0.0"


__version__ = _get_version()

__all__ = [
    "__version__",
    "CompilerContext",
    "build_context",
    "normalize",
    "compile_class_name",
    "compile_responsive",
    "compile_spacing_classes",
    "load_presets",
    "generate",
    "generate_all",
    "TokensmithError",
    "ConfigError",
    "SourceUnavailableError",
    "CacheUnavailableError",
]
