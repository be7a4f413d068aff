"""
Loader for the bundled live-preview JavaScript.

The preview runtime ships as package data next to this module so hosts can
serve it to the editor or inline it into a page.
"""

from __future__ import annotations

import html
from pathlib import Path

JS_DIR = Path(__file__).parent / "js"

PREVIEW_RUNTIME = "preview-runtime.js"

_module_cache: dict[str, str] = {}


def get_js_path(name: str) -> Path:
    return JS_DIR / name


def load_js_module(name: str) -> str:
    """
    Return the source of a bundled JS module.

    Raises:
        FileNotFoundError: If no module of that name is bundled
    """
    if name in _module_cache:
        return _module_cache[name]
    path = get_js_path(name)
    if not path.is_file():
        raise FileNotFoundError(f"JavaScript module not found: {name}")
    source = path.read_text(encoding="utf-8")
    _module_cache[name] = source
    return source


def get_preview_runtime_js() -> str:
    """Source of the live-preview runtime (global ``TokensmithPreview``)."""
    return load_js_module(PREVIEW_RUNTIME)


def render_script_tag(script_id: str = "tokensmith-preview-runtime") -> str:
    """Inline the preview runtime in a ``<script>`` element."""
    return f'<script id="{html.escape(script_id, quote=True)}">\n{get_preview_runtime_js()}\n</script>\n'


def clear_cache() -> None:
    """Forget loaded sources (used in tests and after package upgrades)."""
    _module_cache.clear()
