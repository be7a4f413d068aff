"""
Output runtimes.

``renderer`` is the ahead-of-time path used by the host render pipeline;
``js_loader`` serves the live-preview runtime that re-implements the same
compiler in JavaScript for the editor.
"""

from .js_loader import clear_cache, get_preview_runtime_js, load_js_module
from .renderer import StyleRenderer, render_style_tag

__all__ = [
    "StyleRenderer",
    "render_style_tag",
    "load_js_module",
    "get_preview_runtime_js",
    "clear_cache",
]
