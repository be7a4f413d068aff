"""
Ahead-of-time output for the host render pipeline.

The host injects the preset stylesheet at two points, the document head
and the editor preview head. Both go through ``render_style_tag`` with the
same context, so they always receive identical bytes.
"""

from __future__ import annotations

import html
from collections.abc import Mapping
from typing import Any

from ..compiler.class_names import append_classes
from ..compiler.context import CompilerContext


def render_style_tag(css: str, style_id: str) -> str:
    """Wrap *css* in a ``<style>`` element; empty CSS renders nothing."""
    if not css:
        return ""
    return f'<style id="{html.escape(style_id, quote=True)}">\n{css}\n</style>\n'


class StyleRenderer:
    """Renders preset CSS and element classes from a CompilerContext."""

    def __init__(self, context: CompilerContext) -> None:
        self.context = context

    def stylesheet(self) -> str:
        if not self.context.settings.preset_css:
            return ""
        return self.context.stylesheet()

    def head_html(self) -> str:
        """Style block for the front-end document head."""
        return render_style_tag(self.stylesheet(), self.context.settings.style_id)

    def editor_head_html(self) -> str:
        """Style block for the editor preview head (same bytes as ``head_html``)."""
        return render_style_tag(self.stylesheet(), self.context.settings.style_id)

    def class_attribute(self, existing: str | None, attributes: Mapping[str, Any] | None = None) -> str:
        """Append an element's spacing classes to its existing class attribute."""
        return append_classes(existing, self.context.classes_for(attributes))
