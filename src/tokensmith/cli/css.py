"""
Stylesheet build commands.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from ..compiler.context import build_context
from ..runtime.renderer import StyleRenderer
from .common import ManifestOption, load_project, write_output

css_app = typer.Typer(
    help="Generate preset and spacing utility stylesheets",
    no_args_is_help=True,
)

OutputOption = Annotated[
    Path | None,
    typer.Option("--output", "-o", help="Write to a file instead of stdout"),
]


@css_app.command("build")
def build_css(
    manifest: ManifestOption = None,
    output: OutputOption = None,
    style_tag: Annotated[
        bool, typer.Option("--style-tag", help="Wrap the CSS in a <style> element")
    ] = False,
    no_cache: Annotated[bool, typer.Option("--no-cache", help="Bypass the stylesheet cache")] = False,
) -> None:
    """Generate the typography preset stylesheet."""
    project = load_project(manifest)
    context = build_context(project, use_cache=not no_cache)

    if not context.presets.available and project.source.path is not None:
        typer.echo(
            f"Warning: {context.presets.source_error} (generating an empty stylesheet)",
            err=True,
        )

    renderer = StyleRenderer(context)
    text = renderer.head_html() if style_tag else renderer.stylesheet()
    write_output(text, output)


@css_app.command("utilities")
def build_utilities(
    manifest: ManifestOption = None,
    output: OutputOption = None,
) -> None:
    """Generate the spacing utility stylesheet from [[spacing]] and [[breakpoints]]."""
    project = load_project(manifest)
    context = build_context(project, use_cache=False)

    text = context.utilities_css()
    if not text:
        typer.echo("No spacing scale configured; add [[spacing]] entries to tokensmith.toml", err=True)
    write_output(text, output)
