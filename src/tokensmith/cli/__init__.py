"""
tokensmith command line interface.

Sub-apps:

- presets: inspect loaded typography presets
- css: build preset and spacing utility stylesheets
- classes: compile responsive values to class names
- cache: clear or re-validate the stylesheet cache
- conformance: run the shared corpus against both runtimes
"""

from __future__ import annotations

import platform
from typing import Annotated

import typer

from .. import __version__
from .cache import cache_app
from .classes import classes_app
from .conformance import conformance_app
from .css import css_app
from .presets import presets_app

app = typer.Typer(
    help="tokensmith – responsive style-token compiler",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        typer.echo(f"tokensmith {__version__}")
        typer.echo(f"Python {platform.python_version()} ({platform.python_implementation()})")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-v",
            callback=version_callback,
            is_eager=True,
            help="Show version and environment information",
        ),
    ] = None,
) -> None:
    """tokensmith CLI main callback for global options."""


app.add_typer(presets_app, name="presets")
app.add_typer(css_app, name="css")
app.add_typer(classes_app, name="classes")
app.add_typer(cache_app, name="cache")
app.add_typer(conformance_app, name="conformance")


def main() -> None:
    app()


__all__ = ["app", "main", "version_callback"]
