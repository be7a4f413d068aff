"""
Class name compilation commands.
"""

from __future__ import annotations

import json
from typing import Annotated

import typer

from ..compiler.class_names import compile_responsive, compile_spacing_classes
from ..core.ir.tokens import StyleCategory
from .common import ManifestOption, load_project

classes_app = typer.Typer(
    help="Compile responsive token values to utility class names",
    no_args_is_help=True,
)

SPACING = "spacing"


@classes_app.command("compile")
def compile_classes(
    category: Annotated[
        str, typer.Argument(help="gap, padding, margin, or 'spacing' for all three at once")
    ],
    value: Annotated[
        str,
        typer.Argument(help='Responsive value map as JSON, e.g. \'{"base": "2", "md": "4"}\''),
    ],
    manifest: ManifestOption = None,
    strict: Annotated[
        bool, typer.Option("--strict", help="Fail when an entry is malformed instead of skipping it")
    ] = False,
) -> None:
    """Print the classes for one responsive value map."""
    valid = [c.value for c in StyleCategory] + [SPACING]
    if category not in valid:
        typer.echo(f"Unknown category '{category}' (expected one of {', '.join(valid)})", err=True)
        raise typer.Exit(code=1)

    try:
        data = json.loads(value)
    except json.JSONDecodeError as e:
        typer.echo(f"Invalid JSON: {e}", err=True)
        raise typer.Exit(code=1)

    project = load_project(manifest)
    problems: list[str] = []

    def _collect(raw: object, reason: str) -> None:
        problems.append(f"{json.dumps(raw, default=str)}: {reason}")

    order = project.output.breakpoint_order
    if category == SPACING:
        classes = compile_spacing_classes(data if isinstance(data, dict) else None, order, _collect)
    else:
        classes = compile_responsive(category, data, order, _collect)

    for problem in problems:
        typer.echo(f"Skipped malformed entry {problem}", err=True)
    if strict and problems:
        raise typer.Exit(code=1)

    typer.echo(classes)
