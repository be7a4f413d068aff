"""Shared CLI helpers: manifest resolution, logging and the rich console."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from ..core.errors import ConfigError
from ..core.manifest import TokensmithManifest, default_manifest, find_manifest, load_manifest
from ..logging import setup_logging

console = Console()

ManifestOption = Annotated[
    str | None,
    typer.Option(
        "--manifest",
        "-m",
        help="Path to tokensmith.toml (default: search upwards from the current directory)",
    ),
]


def load_project(manifest: str | None) -> TokensmithManifest:
    """Load the manifest for a command and configure logging from it.

    Without ``--manifest``, the nearest ``tokensmith.toml`` above the
    current directory is used; if there is none, every setting defaults.
    Exits with code 1 when an explicit manifest is missing or invalid.
    """
    if manifest is not None:
        manifest_path: Path | None = Path(manifest).resolve()
        if not manifest_path.exists():
            typer.echo(f"Manifest not found: {manifest_path}", err=True)
            raise typer.Exit(code=1)
    else:
        manifest_path = find_manifest(Path.cwd())

    try:
        project = load_manifest(manifest_path) if manifest_path else default_manifest(Path.cwd())
    except ConfigError as e:
        typer.echo(f"Invalid manifest: {e}", err=True)
        raise typer.Exit(code=1)

    setup_logging(project.logging.level, project.logging.directory)
    return project


def write_output(text: str, output: Path | None) -> None:
    """Write *text* to *output*, or to stdout when no path is given."""
    if output is None:
        typer.echo(text, nl=not text.endswith("\n"))
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text, encoding="utf-8")
    typer.echo(f"✓ Wrote {output}", err=True)
