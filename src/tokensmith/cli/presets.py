"""
Preset inspection commands.
"""

from __future__ import annotations

import json
from typing import Annotated

import typer
from rich.table import Table

from ..compiler.registry import load_presets
from .common import ManifestOption, console, load_project

presets_app = typer.Typer(
    help="Inspect the typography presets loaded from the source document",
    no_args_is_help=True,
)


@presets_app.command("list")
def list_presets(
    manifest: ManifestOption = None,
    output_json: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """List presets grouped as the editor shows them."""
    project = load_project(manifest)
    registry = load_presets(
        project.source.path,
        project.source.container,
        project.source.default_group,
    )

    if output_json:
        payload = {
            "status": registry.source_status.value,
            "error": registry.source_error,
            "presets": [preset.model_dump() for preset in registry.values()],
        }
        console.print_json(json.dumps(payload))
        return

    if not registry.available:
        console.print(
            f"[yellow]Preset source unavailable ({registry.source_status.value}):[/yellow] "
            f"{registry.source_error}"
        )

    if not registry.has_presets():
        console.print("[dim]No presets found.[/dim]")
        return

    table = Table(title="Typography Presets")
    table.add_column("ID", style="cyan")
    table.add_column("Label")
    table.add_column("Group")
    table.add_column("Properties", justify="right")

    for group in registry.grouped().values():
        for preset_id in group.preset_ids:
            preset = registry[preset_id]
            table.add_row(preset_id, preset.label, group.title, str(len(preset.properties)))

    console.print(table)
    console.print(f"\n[dim]{len(registry)} preset(s) shown[/dim]")
