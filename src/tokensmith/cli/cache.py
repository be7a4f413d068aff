"""
Stylesheet cache maintenance commands.
"""

from __future__ import annotations

import logging

import typer

from ..cache.content_cache import source_hash
from ..compiler.context import build_cache
from ..core.errors import CacheUnavailableError
from ..logging import get_logger, log_with_context
from .common import ManifestOption, load_project

cache_app = typer.Typer(
    help="Inspect and clear the stylesheet cache",
    no_args_is_help=True,
)

logger = get_logger("cli")


@cache_app.command("clear")
def clear_cache(manifest: ManifestOption = None) -> None:
    """Remove every cached stylesheet."""
    project = load_project(manifest)
    cache = build_cache(project.cache)
    if cache is None:
        typer.echo("Caching is disabled (backend = none)")
        return

    try:
        removed = cache.clear_all()
    except CacheUnavailableError as e:
        typer.echo(f"Cache unavailable: {e}", err=True)
        raise typer.Exit(code=1)

    typer.echo(f"✓ Cleared {removed} cached stylesheet(s) from the {project.cache.backend} cache")


@cache_app.command("check")
def check_cache(manifest: ManifestOption = None) -> None:
    """Invalidate cached stylesheets if the preset source changed."""
    project = load_project(manifest)
    cache = build_cache(project.cache)
    if cache is None:
        typer.echo("Caching is disabled (backend = none)")
        return

    current = source_hash(project.source.path)
    try:
        previous = cache.stored_source_hash()
    except CacheUnavailableError as e:
        typer.echo(f"Cache unavailable: {e}", err=True)
        raise typer.Exit(code=1)

    changed = cache.invalidate_if_source_changed(current)
    log_with_context(
        logger,
        logging.INFO,
        "Cache source check",
        backend=project.cache.backend,
        previous=previous,
        current=current,
        invalidated=changed,
    )
    if changed:
        typer.echo("Preset source changed; cached stylesheets invalidated")
    else:
        typer.echo("Preset source unchanged; cache is current")
