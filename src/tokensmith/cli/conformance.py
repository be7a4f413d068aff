"""
Dual-runtime conformance commands.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated

import typer
from rich.table import Table

from ..conformance.runner import (
    CORPUS_PATH,
    ConformanceReport,
    compare_runtimes,
    find_node,
    load_corpus,
    run_js_corpus,
    run_python_corpus,
)
from ..core.errors import ConformanceError
from .common import console

conformance_app = typer.Typer(
    help="Check that the Python and JavaScript compilers agree on the fixture corpus",
    no_args_is_help=True,
)


def _print_failures(report: ConformanceReport) -> None:
    if not report.failures:
        return
    table = Table(title=f"{report.runtime} failures")
    table.add_column("Case", style="cyan")
    table.add_column("Expected")
    table.add_column("Actual")
    for result in report.failures:
        actual = result.error if result.error else json.dumps(result.actual, ensure_ascii=False)
        table.add_row(result.case_id, json.dumps(result.expected, ensure_ascii=False), actual)
    console.print(table)


@conformance_app.command("run")
def run_conformance(
    js: Annotated[
        bool, typer.Option("--js/--no-js", help="Also run the live-preview runtime under node")
    ] = True,
    node: Annotated[
        str | None, typer.Option("--node", help="Path to the node binary (default: node on PATH)")
    ] = None,
    corpus: Annotated[
        Path | None, typer.Option("--corpus", help="Corpus file (default: bundled corpus)")
    ] = None,
) -> None:
    """Run the fixture corpus; exits 1 on any mismatch."""
    corpus_path = corpus or CORPUS_PATH
    try:
        cases = load_corpus(corpus_path)
    except ConformanceError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=1)

    python_report = run_python_corpus(cases)
    console.print(python_report.summary())
    _print_failures(python_report)
    ok = python_report.passed

    if js:
        if node is None and find_node() is None:
            typer.echo("node not found on PATH; skipping the JavaScript runtime", err=True)
        else:
            try:
                js_report = run_js_corpus(node, corpus_path)
            except ConformanceError as e:
                typer.echo(f"JavaScript runtime failed: {e}", err=True)
                raise typer.Exit(code=1)
            console.print(js_report.summary())
            _print_failures(js_report)
            mismatched = compare_runtimes(python_report, js_report)
            if mismatched:
                console.print(f"[red]Runtimes disagree on:[/red] {', '.join(mismatched)}")
            ok = ok and js_report.passed and not mismatched

    if not ok:
        raise typer.Exit(code=1)
    console.print("[green]✓ All conformance cases passed[/green]")
