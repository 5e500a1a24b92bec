"""Detectors CLI command - list every detector the scanner runs."""

import typer
from rich.table import Table

from . import app
from ._common import console
from ..insights.semantic import get_default_detectors as semantic_detectors
from ..insights.structural import get_default_detectors as structural_detectors


@app.command()
def detectors(
    fmt: str = typer.Option(
        "rich", "--format", "-f",
        help="Output format: rich or plain",
    ),
):
    """
    List the structural and semantic detectors with their WCAG criteria.
    """
    rows = [
        ("structural", d.name, d.category, d.wcag_criterion) for d in structural_detectors()
    ] + [
        ("semantic", d.name, d.category, "-") for d in semantic_detectors()
    ]

    if fmt == "plain":
        for row in rows:
            typer.echo("\t".join(row))
        return

    table = Table(title="Detectors", expand=False)
    table.add_column("Analyzer", style="dim")
    table.add_column("Detector", style="cyan")
    table.add_column("Category")
    table.add_column("WCAG", justify="right")
    for row in rows:
        table.add_row(*row)
    console.print(table)
