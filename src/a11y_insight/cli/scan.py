"""Scan CLI command - audit one HTML document."""

import asyncio
from pathlib import Path
from typing import List, Optional

import typer

from . import app
from ._common import console, err_console, meets_level, resolve_config, write_output
from ..document import SoupDocument
from ..exceptions import A11yInsightError, CodedError, ErrorCode, ExportError
from ..formatters import FORMATTERS, get_formatter
from ..insights import JsonBaselineRunner, NullBaselineRunner, Scanner
from ..logging_config import setup_logging


@app.command()
def scan(
    path: Path = typer.Argument(
        ...,
        help="HTML file to audit",
        exists=True, file_okay=True, dir_okay=False,
    ),
    level: Optional[str] = typer.Option(
        None, "--level", "-l",
        help="WCAG level of baseline rules to request: A, AA or AAA (default: config, else AA)",
    ),
    tags: Optional[List[str]] = typer.Option(
        None, "--tag", "-t",
        help="Extra baseline rule tag (repeatable)",
    ),
    no_advanced: bool = typer.Option(
        False, "--no-advanced",
        help="Skip the structural detectors",
    ),
    no_semantic: bool = typer.Option(
        False, "--no-semantic",
        help="Skip the semantic detectors",
    ),
    insights: bool = typer.Option(
        False, "--insights",
        help="Attach a summary with prioritized recommendations",
    ),
    baseline: Optional[Path] = typer.Option(
        None, "--baseline", "-b",
        help="axe-core results JSON produced for this document",
        exists=True, file_okay=True, dir_okay=False,
    ),
    fmt: str = typer.Option(
        "rich", "--format", "-f",
        help="Output format: rich, json, csv or quiet",
    ),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o",
        help="Write the formatted report to this file",
    ),
    url: Optional[str] = typer.Option(
        None, "--url",
        help="Name recorded on the report (defaults to the file name)",
    ),
    config: Optional[Path] = typer.Option(
        None, "--config", "-c",
        help="Configuration file (TOML)",
        exists=True, file_okay=True, dir_okay=False,
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v",
        help="Enable debug logging",
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q",
        help="Suppress logging",
    ),
    log_file: Optional[Path] = typer.Option(
        None, "--log-file",
        help="Also write debug logs to this file",
    ),
    fail_on: Optional[str] = typer.Option(
        None, "--fail-on",
        help="Exit 2 unless compliance reaches this level: A, AA or AAA",
    ),
):
    """
    Audit an HTML document for WCAG accessibility issues.

    Runs the structural and semantic detectors, merges baseline rule engine
    results when given, and reports scores and a compliance level.

    [bold cyan]Examples:[/bold cyan]

      a11y-insight scan page.html

      a11y-insight scan page.html --level AAA --insights

      a11y-insight scan page.html --baseline axe.json --format csv -o report.csv

      a11y-insight scan page.html --fail-on AA
    """
    logger = setup_logging(verbose=verbose, quiet=quiet)

    try:
        if fmt not in FORMATTERS:
            raise ExportError(
                message=f"Unknown format: {fmt!r}. Choose from: {', '.join(sorted(FORMATTERS))}",
                code=ErrorCode.AX600,
                recoverable=False,
            )
        if fail_on is not None and fail_on.upper() not in ("A", "AA", "AAA"):
            err_console.print(f"[red]Error:[/red] --fail-on must be A, AA or AAA, got {fail_on!r}")
            raise typer.Exit(1)

        settings = resolve_config(
            config=config,
            level=level,
            tags=tags,
            no_advanced=no_advanced,
            no_semantic=no_semantic,
            insights=insights,
            verbose=verbose,
            quiet=quiet,
        )
        logger = setup_logging(
            verbose=settings.verbosity == "verbose",
            quiet=settings.verbosity == "quiet",
            log_file=str(log_file) if log_file is not None else None,
        )

        document = SoupDocument.from_file(path, url=url)
        runner = JsonBaselineRunner(baseline) if baseline is not None else NullBaselineRunner()
        report = asyncio.run(Scanner(settings, baseline_runner=runner).scan(document))

        formatter = get_formatter(fmt)
        if output is not None:
            write_output(output, formatter.format(report))
            err_console.print(f"[green]Report written to[/green] {output}")
        else:
            formatter.render(report)

        if fail_on is not None and not meets_level(report.compliance.level, fail_on):
            err_console.print(
                f"[red]Compliance {report.compliance.level.value} does not meet "
                f"{fail_on.upper()}[/red]"
            )
            raise typer.Exit(2)

    except typer.Exit:
        raise
    except (A11yInsightError, CodedError) as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    except Exception as e:
        logger.exception("Unexpected error")
        err_console.print(f"[red]Unexpected error:[/red] {e}")
        if verbose:
            console.print_exception()
        raise typer.Exit(1)
