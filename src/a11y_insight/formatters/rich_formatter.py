"""Rich terminal formatter for a11y-insight."""

import io

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..insights.models import ComplianceLevel, ScanReport, Severity
from .base import BaseFormatter

console = Console(stderr=True)

_SEVERITY_STYLES = {
    Severity.CRITICAL: "red bold",
    Severity.SERIOUS: "red",
    Severity.MODERATE: "yellow",
    Severity.MINOR: "dim",
}


def _severity_label(severity: Severity) -> str:
    style = _SEVERITY_STYLES[severity]
    return f"[{style}]{severity.value}[/{style}]"


def _score_label(score: float) -> str:
    if score >= 90:
        return f"[green]{score:.1f}[/green]"
    elif score >= 70:
        return f"[yellow]{score:.1f}[/yellow]"
    else:
        return f"[red]{score:.1f}[/red]"


def _level_label(level: ComplianceLevel) -> str:
    if level is ComplianceLevel.NON_COMPLIANT:
        return f"[red bold]{level.value}[/red bold]"
    return f"[green bold]WCAG {level.value}[/green bold]"


class RichFormatter(BaseFormatter):
    """Rich terminal output: summary panel, scores, and finding tables."""

    def __init__(self, target: Console = console):
        self.console = target

    def render(self, report: ScanReport) -> None:
        self._print_summary(report)
        self._print_baseline(report)
        self._print_structural(report)
        self._print_semantic(report)
        self._print_insights(report)

    def format(self, report: ScanReport) -> str:
        buffer = Console(file=io.StringIO(), record=True, width=120)
        RichFormatter(buffer).render(report)
        return buffer.export_text()

    # -- private helpers --

    def _print_summary(self, report: ScanReport) -> None:
        c = report.compliance
        summary_text = (
            f"[bold]{report.url}[/bold]\n"
            f"Compliance: {_level_label(c.level)}  |  "
            f"Overall: {_score_label(report.scores.overall)}  |  "
            f"Critical issues: [red]{c.critical_issues}[/red]  |  "
            f"Tests: {c.total_tests}  |  "
            f"Pass rate: {c.pass_rate:.0f}%\n"
            f"[dim]{report.elements_analyzed} elements analyzed in "
            f"{report.scan_duration_ms:.0f} ms[/dim]"
        )
        self.console.print(
            Panel(summary_text, title="[bold cyan]Accessibility Scan[/bold cyan]", expand=False)
        )

        scores = Table(title="Scores", expand=False)
        for name in ("Overall", "WCAG A", "WCAG AA", "WCAG AAA", "Semantic", "Cognitive"):
            scores.add_column(name, justify="right")
        s = report.scores
        scores.add_row(
            *(_score_label(v) for v in (s.overall, s.wcag_a, s.wcag_aa, s.wcag_aaa, s.semantic, s.cognitive))
        )
        self.console.print(scores)
        self.console.print()

    def _print_baseline(self, report: ScanReport) -> None:
        violations = report.baseline.violations
        if not violations:
            return
        table = Table(title=f"Baseline Violations ({len(violations)})", expand=True)
        table.add_column("Severity", width=10)
        table.add_column("Rule", style="cyan")
        table.add_column("Description", ratio=3)
        table.add_column("Nodes", justify="right", width=6)
        for v in violations:
            table.add_row(
                _severity_label(v.impact) if v.impact else "[dim]unknown[/dim]",
                v.id,
                v.help or v.description,
                str(len(v.nodes)),
            )
        self.console.print(table)
        self.console.print()

    def _print_structural(self, report: ScanReport) -> None:
        findings = report.structural_findings
        if not findings:
            return
        table = Table(title=f"Structural Findings ({len(findings)})", expand=True)
        table.add_column("Severity", width=10)
        table.add_column("WCAG", width=7)
        table.add_column("Finding", ratio=2)
        table.add_column("Elements", ratio=2, style="yellow")
        for f in sorted(findings, key=lambda f: f.severity.rank):
            selectors = ", ".join(e.selector for e in f.elements[:3])
            if len(f.elements) > 3:
                selectors += f" [dim](+{len(f.elements) - 3})[/dim]"
            table.add_row(_severity_label(f.severity), f.wcag_criterion, f.title, selectors)
        self.console.print(table)
        self.console.print()

    def _print_semantic(self, report: ScanReport) -> None:
        findings = report.semantic_findings
        if not findings:
            return
        table = Table(title=f"Semantic Findings ({len(findings)})", expand=True)
        table.add_column("Severity", width=10)
        table.add_column("Category", width=10)
        table.add_column("Finding", ratio=2)
        table.add_column("Confidence", justify="right", width=10)
        for f in sorted(findings, key=lambda f: f.severity.rank):
            table.add_row(
                _severity_label(f.severity), f.category.value, f.title, f"{f.confidence:.0f}%"
            )
        self.console.print(table)
        self.console.print()

    def _print_insights(self, report: ScanReport) -> None:
        insights = report.insights
        if insights is None:
            return
        self.console.print(f"[bold]Summary:[/bold] {insights.summary}")
        self.console.print(f"[bold]Estimated fix time:[/bold] {insights.estimated_fix_time}")
        if insights.priority_recommendations:
            self.console.print("[bold]Recommendations:[/bold]")
            for rec in insights.priority_recommendations:
                self.console.print(f"  [green]->[/green] {rec}")
        self.console.print()
