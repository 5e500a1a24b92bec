"""CSV formatter for a11y-insight.

One row per (finding, affected element). Every cell is quoted and embedded
quotes are doubled, so selectors and descriptions containing commas or
quotes never shift columns.
"""

import csv
import io

from ..insights.models import ScanReport
from .base import BaseFormatter

HEADERS = (
    "Type",
    "Severity",
    "Rule ID",
    "Description",
    "Element",
    "WCAG Criterion",
    "Fix Suggestion",
)


def report_rows(report: ScanReport) -> list[list[str]]:
    rows: list[list[str]] = []

    for violation in report.baseline.violations:
        for node in violation.nodes:
            rows.append([
                "Axe Core Violation",
                violation.impact.value if violation.impact else "unknown",
                violation.id,
                violation.description,
                ", ".join(node.target),
                ", ".join(t for t in violation.tags if t.startswith("wcag")),
                violation.help,
            ])

    for finding in report.structural_findings:
        for element in finding.elements:
            rows.append([
                "Advanced Analysis",
                finding.severity.value,
                finding.test_id,
                finding.description,
                element.selector,
                finding.wcag_criterion,
                element.suggestion,
            ])

    for issue in report.semantic_findings:
        for element in issue.elements:
            rows.append([
                "Semantic Analysis",
                issue.severity.value,
                issue.test_id,
                issue.description,
                element.selector,
                "Semantic/Cognitive",
                "; ".join(issue.suggested_fixes),
            ])

    return rows


class CsvFormatter(BaseFormatter):
    """Render findings as CSV."""

    def render(self, report: ScanReport) -> None:
        print(self.format(report))

    def format(self, report: ScanReport) -> str:
        output = io.StringIO()
        writer = csv.writer(output, quoting=csv.QUOTE_ALL, lineterminator="\n")
        writer.writerow(HEADERS)
        writer.writerows(report_rows(report))
        return output.getvalue()[:-1]
