"""Rule-based insight summary attached to a report on request."""

from __future__ import annotations

import math

from .models import (
    BaselineResults,
    InsightSummary,
    SemanticCategory,
    SemanticFinding,
    Severity,
    StructuralCategory,
    StructuralFinding,
)

MAX_RECOMMENDATIONS = 5


def priority_recommendations(
    baseline: BaselineResults,
    structural: tuple[StructuralFinding, ...],
    semantic: tuple[SemanticFinding, ...],
) -> tuple[str, ...]:
    recs = []

    critical = [v for v in baseline.violations if v.impact is Severity.CRITICAL]
    if critical:
        recs.append(f"Fix {len(critical)} critical accessibility violations immediately")
    if any("color-contrast" in v.id for v in baseline.violations):
        recs.append("Improve color contrast ratios for better readability")
    if any(f.category is StructuralCategory.KEYBOARD for f in structural):
        recs.append("Ensure all interactive elements are keyboard accessible")
    if any("label" in v.id or "form" in v.id for v in baseline.violations):
        recs.append("Add proper labels to all form controls")
    if any(f.category is StructuralCategory.STRUCTURE for f in structural):
        recs.append("Improve page structure with proper headings and landmarks")
    if any(f.category is SemanticCategory.COGNITIVE for f in semantic):
        recs.append("Simplify content language and structure for cognitive accessibility")

    return tuple(recs[:MAX_RECOMMENDATIONS])


def build_insights(
    baseline: BaselineResults,
    structural: tuple[StructuralFinding, ...],
    semantic: tuple[SemanticFinding, ...],
    critical_issues: int,
) -> InsightSummary:
    total = len(baseline.violations) + len(structural) + len(semantic)
    if total == 0:
        summary = "Excellent accessibility implementation! No significant issues found."
        hours = 0
    elif critical_issues > 0:
        summary = (
            f"Found {critical_issues} critical accessibility barriers that prevent users "
            "from accessing content."
        )
        hours = math.ceil(critical_issues * 2)
    else:
        summary = (
            f"Found {total} accessibility improvements that would enhance user experience."
        )
        hours = math.ceil(total * 0.5)

    return InsightSummary(
        summary=summary,
        priority_recommendations=priority_recommendations(baseline, structural, semantic),
        estimated_fix_time=f"{hours} hours",
    )
