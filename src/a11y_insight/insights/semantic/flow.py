"""PageFlowDetector - outline and landmark problems that disrupt reading order."""

from __future__ import annotations

from dataclasses import dataclass

from ..context import ScanContext
from ..models import SemanticCategory, SemanticElement, SemanticFinding, Severity

SUGGESTED_FIXES = (
    "Organize content in logical, hierarchical order",
    "Use consistent navigation patterns throughout the site",
    "Provide clear page titles and section headings",
    "Add breadcrumbs for complex navigation structures",
)

EXPLANATION = (
    "Clear, logical flow helps all users, especially those with cognitive disabilities, "
    "understand and navigate content effectively."
)


@dataclass(frozen=True)
class FlowIssue:
    selector: str
    description: str
    kind: str
    weight: int


class PageFlowDetector:
    name = "page-flow"
    category = "ux"

    def flow_issues(self, ctx: ScanContext) -> list[FlowIssue]:
        doc = ctx.document
        issues: list[FlowIssue] = []

        previous = 0
        for index, heading in enumerate(doc.select("h1, h2, h3, h4, h5, h6")):
            level = int(doc.tag(heading)[1])
            selector = doc.selector_for(heading)
            if index == 0 and level != 1:
                issues.append(
                    FlowIssue(selector, "First heading is not H1", "Missing primary heading", 7)
                )
            if level > previous + 1:
                issues.append(
                    FlowIssue(
                        selector,
                        f"Heading jumps from H{previous} to H{level}",
                        "Heading hierarchy skip",
                        5,
                    )
                )
            previous = level

        if not doc.select('main, [role="main"]'):
            issues.append(
                FlowIssue("body", "No main content area identified", "Missing main landmark", 6)
            )
        return issues

    def detect(self, ctx: ScanContext) -> list[SemanticFinding]:
        issues = self.flow_issues(ctx)
        if not issues:
            return []
        return [
            SemanticFinding(
                test_id="user-flow-issues",
                category=SemanticCategory.UX,
                severity=Severity.MODERATE,
                title="User Flow Pattern Issues",
                description="Page structure may create confusion in user navigation flow.",
                explanation=EXPLANATION,
                suggested_fixes=SUGGESTED_FIXES,
                elements=tuple(
                    SemanticElement(
                        selector=issue.selector,
                        context=issue.description,
                        issue=issue.kind,
                        cognitive_load=issue.weight,
                    )
                    for issue in issues
                ),
                confidence=75,
            )
        ]
