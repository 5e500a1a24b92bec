"""ReadabilityDetector - text blocks with a low Flesch Reading Ease score."""

from __future__ import annotations

from ..context import ScanContext
from ..models import SemanticCategory, SemanticElement, SemanticFinding, Severity
from .content import ReadabilityMetrics, readability_metrics, text_blocks

SUGGESTED_FIXES = (
    "Use shorter sentences (aim for 15-20 words)",
    "Replace complex words with simpler alternatives",
    "Break long paragraphs into smaller chunks",
    "Add headings to organize content",
    "Consider providing a simplified version",
)


def explain(metrics: ReadabilityMetrics) -> str:
    issues = ", ".join(metrics.issues) if metrics.issues else "none beyond overall complexity"
    return (
        f'This content has a reading level of "{metrics.reading_level}" with a Flesch score '
        f"of {metrics.score:.1f}. To improve accessibility for users with cognitive "
        "disabilities, consider simplifying language and sentence structure. "
        f"Issues identified: {issues}."
    )


class ReadabilityDetector:
    name = "readability"
    category = "cognitive"

    def detect(self, ctx: ScanContext) -> list[SemanticFinding]:
        doc = ctx.document
        t = ctx.thresholds
        findings: list[SemanticFinding] = []

        for el, text in text_blocks(doc, t.readability_block_min_chars):
            metrics = readability_metrics(text)
            if metrics.score >= t.readability_moderate:
                continue
            findings.append(
                SemanticFinding(
                    test_id="content-readability",
                    category=SemanticCategory.COGNITIVE,
                    severity=(
                        Severity.SERIOUS
                        if metrics.score < t.readability_serious
                        else Severity.MODERATE
                    ),
                    title="Content May Be Too Complex",
                    description=(
                        f"Text complexity score: {metrics.score:.1f}/100. Content may be "
                        "difficult for users with cognitive disabilities."
                    ),
                    explanation=explain(metrics),
                    suggested_fixes=SUGGESTED_FIXES,
                    elements=(
                        SemanticElement(
                            selector=doc.selector_for(el),
                            context=text[:100] + "...",
                            issue="High cognitive complexity",
                            cognitive_load=metrics.cognitive_load,
                        ),
                    ),
                    confidence=85,
                )
            )

        return findings
