"""HeadingStructureDetector - missing, duplicated and skipped heading levels."""

from __future__ import annotations

from ..context import ScanContext
from ..models import AffectedElement, Severity, StructuralCategory, StructuralFinding, WcagLevel
from .helpers import affected

_HEADINGS = "h1, h2, h3, h4, h5, h6"

_SCORES = {Severity.CRITICAL: 0, Severity.SERIOUS: 25}


class HeadingStructureDetector:
    name = "headings"
    category = "structure"
    wcag_criterion = "1.3.1"

    def _outline_finding(self, test_id: str, title: str, severity: Severity) -> StructuralFinding:
        # Page-level findings: no single element is at fault
        return StructuralFinding(
            test_id=test_id,
            wcag_level=WcagLevel.A,
            category=StructuralCategory.STRUCTURE,
            severity=severity,
            title=title,
            description="Proper heading structure is essential for screen reader navigation.",
            wcag_criterion=self.wcag_criterion,
            elements=(),
            score=_SCORES[severity],
            algorithm="Heading Hierarchy Analysis",
            auto_fixable=True,
        )

    def _skip_finding(self, previous: int, level: int, element: AffectedElement) -> StructuralFinding:
        return StructuralFinding(
            test_id="heading-level-skip",
            wcag_level=WcagLevel.A,
            category=StructuralCategory.STRUCTURE,
            severity=Severity.MODERATE,
            title="Heading Level Skip Detected",
            description=(
                f"Heading jumped from H{previous} to H{level}, skipping intermediate levels."
            ),
            wcag_criterion=self.wcag_criterion,
            elements=(element,),
            score=60,
            algorithm="Document Outline Tree Analysis",
            auto_fixable=True,
        )

    def detect(self, ctx: ScanContext) -> list[StructuralFinding]:
        doc = ctx.document
        headings = [(int(doc.tag(h)[1]), h) for h in doc.select(_HEADINGS)]
        findings: list[StructuralFinding] = []

        h1_count = sum(1 for level, _ in headings if level == 1)
        if h1_count == 0:
            findings.append(
                self._outline_finding("missing-h1", "Missing Main Heading (H1)", Severity.CRITICAL)
            )
        elif h1_count > 1:
            findings.append(
                self._outline_finding("multiple-h1", "Multiple H1 Elements Found", Severity.SERIOUS)
            )

        for (previous, _), (level, heading) in zip(headings, headings[1:]):
            if level > previous + 1:
                findings.append(
                    self._skip_finding(
                        previous,
                        level,
                        affected(
                            doc,
                            heading,
                            issue=f"Skipped from H{previous} to H{level}",
                            suggestion=(
                                f"Use sequential heading levels (H{previous + 1}) to "
                                "maintain document outline structure."
                            ),
                        ),
                    )
                )

        return findings
