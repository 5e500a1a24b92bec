"""LandmarkDetector - missing or duplicated main landmark."""

from __future__ import annotations

from ..context import ScanContext
from ..models import AffectedElement, Severity, StructuralCategory, StructuralFinding, WcagLevel
from .helpers import affected

MAIN_SELECTOR = 'main, [role="main"]'


class LandmarkDetector:
    name = "landmarks"
    category = "aria"
    wcag_criterion = "1.3.1"

    def detect(self, ctx: ScanContext) -> list[StructuralFinding]:
        doc = ctx.document
        mains = doc.select(MAIN_SELECTOR)

        if not mains:
            return [
                StructuralFinding(
                    test_id="missing-main-landmark",
                    wcag_level=WcagLevel.AA,
                    category=StructuralCategory.ARIA,
                    severity=Severity.MODERATE,
                    title="Missing Main Landmark",
                    description=(
                        "Pages should have a main landmark to help users navigate to "
                        "primary content."
                    ),
                    wcag_criterion=self.wcag_criterion,
                    elements=(
                        AffectedElement(
                            selector="body",
                            snapshot="<body>...</body>",
                            issue='No main element or role="main" found',
                            suggestion=(
                                'Add a <main> element or role="main" to wrap the primary '
                                "page content."
                            ),
                        ),
                    ),
                    score=70,
                    algorithm="Landmark Structure Analysis",
                    auto_fixable=True,
                )
            ]

        if len(mains) > 1:
            return [
                StructuralFinding(
                    test_id="multiple-main-landmarks",
                    wcag_level=WcagLevel.AA,
                    category=StructuralCategory.ARIA,
                    severity=Severity.MODERATE,
                    title="Multiple Main Landmarks",
                    description="Pages should have only one main landmark.",
                    wcag_criterion=self.wcag_criterion,
                    elements=tuple(
                        affected(
                            doc,
                            el,
                            issue="Multiple main landmarks detected",
                            suggestion='Ensure only one main element or role="main" exists per page.',
                        )
                        for el in mains
                    ),
                    score=70,
                    algorithm="Landmark Uniqueness Check",
                    auto_fixable=False,
                )
            ]

        return []
