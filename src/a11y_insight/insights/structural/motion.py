"""MotionDetector - animations with no prefers-reduced-motion alternative."""

from __future__ import annotations

from ...document.adapter import DocumentAdapter, Node
from ..context import ScanContext
from ..models import Severity, StructuralCategory, StructuralFinding, WcagLevel
from .helpers import affected

REDUCED_MOTION_QUERY = "prefers-reduced-motion"


def is_animated(doc: DocumentAdapter, el: Node) -> bool:
    if doc.computed_style(el).is_animated:
        return True
    return "animate" in (doc.attr(el, "class") or "")


def supports_reduced_motion(doc: DocumentAdapter) -> bool:
    return any(REDUCED_MOTION_QUERY in rule.css_text for rule in doc.stylesheet_rules())


class MotionDetector:
    name = "motion"
    category = "motion"
    wcag_criterion = "2.3.3"

    def detect(self, ctx: ScanContext) -> list[StructuralFinding]:
        doc = ctx.document
        animated = [el for el in doc.elements() if is_animated(doc, el)]
        if not animated or supports_reduced_motion(doc):
            return []

        cap = ctx.thresholds.motion_sample_cap
        return [
            StructuralFinding(
                test_id="motion-without-reduced-motion",
                wcag_level=WcagLevel.AA,
                category=StructuralCategory.MOTION,
                severity=Severity.MODERATE,
                title="Animations Without Reduced Motion Support",
                description="Animations should respect the prefers-reduced-motion user preference.",
                wcag_criterion=self.wcag_criterion,
                elements=tuple(
                    affected(
                        doc,
                        el,
                        issue="Animation does not respect prefers-reduced-motion",
                        suggestion=(
                            "Add @media (prefers-reduced-motion: reduce) CSS rules to disable "
                            "or reduce animations."
                        ),
                    )
                    for el in animated[:cap]
                ),
                score=60,
                algorithm="CSS Animation Detection & Media Query Analysis",
                auto_fixable=True,
            )
        ]
