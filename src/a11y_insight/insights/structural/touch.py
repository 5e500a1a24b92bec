"""TouchTargetDetector - interactive targets smaller than 44×44 px."""

from __future__ import annotations

from ...document.adapter import DocumentAdapter, Node
from ..context import ScanContext
from ..models import Severity, StructuralCategory, StructuralFinding, WcagLevel
from .helpers import affected

TOUCH_TARGET_SELECTOR = (
    'a, button, input[type="button"], input[type="submit"], [onclick], [role="button"]'
)


def is_decorative_target(doc: DocumentAdapter, el: Node) -> bool:
    """Icon-only targets inside a link or button with no meaningful text."""
    container = doc.closest(el, "a, button")
    if container is None:
        return False
    return len(doc.text(container).strip()) < 2


class TouchTargetDetector:
    name = "touch"
    category = "touch"
    wcag_criterion = "2.5.5"

    def detect(self, ctx: ScanContext) -> list[StructuralFinding]:
        doc = ctx.document
        minimum = ctx.thresholds.touch_target_min_px
        small = []
        for el in doc.select(TOUCH_TARGET_SELECTOR):
            box = doc.bounding_box(el)
            # No geometry, nothing to measure
            if box is None:
                continue
            if (box.width < minimum or box.height < minimum) and not is_decorative_target(doc, el):
                small.append((el, box))

        if not small:
            return []

        cap = ctx.thresholds.touch_sample_cap
        return [
            StructuralFinding(
                test_id="touch-target-size",
                wcag_level=WcagLevel.AA,
                category=StructuralCategory.TOUCH,
                severity=Severity.MODERATE,
                title="Touch Targets Too Small",
                description=(
                    f"Interactive elements should be at least {minimum:g}×{minimum:g} pixels "
                    "for mobile accessibility."
                ),
                wcag_criterion=self.wcag_criterion,
                elements=tuple(
                    affected(
                        doc,
                        el,
                        issue=f"Size: {round(box.width)}×{round(box.height)}px",
                        suggestion=(
                            "Increase padding or minimum dimensions to at least "
                            f"{minimum:g}×{minimum:g} pixels."
                        ),
                    )
                    for el, box in small[:cap]
                ),
                score=60,
                algorithm="Bounding Box Measurement",
                auto_fixable=True,
            )
        ]
