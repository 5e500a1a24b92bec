"""FormLabelDetector - form controls without an accessible label."""

from __future__ import annotations

from ...document.adapter import DocumentAdapter, Node
from ..context import ScanContext
from ..models import Severity, StructuralCategory, StructuralFinding, WcagLevel
from .helpers import affected

# Input types that are labelled by their value or not user-facing at all
UNLABELLED_INPUT_TYPES = frozenset({"hidden", "submit", "button", "reset", "image"})


def is_labellable(doc: DocumentAdapter, el: Node) -> bool:
    if doc.tag(el) != "input":
        return True
    return (doc.attr(el, "type") or "text").strip().lower() not in UNLABELLED_INPUT_TYPES


def has_label(doc: DocumentAdapter, el: Node, label_targets: frozenset) -> bool:
    if (doc.attr(el, "aria-label") or "").strip() or (doc.attr(el, "aria-labelledby") or "").strip():
        return True
    el_id = doc.attr(el, "id")
    if el_id and el_id in label_targets:
        return True
    return doc.closest(el, "label") is not None


class FormLabelDetector:
    name = "forms"
    category = "forms"
    wcag_criterion = "1.3.1"

    def detect(self, ctx: ScanContext) -> list[StructuralFinding]:
        doc = ctx.document
        label_targets = frozenset(
            doc.attr(label, "for") for label in doc.select("label[for]") if doc.attr(label, "for")
        )
        unlabelled = [
            el
            for el in doc.select("input, select, textarea")
            if is_labellable(doc, el) and not has_label(doc, el, label_targets)
        ]
        if not unlabelled:
            return []

        return [
            StructuralFinding(
                test_id="form-labels-missing",
                wcag_level=WcagLevel.A,
                category=StructuralCategory.FORMS,
                severity=Severity.SERIOUS,
                title="Form Controls Missing Labels",
                description="All form controls must have accessible labels for screen reader users.",
                wcag_criterion=self.wcag_criterion,
                elements=tuple(
                    affected(
                        doc,
                        el,
                        issue="No associated label found",
                        suggestion=(
                            'Add a <label for="..."> element, aria-label attribute, '
                            "or aria-labelledby reference."
                        ),
                    )
                    for el in unlabelled
                ),
                score=15,
                algorithm="Label Association Analysis",
                auto_fixable=True,
            )
        ]
