"""ImageAltDetector - images with missing or low-quality text alternatives."""

from __future__ import annotations

import re
from typing import Optional, Sequence

from ...document.adapter import DocumentAdapter, Node
from ..context import ScanContext
from ..models import Severity, StructuralCategory, StructuralFinding, WcagLevel
from .helpers import affected

# Alt values that say nothing about the image
LOW_QUALITY_ALT_PATTERNS: tuple[str, ...] = (
    r"^image$",
    r"^picture$",
    r"^photo$",
    r"^img\d*$",
    r"^(?:dsc|img|pxl|dcim)[_-]?\d+$",
)

DECORATIVE_ROLES = frozenset({"presentation", "none"})


def _filename_stem(src: str) -> tuple[str, str]:
    name = src.split("?")[0].split("#")[0].rstrip("/").split("/")[-1]
    return name, name.split(".")[0]


class ImageAltDetector:
    name = "images"
    category = "images"
    wcag_criterion = "1.1.1"

    def __init__(self, patterns: Sequence[str] = LOW_QUALITY_ALT_PATTERNS):
        self._patterns = [re.compile(p, re.IGNORECASE) for p in patterns]

    def is_decorative(self, doc: DocumentAdapter, el: Node) -> bool:
        role = (doc.attr(el, "role") or "").strip().lower()
        return (
            role in DECORATIVE_ROLES
            or doc.attr(el, "alt") == ""
            or (doc.attr(el, "aria-hidden") or "").lower() == "true"
        )

    def is_low_quality(self, alt: str, src: str, min_length: int = 3) -> bool:
        text = alt.strip()
        if len(text) < min_length:
            return True
        if any(p.search(text) for p in self._patterns):
            return True
        name, stem = _filename_stem(src)
        lowered = text.lower()
        return bool(stem) and lowered in (name.lower(), stem.lower())

    def problem(self, doc: DocumentAdapter, el: Node, min_length: int) -> Optional[str]:
        """Issue text for an image, or None when its alternative is acceptable."""
        if self.is_decorative(doc, el):
            return None
        alt = doc.attr(el, "alt")
        if alt is None:
            if doc.attr(el, "aria-label") or doc.attr(el, "aria-labelledby"):
                return None
            return "Missing alt attribute"
        if self.is_low_quality(alt, doc.attr(el, "src") or "", min_length):
            return f'Poor alt text: "{alt}"'
        return None

    def detect(self, ctx: ScanContext) -> list[StructuralFinding]:
        doc = ctx.document
        flagged = []
        for el in doc.select('img, svg, [role="img"]'):
            issue = self.problem(doc, el, ctx.thresholds.min_alt_length)
            if issue is not None:
                flagged.append((issue, el))

        if not flagged:
            return []

        def suggestion(el: Node) -> str:
            where = "link/button context" if doc.closest(el, "a, button") else "standalone image"
            return (
                "Provide descriptive alt text explaining the image content and purpose "
                f"in {where}. Consider the image's function on the page."
            )

        return [
            StructuralFinding(
                test_id="image-alt-text-issues",
                wcag_level=WcagLevel.A,
                category=StructuralCategory.IMAGES,
                severity=Severity.SERIOUS,
                title="Images Missing or Poor Alt Text",
                description="Images must have appropriate alternative text for screen reader users.",
                wcag_criterion=self.wcag_criterion,
                elements=tuple(
                    affected(doc, el, issue=issue, suggestion=suggestion(el))
                    for issue, el in flagged
                ),
                score=20,
                algorithm="Alt Text Quality Heuristics",
                auto_fixable=False,
            )
        ]
