"""ContrastDetector - text whose color contrast falls below the WCAG minimum.

Foreground is the element's computed color; background is the first
non-transparent background found walking up from the element, composited
over white when translucent. Large text (>=18px, or >=14px bold) has the
lower requirement.
"""

from __future__ import annotations

from typing import Optional

from ...document.adapter import NON_RENDERED_TAGS, DocumentAdapter, Node
from ...document.colors import BLACK, RGBA, WHITE, contrast_ratio, parse_color
from ...logging_config import get_logger
from ..context import ScanContext
from ..models import (
    ContrastAssessment,
    Severity,
    StructuralCategory,
    StructuralFinding,
    WcagLevel,
)
from .helpers import affected

logger = get_logger(__name__)

# (large text, normal text)
_REQUIRED_RATIOS = {
    "AA": (3.0, 4.5),
    "AAA": (4.5, 7.0),
}

LARGE_TEXT_PX = 18.0
LARGE_BOLD_TEXT_PX = 14.0
BOLD_WEIGHT = 700


def is_large_text(font_size: float, font_weight: int) -> bool:
    return font_size >= LARGE_TEXT_PX or (
        font_size >= LARGE_BOLD_TEXT_PX and font_weight >= BOLD_WEIGHT
    )


def required_ratio(level: str, large: bool) -> float:
    large_ratio, normal_ratio = _REQUIRED_RATIOS["AAA" if level == "AAA" else "AA"]
    return large_ratio if large else normal_ratio


def contrast_severity(ratio: float) -> Severity:
    if ratio < 3.0:
        return Severity.CRITICAL
    if ratio < 4.5:
        return Severity.SERIOUS
    return Severity.MODERATE


def effective_background(doc: DocumentAdapter, el: Node) -> RGBA:
    """First non-transparent background on the element or its ancestors."""
    layers: list[RGBA] = []
    current: Optional[Node] = el
    while current is not None:
        color = parse_color(doc.computed_style(current).background_color)
        if color is not None and not color.is_transparent:
            layers.append(color)
            if color.a >= 1.0:
                break
        current = doc.parent(current)

    result = WHITE
    for layer in reversed(layers):
        result = layer.over(result)
    return result


class ContrastDetector:
    name = "contrast"
    category = "contrast"
    wcag_criterion = "1.4.3"

    def assess(self, doc: DocumentAdapter, el: Node, level: str) -> ContrastAssessment:
        style = doc.computed_style(el)
        background = effective_background(doc, el)
        foreground = parse_color(style.color) or BLACK
        foreground = foreground.over(background)
        ratio = contrast_ratio(foreground, background)
        required = required_ratio(level, is_large_text(style.font_size, style.font_weight))
        return ContrastAssessment(
            foreground=foreground.to_hex(),
            background=background.to_hex(),
            ratio=ratio,
            required_ratio=required,
            passes=ratio >= required,
            level=WcagLevel.AAA if level == "AAA" else WcagLevel.AA,
        )

    def detect(self, ctx: ScanContext) -> list[StructuralFinding]:
        doc = ctx.document
        level = "AAA" if ctx.wcag_level == "AAA" else "AA"
        criterion = "1.4.6" if level == "AAA" else self.wcag_criterion
        findings: list[StructuralFinding] = []

        for el in doc.elements():
            if doc.tag(el) in NON_RENDERED_TAGS:
                continue
            text = doc.text(el).strip()
            if len(text) < ctx.thresholds.min_text_length:
                continue

            result = self.assess(doc, el, level)
            if result.passes:
                continue

            style = doc.computed_style(el)
            snapshot = {
                **style.snapshot(),
                "color": result.foreground,
                "backgroundColor": result.background,
            }
            findings.append(
                StructuralFinding(
                    test_id="advanced-contrast-ratio",
                    wcag_level=result.level,
                    category=StructuralCategory.CONTRAST,
                    severity=contrast_severity(result.ratio),
                    title=f"Insufficient Color Contrast ({result.ratio:.2f}:1)",
                    description=(
                        f"Text contrast ratio of {result.ratio:.2f}:1 is below the required "
                        f"{result.required_ratio:g}:1 for {level} compliance."
                    ),
                    wcag_criterion=criterion,
                    elements=(
                        affected(
                            doc,
                            el,
                            issue=f"Contrast ratio {result.ratio:.2f}:1 is insufficient",
                            suggestion=(
                                f"Increase contrast to at least {result.required_ratio:g}:1. "
                                "Consider darker text or lighter background."
                            ),
                            style_snapshot=snapshot,
                        ),
                    ),
                    score=min(100.0, result.ratio / result.required_ratio * 100),
                    algorithm="WCAG 2.1 Relative Luminance Formula",
                    auto_fixable=True,
                )
            )

        logger.debug(f"Contrast: {len(findings)} failing elements")
        return findings
