"""Structural analyzer - deterministic WCAG checks over the document tree.

Eight detectors, each a pure read of the ScanContext:
- contrast: text color contrast (1.4.3 / 1.4.6)
- headings: H1 presence and outline skips (1.3.1)
- keyboard: keyboard reachability and focus traps (2.1.1, 2.1.2)
- images: text alternatives (1.1.1)
- forms: label association (1.3.1)
- touch: target size (2.5.5)
- landmarks: main landmark (1.3.1)
- motion: reduced-motion support (2.3.3)
"""

from __future__ import annotations

from typing import Optional

from ...exceptions import DetectorError, ErrorCode
from ...logging_config import get_logger
from ..context import ScanContext
from ..models import StructuralFinding
from ..protocols import StructuralDetector
from .contrast import ContrastDetector
from .forms import FormLabelDetector
from .headings import HeadingStructureDetector
from .images import ImageAltDetector
from .keyboard import KeyboardDetector
from .landmarks import LandmarkDetector
from .motion import MotionDetector
from .touch import TouchTargetDetector

logger = get_logger(__name__)


def get_default_detectors() -> list[StructuralDetector]:
    """Return structural detectors in report order."""
    return [
        ContrastDetector(),
        HeadingStructureDetector(),
        KeyboardDetector(),
        ImageAltDetector(),
        FormLabelDetector(),
        TouchTargetDetector(),
        LandmarkDetector(),
        MotionDetector(),
    ]


class StructuralAnalyzer:
    """Run every structural detector; a failing detector contributes nothing."""

    name = "structural"

    def __init__(self, detectors: Optional[list[StructuralDetector]] = None):
        self.detectors = detectors if detectors is not None else get_default_detectors()

    def analyze(self, ctx: ScanContext) -> tuple[StructuralFinding, ...]:
        findings: list[StructuralFinding] = []
        for detector in self.detectors:
            try:
                found = detector.detect(ctx)
            except Exception as e:
                error = DetectorError(
                    message=f"Detector {detector.name} failed: {e}",
                    code=ErrorCode.AX200,
                    context={"detector": detector.name},
                )
                logger.warning(str(error))
                continue
            logger.debug(f"Detector {detector.name} completed: {len(found)} findings")
            findings.extend(found)
        return tuple(findings)


__all__ = [
    "StructuralAnalyzer",
    "get_default_detectors",
    "ContrastDetector",
    "HeadingStructureDetector",
    "KeyboardDetector",
    "ImageAltDetector",
    "FormLabelDetector",
    "TouchTargetDetector",
    "LandmarkDetector",
    "MotionDetector",
]
