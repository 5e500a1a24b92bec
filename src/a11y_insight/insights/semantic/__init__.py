"""Semantic analyzer - heuristics for comprehension and cognitive load.

Five detectors: readability, ambiguous links, form complexity, jargon and
page flow. Like the structural analyzer, each detector only reads the
ScanContext and a failing detector contributes no findings.
"""

from __future__ import annotations

from typing import Optional

from ...exceptions import DetectorError, ErrorCode
from ...logging_config import get_logger
from ..context import ScanContext
from ..models import SemanticFinding
from ..protocols import SemanticDetector
from .content import extract_main_content, readability_metrics
from .flow import PageFlowDetector
from .forms import FormComplexityDetector
from .jargon import JargonDetector
from .links import AmbiguousLinkDetector
from .readability import ReadabilityDetector

logger = get_logger(__name__)


def get_default_detectors() -> list[SemanticDetector]:
    """Return semantic detectors in report order."""
    return [
        ReadabilityDetector(),
        AmbiguousLinkDetector(),
        FormComplexityDetector(),
        JargonDetector(),
        PageFlowDetector(),
    ]


class SemanticAnalyzer:
    name = "semantic"

    def __init__(self, detectors: Optional[list[SemanticDetector]] = None):
        self.detectors = detectors if detectors is not None else get_default_detectors()

    def analyze(self, ctx: ScanContext) -> tuple[SemanticFinding, ...]:
        findings: list[SemanticFinding] = []
        for detector in self.detectors:
            try:
                found = detector.detect(ctx)
            except Exception as e:
                error = DetectorError(
                    message=f"Detector {detector.name} failed: {e}",
                    code=ErrorCode.AX300,
                    context={"detector": detector.name},
                )
                logger.warning(str(error))
                continue
            logger.debug(f"Detector {detector.name} completed: {len(found)} findings")
            findings.extend(found)
        return tuple(findings)


__all__ = [
    "SemanticAnalyzer",
    "get_default_detectors",
    "extract_main_content",
    "readability_metrics",
    "ReadabilityDetector",
    "AmbiguousLinkDetector",
    "FormComplexityDetector",
    "JargonDetector",
    "PageFlowDetector",
]
