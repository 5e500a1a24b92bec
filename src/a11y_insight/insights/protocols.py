"""Protocol classes for detector plugins."""

from typing import Protocol

from .context import ScanContext
from .models import SemanticFinding, StructuralFinding


class StructuralDetector(Protocol):
    """Structural detectors read the scan context (NEVER write) and return findings."""

    name: str
    category: str
    wcag_criterion: str

    def detect(self, ctx: ScanContext) -> list[StructuralFinding]: ...


class SemanticDetector(Protocol):
    """Semantic detectors read the scan context (NEVER write) and return findings."""

    name: str
    category: str

    def detect(self, ctx: ScanContext) -> list[SemanticFinding]: ...
