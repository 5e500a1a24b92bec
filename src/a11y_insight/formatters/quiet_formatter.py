"""Quiet formatter - compliance level and overall score only."""

from ..insights.models import ScanReport
from .base import BaseFormatter


class QuietFormatter(BaseFormatter):
    """Render one line: ``<level> <overall>``."""

    def render(self, report: ScanReport) -> None:
        print(self.format(report))

    def format(self, report: ScanReport) -> str:
        return f"{report.compliance.level.value} {report.scores.overall:.1f}"
