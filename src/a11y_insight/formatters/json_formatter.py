"""JSON formatter for a11y-insight."""

import json

from ..insights.models import ScanReport
from .base import BaseFormatter


class JsonFormatter(BaseFormatter):
    """Render the report in its camelCase wire shape."""

    def render(self, report: ScanReport) -> None:
        print(self.format(report))

    def format(self, report: ScanReport) -> str:
        return json.dumps(report.to_dict(), indent=2)
