"""Base formatter interface for a11y-insight output rendering."""

from abc import ABC, abstractmethod

from ..insights.models import ScanReport


class BaseFormatter(ABC):
    """Abstract base class for output formatters."""

    @abstractmethod
    def render(self, report: ScanReport) -> None:
        """Render a report to stdout/stderr as appropriate."""

    @abstractmethod
    def format(self, report: ScanReport) -> str:
        """Return formatted string representation of a report."""
