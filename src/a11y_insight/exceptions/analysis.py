"""Analysis-related exceptions: document loading and scan failures."""

from pathlib import Path
from typing import Dict, Optional

from .base import A11yInsightError


class AnalysisError(A11yInsightError):
    """Base class for analysis-related errors."""
    pass


class DocumentLoadError(AnalysisError):
    """Raised when a document cannot be read or parsed."""

    def __init__(self, source: Path, reason: str):
        super().__init__(
            f"Cannot load document: {source}",
            details={"source": str(source), "reason": reason},
        )
        self.source = source
        self.reason = reason


class ScanError(AnalysisError):
    """Raised when a scan cannot complete.

    The underlying failure (typically the baseline rule engine) is kept as
    ``cause`` and chained as ``__cause__`` by the raiser. A raised ScanError
    is the only way a scan reports failure; a report with zero findings is a
    successful scan.
    """

    def __init__(self, reason: str, cause: Optional[BaseException] = None, url: str = ""):
        details: Dict[str, str] = {}
        if url:
            details["url"] = url
        if cause is not None:
            details["cause"] = f"{type(cause).__name__}: {cause}"
        super().__init__(f"Accessibility scan failed: {reason}", details=details)
        self.reason = reason
        self.cause = cause
        self.url = url
