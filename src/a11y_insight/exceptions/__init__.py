"""Exception hierarchy for a11y-insight."""

from .analysis import AnalysisError, DocumentLoadError, ScanError
from .base import A11yInsightError
from .config import ConfigurationError
from .taxonomy import (
    AdapterError,
    BaselineError,
    CodedError,
    DetectorError,
    ErrorCode,
    ExportError,
)

__all__ = [
    "A11yInsightError",
    "AnalysisError",
    "DocumentLoadError",
    "ScanError",
    "ConfigurationError",
    "ErrorCode",
    "CodedError",
    "AdapterError",
    "DetectorError",
    "BaselineError",
    "ExportError",
]
