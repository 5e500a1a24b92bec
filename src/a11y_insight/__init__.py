"""
a11y-insight - WCAG accessibility audit engine

Combines an external baseline rule engine's results with structural
detectors (contrast, headings, keyboard, images, forms, touch targets,
landmarks, motion) and semantic heuristics (readability, link clarity,
form load, jargon, page flow) into one scored, compliance-graded report.
"""

__version__ = "0.1.0"

from .api import scan_document, scan_file, scan_html
from .config import ScanConfig, load_config
from .document import SoupDocument
from .exceptions import A11yInsightError, ScanError
from .insights import ScanHistory, ScanReport, Scanner

__all__ = [
    "scan_html",  # Main entry point
    "scan_file",
    "scan_document",
    "Scanner",  # Advanced usage (direct scanner access)
    "ScanReport",
    "ScanHistory",
    "ScanConfig",
    "SoupDocument",
    "load_config",
    "A11yInsightError",
    "ScanError",
]
