"""Public API for a11y-insight.

Callers should use scan_html() / scan_file() instead of constructing a
document adapter and scanner by hand.

Example:
    >>> from a11y_insight import scan_html
    >>>
    >>> report = scan_html("<html><body><h1>Hi</h1></body></html>")
    >>> report.compliance.level.value
    'AAA'
    >>>
    >>> # With customization
    >>> report = scan_html(html, wcag_level="AAA", include_ai=True)
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional

from .config import ScanConfig, load_config
from .document import DocumentAdapter, SoupDocument
from .insights import BaselineRunner, ScanHistory, ScanReport, Scanner
from .logging_config import get_logger

logger = get_logger(__name__)


async def scan_document(
    document: DocumentAdapter,
    config: Optional[ScanConfig] = None,
    baseline: Optional[BaselineRunner] = None,
    history: Optional[ScanHistory] = None,
) -> ScanReport:
    """Scan an already-loaded document.

    Raises:
        ScanError: If the baseline rule engine fails
    """
    scanner = Scanner(config=config or ScanConfig(), baseline_runner=baseline, history=history)
    return await scanner.scan(document)


def scan_html(
    html: str,
    url: str = "about:blank",
    config_file: Optional[Path] = None,
    baseline: Optional[BaselineRunner] = None,
    history: Optional[ScanHistory] = None,
    **overrides,
) -> ScanReport:
    """Scan an HTML string and return the report.

    Must not be called from inside a running event loop; use
    ``await scan_document(...)`` there.

    Args:
        html: Document markup
        url: Name recorded on the report
        config_file: Optional TOML config file
        baseline: Baseline rule engine runner (none by default)
        history: History that records the completed report
        **overrides: ScanConfig field overrides (wcag_level, include_ai, ...)

    Raises:
        ConfigurationError: If configuration is invalid
        ScanError: If the baseline rule engine fails
    """
    config = load_config(config_file=config_file, **overrides)
    document = SoupDocument(html, url=url)
    return asyncio.run(scan_document(document, config, baseline, history))


def scan_file(
    path: Path,
    url: Optional[str] = None,
    config_file: Optional[Path] = None,
    baseline: Optional[BaselineRunner] = None,
    history: Optional[ScanHistory] = None,
    **overrides,
) -> ScanReport:
    """Scan an HTML file; see scan_html().

    Raises:
        DocumentLoadError: If the file cannot be read
    """
    config = load_config(config_file=config_file, **overrides)
    document = SoupDocument.from_file(Path(path), url=url)
    logger.debug(f"Loaded {path} ({len(document.elements())} elements)")
    return asyncio.run(scan_document(document, config, baseline, history))
