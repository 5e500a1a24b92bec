"""Scanner - orchestrates one accessibility scan.

    materialize styles -> await baseline -> structural pass -> semantic pass
    -> scores -> compliance -> (insights) -> report

The structural and semantic passes share nothing mutable and may run in
either order. Only a baseline failure aborts the scan.
"""

from __future__ import annotations

import time
from datetime import datetime, timezone
from typing import Optional

from ..config import DEFAULT_CONFIG, ScanConfig
from ..document.adapter import DocumentAdapter
from ..exceptions import ScanError
from ..logging_config import get_logger
from .baseline import BaselineRunner, NullBaselineRunner
from .context import ScanContext
from .history import ScanHistory
from .models import ScanReport
from .scoring import assess_compliance, compute_scores
from .semantic import SemanticAnalyzer
from .structural import StructuralAnalyzer
from .summary import build_insights

logger = get_logger(__name__)


class Scanner:
    """Run the baseline engine and both analyzers over a document."""

    def __init__(
        self,
        config: ScanConfig = DEFAULT_CONFIG,
        baseline_runner: Optional[BaselineRunner] = None,
        history: Optional[ScanHistory] = None,
        structural: Optional[StructuralAnalyzer] = None,
        semantic: Optional[SemanticAnalyzer] = None,
    ):
        self.config = config
        self.baseline_runner = baseline_runner or NullBaselineRunner()
        self.history = history if history is not None else ScanHistory(config.history_size)
        self.structural = structural or StructuralAnalyzer()
        self.semantic = semantic or SemanticAnalyzer()

    async def scan(self, document: DocumentAdapter) -> ScanReport:
        """Scan a document and return its report.

        Raises:
            ScanError: If the baseline rule engine fails. Detector failures
                never raise; that detector contributes no findings.
        """
        started = time.perf_counter()
        timestamp = datetime.now(timezone.utc).isoformat()

        document.materialize()
        elements = len(document.elements())
        logger.info(f"Scanning {document.url}: {elements} elements")

        try:
            baseline = await self.baseline_runner.run(document, self.config.baseline_tags)
        except Exception as e:
            raise ScanError(str(e), cause=e, url=document.url) from e

        ctx = ScanContext(document=document, config=self.config)
        structural = self.structural.analyze(ctx) if self.config.include_advanced else ()
        semantic = self.semantic.analyze(ctx) if self.config.include_semantic else ()
        logger.info(
            f"Found {len(baseline.violations)} baseline violations, "
            f"{len(structural)} structural findings, {len(semantic)} semantic findings"
        )

        scores = compute_scores(baseline, structural, semantic, self.config.weights)
        compliance = assess_compliance(baseline, structural, semantic, scores)
        insights = (
            build_insights(baseline, structural, semantic, compliance.critical_issues)
            if self.config.include_ai
            else None
        )

        report = ScanReport(
            url=document.url,
            timestamp=timestamp,
            baseline=baseline,
            structural_findings=structural,
            semantic_findings=semantic,
            scores=scores,
            compliance=compliance,
            scan_duration_ms=(time.perf_counter() - started) * 1000,
            elements_analyzed=elements,
            insights=insights,
            test_engine=getattr(self.baseline_runner, "test_engine", None),
        )

        self.history.record(report)
        return report
