"""Baseline rule engine boundary.

The baseline engine (axe-core or any engine producing the same result
shape) runs outside this package. A runner hands its results to the
scanner; the await on ``run`` is the only suspension point of a scan.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional, Protocol, Sequence

from ..document.adapter import DocumentAdapter
from ..exceptions import BaselineError, ErrorCode
from ..logging_config import get_logger
from .models import BaselineResults, RuleResult

logger = get_logger(__name__)

RESULT_GROUPS = ("violations", "passes", "incomplete", "inapplicable")


class BaselineRunner(Protocol):
    name: str
    test_engine: Optional[dict[str, str]]

    async def run(self, document: DocumentAdapter, tags: Sequence[str]) -> BaselineResults: ...


def filter_by_tags(results: BaselineResults, tags: Sequence[str]) -> BaselineResults:
    """Keep only rules carrying at least one requested tag."""
    wanted = set(tags)
    if not wanted:
        return results

    def keep(rules: tuple[RuleResult, ...]) -> tuple[RuleResult, ...]:
        return tuple(r for r in rules if wanted.intersection(r.tags))

    return BaselineResults(
        violations=keep(results.violations),
        passes=keep(results.passes),
        incomplete=keep(results.incomplete),
        inapplicable=keep(results.inapplicable),
    )


class NullBaselineRunner:
    """No baseline engine: every scan reports zero baseline tests."""

    name = "none"
    test_engine: Optional[dict[str, str]] = None

    async def run(self, document: DocumentAdapter, tags: Sequence[str]) -> BaselineResults:
        return BaselineResults()


class StaticBaselineRunner:
    """Pre-computed baseline results, filtered by the requested tags."""

    name = "static"

    def __init__(self, results: BaselineResults, test_engine: Optional[dict[str, str]] = None):
        self.results = results
        self.test_engine = test_engine

    async def run(self, document: DocumentAdapter, tags: Sequence[str]) -> BaselineResults:
        return filter_by_tags(self.results, tags)


class JsonBaselineRunner:
    """Results read from an axe-core JSON report produced elsewhere.

    The file is read on every run so a report regenerated between scans is
    picked up.
    """

    name = "axe-json"

    def __init__(self, path: Path):
        self.path = Path(path)
        self.test_engine: Optional[dict[str, str]] = None

    def _load(self) -> dict[str, Any]:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except OSError as e:
            raise BaselineError(
                message=f"Cannot read baseline results: {self.path}",
                code=ErrorCode.AX400,
                context={"path": str(self.path), "error": str(e)},
                recoverable=False,
                recovery_hint="Check the --baseline path",
            ) from e
        except json.JSONDecodeError as e:
            raise BaselineError(
                message=f"Baseline results are not valid JSON: {self.path}",
                code=ErrorCode.AX401,
                context={"path": str(self.path), "error": str(e)},
                recoverable=False,
                recovery_hint="Export the axe-core results with JSON.stringify(results)",
            ) from e
        if not isinstance(data, dict) or not any(k in data for k in RESULT_GROUPS):
            raise BaselineError(
                message=f"Baseline results have no rule groups: {self.path}",
                code=ErrorCode.AX401,
                context={"path": str(self.path)},
                recoverable=False,
            )
        return data

    async def run(self, document: DocumentAdapter, tags: Sequence[str]) -> BaselineResults:
        data = self._load()
        try:
            results = BaselineResults.from_dict(data)
        except (KeyError, TypeError, ValueError) as e:
            raise BaselineError(
                message=f"Malformed rule result in {self.path}: {e}",
                code=ErrorCode.AX401,
                context={"path": str(self.path)},
                recoverable=False,
            ) from e

        engine = data.get("testEngine")
        if isinstance(engine, dict):
            self.test_engine = {str(k): str(v) for k, v in engine.items()}
        logger.debug(
            f"Loaded baseline results from {self.path}: "
            f"{len(results.violations)} violations, {len(results.passes)} passes"
        )
        return filter_by_tags(results, tags)
