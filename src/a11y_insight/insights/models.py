"""Data models for the accessibility insight engine.

Every model is a frozen dataclass over tuples: a ScanReport is never mutated
after the scanner returns it. ``to_dict()`` produces the camelCase wire shape
consumed by presentation and export layers; ``from_dict()`` reverses it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional


class Severity(str, Enum):
    CRITICAL = "critical"
    SERIOUS = "serious"
    MODERATE = "moderate"
    MINOR = "minor"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]


_SEVERITY_RANK = {
    Severity.CRITICAL: 0,
    Severity.SERIOUS: 1,
    Severity.MODERATE: 2,
    Severity.MINOR: 3,
}


class WcagLevel(str, Enum):
    A = "A"
    AA = "AA"
    AAA = "AAA"


class ComplianceLevel(str, Enum):
    A = "A"
    AA = "AA"
    AAA = "AAA"
    NON_COMPLIANT = "Non-compliant"


class StructuralCategory(str, Enum):
    CONTRAST = "contrast"
    STRUCTURE = "structure"
    KEYBOARD = "keyboard"
    IMAGES = "images"
    FORMS = "forms"
    TOUCH = "touch"
    ARIA = "aria"
    MOTION = "motion"


class SemanticCategory(str, Enum):
    SEMANTIC = "semantic"
    CONTEXT = "context"
    UX = "ux"
    COGNITIVE = "cognitive"


def clamp(value: float, lo: float = 0.0, hi: float = 100.0) -> float:
    return max(lo, min(hi, value))


def frozen_mapping(value: Optional[Mapping[str, str]]) -> Optional[Mapping[str, str]]:
    """Read-only copy of a string mapping, so a report cannot be edited in place."""
    if value is None:
        return None
    return MappingProxyType(dict(value))


# ---------------------------------------------------------------------------
# Structural findings
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AffectedElement:
    selector: str  # "#signup", "button.primary", "body"
    snapshot: str  # truncated outer HTML
    issue: str
    suggestion: str
    style_snapshot: Optional[Mapping[str, str]] = None  # color/background/font at detection time

    def __post_init__(self) -> None:
        object.__setattr__(self, "style_snapshot", frozen_mapping(self.style_snapshot))

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "selector": self.selector,
            "snapshot": self.snapshot,
            "issueText": self.issue,
            "suggestion": self.suggestion,
        }
        if self.style_snapshot is not None:
            data["styleSnapshot"] = dict(self.style_snapshot)
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AffectedElement":
        styles = data.get("styleSnapshot")
        return cls(
            selector=data["selector"],
            snapshot=data.get("snapshot", ""),
            issue=data.get("issueText", ""),
            suggestion=data.get("suggestion", ""),
            style_snapshot=styles,
        )


@dataclass(frozen=True)
class StructuralFinding:
    test_id: str  # "advanced-contrast-ratio", "heading-level-skip", ...
    wcag_level: WcagLevel
    category: StructuralCategory
    severity: Severity
    title: str
    description: str
    wcag_criterion: str  # "1.4.3"
    elements: tuple[AffectedElement, ...]
    score: float  # 0-100, the detector's own confidence the severity is not exaggerated
    algorithm: str
    auto_fixable: bool

    def __post_init__(self) -> None:
        object.__setattr__(self, "score", clamp(self.score))
        if not isinstance(self.elements, tuple):
            object.__setattr__(self, "elements", tuple(self.elements))

    def to_dict(self) -> dict[str, Any]:
        return {
            "testId": self.test_id,
            "wcagLevel": self.wcag_level.value,
            "category": self.category.value,
            "severity": self.severity.value,
            "title": self.title,
            "description": self.description,
            "wcagCriterion": self.wcag_criterion,
            "elements": [e.to_dict() for e in self.elements],
            "score": self.score,
            "algorithmName": self.algorithm,
            "autoFixable": self.auto_fixable,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "StructuralFinding":
        return cls(
            test_id=data["testId"],
            wcag_level=WcagLevel(data["wcagLevel"]),
            category=StructuralCategory(data["category"]),
            severity=Severity(data["severity"]),
            title=data["title"],
            description=data["description"],
            wcag_criterion=data["wcagCriterion"],
            elements=tuple(AffectedElement.from_dict(e) for e in data.get("elements", [])),
            score=float(data["score"]),
            algorithm=data["algorithmName"],
            auto_fixable=bool(data["autoFixable"]),
        )


@dataclass(frozen=True)
class ContrastAssessment:
    """Transient result of comparing one element's text and background."""

    foreground: str  # hex
    background: str  # hex
    ratio: float
    required_ratio: float
    passes: bool
    level: WcagLevel


# ---------------------------------------------------------------------------
# Semantic findings
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SemanticElement:
    selector: str
    context: str
    issue: str
    cognitive_load: int  # 1-10

    def __post_init__(self) -> None:
        object.__setattr__(self, "cognitive_load", int(clamp(self.cognitive_load, 1, 10)))

    def to_dict(self) -> dict[str, Any]:
        return {
            "selector": self.selector,
            "context": self.context,
            "issueText": self.issue,
            "cognitiveLoad": self.cognitive_load,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SemanticElement":
        return cls(
            selector=data["selector"],
            context=data.get("context", ""),
            issue=data.get("issueText", ""),
            cognitive_load=int(data["cognitiveLoad"]),
        )


@dataclass(frozen=True)
class SemanticFinding:
    test_id: str
    category: SemanticCategory
    severity: Severity
    title: str
    description: str
    suggested_fixes: tuple[str, ...]
    elements: tuple[SemanticElement, ...]
    confidence: float  # 0-100
    explanation: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "confidence", clamp(self.confidence))
        if not isinstance(self.elements, tuple):
            object.__setattr__(self, "elements", tuple(self.elements))
        if not isinstance(self.suggested_fixes, tuple):
            object.__setattr__(self, "suggested_fixes", tuple(self.suggested_fixes))

    @property
    def total_cognitive_load(self) -> int:
        return sum(e.cognitive_load for e in self.elements)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "testId": self.test_id,
            "category": self.category.value,
            "severity": self.severity.value,
            "title": self.title,
            "description": self.description,
            "suggestedFixes": list(self.suggested_fixes),
            "elements": [e.to_dict() for e in self.elements],
            "confidence": self.confidence,
        }
        if self.explanation is not None:
            data["explanation"] = self.explanation
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SemanticFinding":
        return cls(
            test_id=data["testId"],
            category=SemanticCategory(data["category"]),
            severity=Severity(data["severity"]),
            title=data["title"],
            description=data["description"],
            suggested_fixes=tuple(data.get("suggestedFixes", [])),
            elements=tuple(SemanticElement.from_dict(e) for e in data.get("elements", [])),
            confidence=float(data["confidence"]),
            explanation=data.get("explanation"),
        )


# ---------------------------------------------------------------------------
# Baseline rule results (external input)
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RuleNode:
    html: str
    target: tuple[str, ...]
    failure_summary: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"html": self.html, "target": list(self.target)}
        if self.failure_summary is not None:
            data["failureSummary"] = self.failure_summary
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuleNode":
        target = data.get("target") or []
        return cls(
            html=data.get("html", ""),
            target=tuple(str(t) for t in target),
            failure_summary=data.get("failureSummary"),
        )


@dataclass(frozen=True)
class RuleResult:
    id: str
    impact: Optional[Severity]
    description: str
    help: str
    help_url: str
    tags: tuple[str, ...]
    nodes: tuple[RuleNode, ...] = ()

    def has_tag(self, tag: str) -> bool:
        return tag in self.tags

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "impact": self.impact.value if self.impact is not None else None,
            "description": self.description,
            "help": self.help,
            "helpUrl": self.help_url,
            "tags": list(self.tags),
            "nodes": [n.to_dict() for n in self.nodes],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuleResult":
        impact = data.get("impact")
        return cls(
            id=data["id"],
            impact=Severity(impact) if impact else None,
            description=data.get("description", ""),
            help=data.get("help", ""),
            help_url=data.get("helpUrl", ""),
            tags=tuple(data.get("tags") or ()),
            nodes=tuple(RuleNode.from_dict(n) for n in data.get("nodes") or ()),
        )


@dataclass(frozen=True)
class BaselineResults:
    violations: tuple[RuleResult, ...] = ()
    passes: tuple[RuleResult, ...] = ()
    incomplete: tuple[RuleResult, ...] = ()
    inapplicable: tuple[RuleResult, ...] = ()

    @property
    def total_tests(self) -> int:
        """Tests that ran: passes, violations and incomplete (not inapplicable)."""
        return len(self.violations) + len(self.passes) + len(self.incomplete)

    def to_dict(self) -> dict[str, Any]:
        return {
            "violations": [r.to_dict() for r in self.violations],
            "passes": [r.to_dict() for r in self.passes],
            "incomplete": [r.to_dict() for r in self.incomplete],
            "inapplicable": [r.to_dict() for r in self.inapplicable],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BaselineResults":
        return cls(
            **{
                key: tuple(RuleResult.from_dict(r) for r in data.get(key) or ())
                for key in ("violations", "passes", "incomplete", "inapplicable")
            }
        )


# ---------------------------------------------------------------------------
# Aggregate report
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Scores:
    overall: float = 100.0
    wcag_a: float = 100.0
    wcag_aa: float = 100.0
    wcag_aaa: float = 100.0
    semantic: float = 100.0
    cognitive: float = 100.0

    def to_dict(self) -> dict[str, float]:
        return {
            "overall": self.overall,
            "wcagA": self.wcag_a,
            "wcagAA": self.wcag_aa,
            "wcagAAA": self.wcag_aaa,
            "semantic": self.semantic,
            "cognitive": self.cognitive,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Scores":
        return cls(
            overall=float(data["overall"]),
            wcag_a=float(data["wcagA"]),
            wcag_aa=float(data["wcagAA"]),
            wcag_aaa=float(data["wcagAAA"]),
            semantic=float(data["semantic"]),
            cognitive=float(data["cognitive"]),
        )


@dataclass(frozen=True)
class Compliance:
    level: ComplianceLevel
    pass_rate: float
    critical_issues: int
    total_tests: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "level": self.level.value,
            "passRate": self.pass_rate,
            "criticalIssues": self.critical_issues,
            "totalTests": self.total_tests,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Compliance":
        return cls(
            level=ComplianceLevel(data["level"]),
            pass_rate=float(data["passRate"]),
            critical_issues=int(data["criticalIssues"]),
            total_tests=int(data["totalTests"]),
        )


@dataclass(frozen=True)
class InsightSummary:
    summary: str
    priority_recommendations: tuple[str, ...]
    estimated_fix_time: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "summary": self.summary,
            "priorityRecommendations": list(self.priority_recommendations),
            "estimatedFixTime": self.estimated_fix_time,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "InsightSummary":
        return cls(
            summary=data["summary"],
            priority_recommendations=tuple(data.get("priorityRecommendations", [])),
            estimated_fix_time=data["estimatedFixTime"],
        )


@dataclass(frozen=True)
class ScanReport:
    url: str
    timestamp: str  # ISO-8601, UTC
    baseline: BaselineResults
    structural_findings: tuple[StructuralFinding, ...]
    semantic_findings: tuple[SemanticFinding, ...]
    scores: Scores
    compliance: Compliance
    scan_duration_ms: float
    elements_analyzed: int
    insights: Optional[InsightSummary] = None
    test_engine: Optional[Mapping[str, str]] = field(default=None)

    def __post_init__(self) -> None:
        object.__setattr__(self, "test_engine", frozen_mapping(self.test_engine))

    @property
    def total_issues(self) -> int:
        return (
            len(self.baseline.violations)
            + len(self.structural_findings)
            + len(self.semantic_findings)
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "url": self.url,
            "timestamp": self.timestamp,
            **self.baseline.to_dict(),
            "advancedViolations": [f.to_dict() for f in self.structural_findings],
            "semanticIssues": [f.to_dict() for f in self.semantic_findings],
            "scores": self.scores.to_dict(),
            "compliance": self.compliance.to_dict(),
            "scanDuration": self.scan_duration_ms,
            "elementsAnalyzed": self.elements_analyzed,
        }
        if self.insights is not None:
            data["aiInsights"] = self.insights.to_dict()
        if self.test_engine is not None:
            data["testEngine"] = dict(self.test_engine)
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ScanReport":
        insights = data.get("aiInsights")
        engine = data.get("testEngine")
        return cls(
            url=data["url"],
            timestamp=data["timestamp"],
            baseline=BaselineResults.from_dict(data),
            structural_findings=tuple(
                StructuralFinding.from_dict(f) for f in data.get("advancedViolations", [])
            ),
            semantic_findings=tuple(
                SemanticFinding.from_dict(f) for f in data.get("semanticIssues", [])
            ),
            scores=Scores.from_dict(data["scores"]),
            compliance=Compliance.from_dict(data["compliance"]),
            scan_duration_ms=float(data["scanDuration"]),
            elements_analyzed=int(data["elementsAnalyzed"]),
            insights=InsightSummary.from_dict(insights) if insights is not None else None,
            test_engine=engine,
        )
