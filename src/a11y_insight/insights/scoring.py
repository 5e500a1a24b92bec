"""Score and compliance computation.

Scoring is a pure function of the three finding sources and the severity
weight tables; nothing here reads the document.

    axe_score  = passes / (passes + violations + incomplete) × 100   (100 if no tests)
    overall    = clamp(axe_score − (structural_penalty + semantic_penalty) / 2)
    level_X    = passes_X / (passes_X + violations_X) × 100          (100 if none at X)
    semantic   = clamp(100 − semantic_penalty)
    cognitive  = clamp(100 − Σ cognitive_load / ceiling × 100)

Compliance is decided only when there are no critical issues in any source:
AAA if level_AAA ≥ 95, else AA if level_AA ≥ 90, else A if level_A ≥ 85,
else Non-compliant.
"""

from __future__ import annotations

from typing import Sequence

from ..config import SeverityWeights
from .models import (
    BaselineResults,
    Compliance,
    ComplianceLevel,
    Scores,
    SemanticCategory,
    SemanticFinding,
    Severity,
    StructuralFinding,
    clamp,
)

LEVEL_TAGS = {"A": "wcag2a", "AA": "wcag2aa", "AAA": "wcag2aaa"}

COMPLIANCE_THRESHOLDS = (
    (ComplianceLevel.AAA, "wcag_aaa", 95.0),
    (ComplianceLevel.AA, "wcag_aa", 90.0),
    (ComplianceLevel.A, "wcag_a", 85.0),
)


def pass_rate(baseline: BaselineResults) -> float:
    total = baseline.total_tests
    if total == 0:
        return 100.0
    return len(baseline.passes) / total * 100


def level_score(baseline: BaselineResults, tag: str) -> float:
    passes = sum(1 for r in baseline.passes if r.has_tag(tag))
    violations = sum(1 for r in baseline.violations if r.has_tag(tag))
    total = passes + violations
    if total == 0:
        return 100.0
    return passes / total * 100


def structural_penalty(findings: Sequence[StructuralFinding], weights: SeverityWeights) -> float:
    return sum(weights.structural_weight(f.severity.value) for f in findings)


def semantic_penalty(findings: Sequence[SemanticFinding], weights: SeverityWeights) -> float:
    return sum(weights.semantic_weight(f.severity.value) for f in findings)


def cognitive_score(findings: Sequence[SemanticFinding], weights: SeverityWeights) -> float:
    load = sum(
        f.total_cognitive_load for f in findings if f.category is SemanticCategory.COGNITIVE
    )
    return clamp(100 - load / weights.cognitive_load_ceiling * 100)


def compute_scores(
    baseline: BaselineResults,
    structural: Sequence[StructuralFinding],
    semantic: Sequence[SemanticFinding],
    weights: SeverityWeights,
) -> Scores:
    s_penalty = structural_penalty(structural, weights)
    m_penalty = semantic_penalty(semantic, weights)
    return Scores(
        overall=clamp(pass_rate(baseline) - (s_penalty + m_penalty) / 2),
        wcag_a=level_score(baseline, LEVEL_TAGS["A"]),
        wcag_aa=level_score(baseline, LEVEL_TAGS["AA"]),
        wcag_aaa=level_score(baseline, LEVEL_TAGS["AAA"]),
        semantic=clamp(100 - m_penalty),
        cognitive=cognitive_score(semantic, weights),
    )


def count_critical(
    baseline: BaselineResults,
    structural: Sequence[StructuralFinding],
    semantic: Sequence[SemanticFinding],
) -> int:
    return (
        sum(1 for r in baseline.violations if r.impact is Severity.CRITICAL)
        + sum(1 for f in structural if f.severity is Severity.CRITICAL)
        + sum(1 for f in semantic if f.severity is Severity.CRITICAL)
    )


def compliance_level(scores: Scores, critical_issues: int) -> ComplianceLevel:
    if critical_issues > 0:
        return ComplianceLevel.NON_COMPLIANT
    for level, attr, threshold in COMPLIANCE_THRESHOLDS:
        if getattr(scores, attr) >= threshold:
            return level
    return ComplianceLevel.NON_COMPLIANT


def assess_compliance(
    baseline: BaselineResults,
    structural: Sequence[StructuralFinding],
    semantic: Sequence[SemanticFinding],
    scores: Scores,
) -> Compliance:
    critical = count_critical(baseline, structural, semantic)
    return Compliance(
        level=compliance_level(scores, critical),
        pass_rate=pass_rate(baseline),
        critical_issues=critical,
        total_tests=baseline.total_tests + len(structural) + len(semantic),
    )
