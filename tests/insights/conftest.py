"""Factories for insight model objects."""

import pytest

from a11y_insight.insights.models import (
    RuleNode,
    RuleResult,
    SemanticCategory,
    SemanticElement,
    SemanticFinding,
    Severity,
    StructuralCategory,
    StructuralFinding,
    WcagLevel,
)


@pytest.fixture
def structural_finding():
    def _make(
        severity: Severity = Severity.MODERATE,
        category: StructuralCategory = StructuralCategory.STRUCTURE,
        test_id: str = "heading-level-skip",
    ) -> StructuralFinding:
        return StructuralFinding(
            test_id=test_id,
            wcag_level=WcagLevel.A,
            category=category,
            severity=severity,
            title="Finding",
            description="Something is wrong.",
            wcag_criterion="1.3.1",
            elements=(),
            score=50,
            algorithm="Test",
            auto_fixable=False,
        )

    return _make


@pytest.fixture
def semantic_finding():
    def _make(
        severity: Severity = Severity.MODERATE,
        category: SemanticCategory = SemanticCategory.COGNITIVE,
        loads: tuple = (5,),
    ) -> SemanticFinding:
        return SemanticFinding(
            test_id="content-readability",
            category=category,
            severity=severity,
            title="Finding",
            description="Something is hard.",
            suggested_fixes=("Simplify",),
            elements=tuple(SemanticElement("p", "text", "issue", load) for load in loads),
            confidence=80,
        )

    return _make


@pytest.fixture
def rule_result():
    def _make(rule_id: str = "image-alt", tags=("wcag2a",), impact=None, targets=("img",)) -> RuleResult:
        return RuleResult(
            id=rule_id,
            impact=impact,
            description=f"{rule_id} description",
            help=f"{rule_id} help",
            help_url=f"https://dequeuniversity.com/rules/axe/4.8/{rule_id}",
            tags=tuple(tags),
            nodes=(RuleNode(html="<img src='a.png'>", target=tuple(targets)),),
        )

    return _make
