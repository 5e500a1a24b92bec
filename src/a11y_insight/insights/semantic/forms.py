"""FormComplexityDetector - forms whose length and structure overload users."""

from __future__ import annotations

from dataclasses import dataclass

from ...document.adapter import DocumentAdapter, Node
from ..context import ScanContext
from ..models import SemanticCategory, SemanticElement, SemanticFinding, Severity
from .content import round_half_up

SUGGESTED_FIXES = (
    "Break long forms into multiple steps with progress indicators",
    "Group related fields with fieldsets and legends",
    "Provide clear instructions and examples",
    "Use progressive disclosure for optional fields",
    "Add inline validation with helpful error messages",
)

MAX_COMPLEXITY = 10.0


@dataclass(frozen=True)
class FormComplexity:
    score: float
    field_count: int
    issues: tuple[str, ...]


def form_complexity(doc: DocumentAdapter, form: Node) -> FormComplexity:
    fields = doc.select("input, select, textarea", form)
    required = doc.select("[required]", form)
    selects = doc.select("select", form)
    textareas = doc.select("textarea", form)
    checkboxes = doc.select('input[type="checkbox"]', form)
    radios = doc.select('input[type="radio"]', form)

    score = min(len(fields) * 0.3, 4.0)
    score += len(required) * 0.2
    score += len(selects) * 0.4
    score += len(textareas) * 0.3

    issues = []
    if len(checkboxes) > 5:
        score += 1.0
        issues.append("Many checkbox options")
    if len(radios) > 5:
        score += 0.8
        issues.append("Many radio button options")
    if not doc.select("fieldset", form) and len(fields) > 5:
        score += 1.0
        issues.append("No field grouping")
    if not doc.select("[aria-describedby]", form):
        score += 0.5
        issues.append("No help text")

    return FormComplexity(min(score, MAX_COMPLEXITY), len(fields), tuple(issues))


class FormComplexityDetector:
    name = "form-complexity"
    category = "cognitive"

    def detect(self, ctx: ScanContext) -> list[SemanticFinding]:
        doc = ctx.document
        t = ctx.thresholds
        findings: list[SemanticFinding] = []

        for form in doc.select("form"):
            complexity = form_complexity(doc, form)
            if complexity.score <= t.form_load_moderate:
                continue
            issues = ", ".join(complexity.issues)
            findings.append(
                SemanticFinding(
                    test_id="high-cognitive-load-form",
                    category=SemanticCategory.COGNITIVE,
                    severity=(
                        Severity.SERIOUS
                        if complexity.score > t.form_load_serious
                        else Severity.MODERATE
                    ),
                    title="Form May Be Too Complex",
                    description=(
                        f"Form complexity score: {complexity.score:.1f}/10. Consider breaking "
                        "into smaller steps or providing additional guidance."
                    ),
                    explanation=(
                        f"This form has a complexity score of {complexity.score:.1f}/10. "
                        "High complexity can overwhelm users, especially those with cognitive "
                        f"disabilities. Main issues: {issues}. Consider progressive disclosure "
                        "and clear guidance."
                    ),
                    suggested_fixes=SUGGESTED_FIXES,
                    elements=(
                        SemanticElement(
                            selector=doc.selector_for(form),
                            context=f"Form with {complexity.field_count} fields",
                            issue=f"High complexity: {issues}",
                            cognitive_load=round_half_up(complexity.score),
                        ),
                    ),
                    confidence=80,
                )
            )

        return findings
