"""JargonDetector - technical terms in the main content."""

from __future__ import annotations

import re
from typing import Sequence

from ..context import ScanContext
from ..models import SemanticCategory, SemanticElement, SemanticFinding, Severity
from .content import extract_main_content

JARGON_PATTERNS: tuple[str, ...] = (
    r"\b(API|SDK|SaaS|B2B|B2C|ROI|KPI|SEO|SEM|CRM|ERP|AI|ML|IoT|VPN|SSL|HTTP|HTTPS|URL|URI|JSON|XML|CSV|PDF)\b",
    r"\b(algorithm|authentication|encryption|database|server|client|backend|frontend"
    r"|middleware|framework|deployment|repository)\b",
    r"\b(optimization|analytics|metrics|conversion|engagement|acquisition|retention"
    r"|monetization|scalability|latency)\b",
)

SUGGESTED_FIXES = (
    "Provide a glossary for technical terms",
    "Use simpler language where possible",
    "Add explanatory tooltips or expandable definitions",
    "Include examples to illustrate complex concepts",
)

EXPLANATION = (
    "Technical jargon can create barriers for users with varying levels of expertise or "
    "cognitive disabilities. Consider providing definitions or simpler alternatives."
)

_WHITESPACE = re.compile(r"\s+")


def find_jargon(text: str, patterns: Sequence[re.Pattern], context_chars: int) -> list[tuple[str, str]]:
    """(term, context) pairs, grouped by pattern family then text order."""
    terms = []
    for pattern in patterns:
        for match in pattern.finditer(text):
            start = max(0, match.start() - context_chars)
            end = min(len(text), match.end() + context_chars)
            terms.append((match.group(0), text[start:end]))
    return terms


class JargonDetector:
    name = "jargon"
    category = "cognitive"

    def __init__(self, patterns: Sequence[str] = JARGON_PATTERNS):
        self._patterns = [re.compile(p, re.IGNORECASE) for p in patterns]

    def detect(self, ctx: ScanContext) -> list[SemanticFinding]:
        t = ctx.thresholds
        text = _WHITESPACE.sub(" ", extract_main_content(ctx.document)).strip()
        terms = find_jargon(text, self._patterns, t.jargon_context_chars)
        if not terms:
            return []

        return [
            SemanticFinding(
                test_id="technical-jargon",
                category=SemanticCategory.COGNITIVE,
                severity=Severity.MINOR,
                title="Technical Jargon Detected",
                description=(
                    "Content contains technical terms that may need explanation for "
                    "general audiences."
                ),
                explanation=EXPLANATION,
                suggested_fixes=SUGGESTED_FIXES,
                elements=tuple(
                    SemanticElement(
                        selector="body",
                        context=context,
                        issue=f'Technical term: "{word}"',
                        cognitive_load=4,
                    )
                    for word, context in terms[: t.jargon_sample_cap]
                ),
                confidence=70,
            )
        ]
