"""AmbiguousLinkDetector - link text that means nothing out of context."""

from __future__ import annotations

import re
from typing import Sequence

from ...document.adapter import DocumentAdapter, Node
from ..context import ScanContext
from ..models import SemanticCategory, SemanticElement, SemanticFinding, Severity

AMBIGUOUS_LINK_PATTERNS: tuple[str, ...] = (
    r"^(click here|here|more|read more|link|this|that)$",
    r"^(learn more|find out|discover|explore)$",
    r"^(download|view|see|check out)$",
    r"^\d+$",
    r"^(continue|next|previous|back)$",
)

SUGGESTED_FIXES = (
    'Replace "click here" with descriptive text about the destination',
    'Add context to "read more" links (e.g., "read more about accessibility")',
    "Use aria-label to provide additional context while keeping visual text short",
    "Ensure link purpose is clear from the link text alone",
)

EXPLANATION = (
    "Screen reader users often navigate by jumping from link to link. Generic phrases "
    'like "click here" or "read more" don\'t provide meaningful context about the '
    "destination or purpose."
)


def effective_link_text(doc: DocumentAdapter, link: Node) -> str:
    """aria-label, else visible text, else title."""
    return (
        (doc.attr(link, "aria-label") or "").strip()
        or doc.text(link).strip()
        or (doc.attr(link, "title") or "").strip()
    )


def surrounding_text(doc: DocumentAdapter, el: Node, max_length: int) -> str:
    parent = doc.parent(el)
    if parent is None:
        return ""
    text = doc.text(parent)
    own = doc.text(el)
    index = max(text.find(own), 0)
    start = max(0, index - max_length // 2)
    end = min(len(text), index + len(own) + max_length // 2)
    return text[start:end].strip()


class AmbiguousLinkDetector:
    name = "links"
    category = "semantic"

    def __init__(self, patterns: Sequence[str] = AMBIGUOUS_LINK_PATTERNS, min_length: int = 3):
        self._patterns = [re.compile(p, re.IGNORECASE) for p in patterns]
        self.min_length = min_length

    def is_ambiguous(self, text: str) -> bool:
        text = text.strip()
        return len(text) < self.min_length or any(p.search(text) for p in self._patterns)

    def detect(self, ctx: ScanContext) -> list[SemanticFinding]:
        doc = ctx.document
        t = ctx.thresholds
        ambiguous = [
            link for link in doc.select("a[href]") if self.is_ambiguous(effective_link_text(doc, link))
        ]
        if not ambiguous:
            return []

        def context(link: Node) -> str:
            visible = doc.text(link).strip()
            href = doc.attr(link, "href") or ""
            around = surrounding_text(doc, link, t.link_context_chars)
            return f'"{visible}" -> {href} (Context: {around})'

        return [
            SemanticFinding(
                test_id="ambiguous-link-text",
                category=SemanticCategory.SEMANTIC,
                severity=Severity.MODERATE,
                title="Ambiguous Link Text Detected",
                description=(
                    "Links should have clear, descriptive text that makes sense out of context."
                ),
                explanation=EXPLANATION,
                suggested_fixes=SUGGESTED_FIXES,
                elements=tuple(
                    SemanticElement(
                        selector=doc.selector_for(link),
                        context=context(link),
                        issue=f'Ambiguous text: "{doc.text(link).strip()}"',
                        cognitive_load=6,
                    )
                    for link in ambiguous[: t.link_sample_cap]
                ),
                confidence=90,
            )
        ]
