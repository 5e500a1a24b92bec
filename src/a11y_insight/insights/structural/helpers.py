"""Shared helpers for structural detectors."""

from __future__ import annotations

from typing import Optional

from ...document.adapter import DocumentAdapter, Node
from ..models import AffectedElement


def affected(
    doc: DocumentAdapter,
    el: Node,
    issue: str,
    suggestion: str,
    style_snapshot: Optional[dict[str, str]] = None,
) -> AffectedElement:
    """Describe one offending element for a finding."""
    return AffectedElement(
        selector=doc.selector_for(el),
        snapshot=doc.outer_html(el),
        issue=issue,
        suggestion=suggestion,
        style_snapshot=style_snapshot,
    )


def is_rendered(doc: DocumentAdapter, el: Node) -> bool:
    """False for elements hidden by display:none or visibility:hidden."""
    style = doc.computed_style(el)
    return style.display != "none" and style.visibility not in ("hidden", "collapse")
