"""KeyboardDetector - interactive elements unreachable by keyboard, and focus traps.

Every interactive-looking element is classified as natively focusable,
explicitly removed from the tab order, or click-only. The last two are
reported together. The focus-trap check walks the tab sequence forward and
backward and only reports elements whose inline key handler provably cancels
Tab; anything less certain is left alone.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from ...document.adapter import DocumentAdapter, Node
from ..context import ScanContext
from ..models import Severity, StructuralCategory, StructuralFinding, WcagLevel
from .helpers import affected, is_rendered

INTERACTIVE_SELECTOR = ", ".join(
    [
        "a",
        "button",
        "input",
        "select",
        "textarea",
        "[tabindex]",
        "[onclick]",
        "[onmousedown]",
        "[onmouseup]",
        '[role="button"]',
        '[role="link"]',
        '[role="menuitem"]',
        '[role="tab"]',
        '[role="checkbox"]',
        '[role="radio"]',
        '[role="switch"]',
        '[role="option"]',
    ]
)

CLICK_ATTRIBUTES = ("onclick", "onmousedown", "onmouseup")
INTERACTIVE_ROLES = frozenset(
    {"button", "link", "menuitem", "tab", "checkbox", "radio", "switch", "option"}
)

_PREVENTS_DEFAULT = re.compile(r"preventDefault|return\s+false", re.IGNORECASE)
_MENTIONS_TAB = re.compile(r"['\"]Tab['\"]|keyCode\s*===?\s*9\b|which\s*===?\s*9\b")
_MOVES_FOCUS = re.compile(r"\.focus\s*\(")


def is_natively_focusable(doc: DocumentAdapter, el: Node) -> bool:
    tag = doc.tag(el)
    if tag == "a":
        return doc.has_attr(el, "href")
    if tag == "input":
        return (doc.attr(el, "type") or "").lower() != "hidden"
    if tag in ("button", "select", "textarea"):
        return not doc.has_attr(el, "disabled")
    return False


def _tabindex(doc: DocumentAdapter, el: Node):
    raw = doc.attr(el, "tabindex")
    if raw is None:
        return None
    try:
        return int(raw.strip())
    except ValueError:
        return None


def has_click_handler(doc: DocumentAdapter, el: Node) -> bool:
    if any(doc.has_attr(el, a) for a in CLICK_ATTRIBUTES):
        return True
    return (doc.attr(el, "role") or "").strip().lower() in INTERACTIVE_ROLES


@dataclass(frozen=True)
class TabTraversal:
    order: tuple
    traps: tuple


def tab_order(doc: DocumentAdapter, focusable: list) -> list:
    """Sequential focus navigation order: positive tabindex ascending, then document order."""
    positive = []
    natural = []
    for index, el in enumerate(focusable):
        value = _tabindex(doc, el)
        if value is not None and value > 0:
            positive.append((value, index, el))
        else:
            natural.append(el)
    return [el for _, _, el in sorted(positive, key=lambda t: (t[0], t[1]))] + natural


def cancels_tab(doc: DocumentAdapter, el: Node) -> bool:
    """True when the keydown handler swallows Tab without sending focus anywhere.

    A handler that cancels Tab and then calls ``.focus()`` cycles focus, as a
    modal dialog does, so it is not counted.
    """
    handler = doc.attr(el, "onkeydown") or ""
    if _MOVES_FOCUS.search(handler):
        return False
    return bool(_PREVENTS_DEFAULT.search(handler) and _MENTIONS_TAB.search(handler))


def simulate_tab_traversal(doc: DocumentAdapter, focusable: list) -> TabTraversal:
    """Order the tab sequence and mark the elements focus cannot leave.

    Cancelling Tab blocks Tab and Shift+Tab alike, so one pass over the
    order finds every trap. A single focusable element is never a trap:
    Tab leaves for the browser chrome.
    """
    order = tab_order(doc, focusable)
    if len(order) < 2:
        return TabTraversal(order=tuple(order), traps=())
    traps = tuple(el for el in order if cancels_tab(doc, el))
    return TabTraversal(order=tuple(order), traps=traps)


class KeyboardDetector:
    name = "keyboard"
    category = "keyboard"
    wcag_criterion = "2.1.1"

    def classify(self, doc: DocumentAdapter, el: Node) -> str:
        """Return 'focusable', 'removed' or 'click-only'."""
        tabindex = doc.attr(el, "tabindex")
        native = is_natively_focusable(doc, el)
        if tabindex is not None and tabindex.strip() == "-1" and not native:
            return "removed"
        if tabindex is None and not native and has_click_handler(doc, el):
            return "click-only"
        return "focusable"

    def detect(self, ctx: ScanContext) -> list[StructuralFinding]:
        doc = ctx.document
        focusable: list = []
        problematic: list = []

        for el in doc.select(INTERACTIVE_SELECTOR):
            kind = self.classify(doc, el)
            if kind == "focusable":
                if is_rendered(doc, el) and (
                    is_natively_focusable(doc, el) or _tabindex(doc, el) is not None
                ):
                    focusable.append(el)
            else:
                problematic.append((kind, el))

        findings: list[StructuralFinding] = []

        traversal = simulate_tab_traversal(doc, focusable)
        if traversal.traps:
            findings.append(
                StructuralFinding(
                    test_id="keyboard-trap",
                    wcag_level=WcagLevel.A,
                    category=StructuralCategory.KEYBOARD,
                    severity=Severity.CRITICAL,
                    title="Keyboard Focus Trap Detected",
                    description=(
                        "Users may become trapped in a section of the page and unable "
                        "to navigate away using only the keyboard."
                    ),
                    wcag_criterion="2.1.2",
                    elements=tuple(
                        affected(
                            doc,
                            el,
                            issue="Focus trap prevents keyboard navigation",
                            suggestion=(
                                "Ensure users can navigate away from this element using "
                                "Tab, Shift+Tab, or Escape."
                            ),
                        )
                        for el in traversal.traps
                    ),
                    score=0,
                    algorithm="Tab Traversal Simulation",
                    auto_fixable=False,
                )
            )

        if problematic:
            cap = ctx.thresholds.keyboard_sample_cap
            findings.append(
                StructuralFinding(
                    test_id="missing-keyboard-support",
                    wcag_level=WcagLevel.A,
                    category=StructuralCategory.KEYBOARD,
                    severity=Severity.SERIOUS,
                    title="Interactive Elements Missing Keyboard Support",
                    description=(
                        "Interactive elements must be operable via keyboard for users "
                        "who cannot use a mouse."
                    ),
                    wcag_criterion=self.wcag_criterion,
                    elements=tuple(
                        affected(
                            doc,
                            el,
                            issue=(
                                "Removed from tab order with tabindex=\"-1\""
                                if kind == "removed"
                                else "Click handler without keyboard equivalent"
                            ),
                            suggestion=(
                                'Add tabindex="0" and onKeyDown handler for Enter/Space keys, '
                                "or use semantic elements like <button>."
                            ),
                        )
                        for kind, el in problematic[:cap]
                    ),
                    score=30,
                    algorithm="Interactive Element Analysis",
                    auto_fixable=True,
                )
            )

        return findings
