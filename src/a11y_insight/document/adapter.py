"""Document adapter capability interface.

Analyzers never touch a concrete renderer. They read the document through
this narrow, read-only protocol: element enumeration, attribute and text
accessors, computed style, geometry, and stylesheet rules.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator, Optional, Protocol, Sequence

from .css import StyleRule

# Opaque element handle owned by the adapter.
Node = Any

# Elements whose content is never rendered as text
NON_RENDERED_TAGS = frozenset(
    {"head", "script", "style", "title", "meta", "link", "noscript", "template", "base"}
)


@dataclass(frozen=True)
class BoundingBox:
    width: float
    height: float


@dataclass(frozen=True)
class ComputedStyle:
    """Resolved style properties of one element.

    ``color`` and ``background_color`` hold the resolved CSS value (a color
    string, or ``transparent``); parsing to RGB is left to the consumer.
    """

    color: str = "rgb(0, 0, 0)"
    background_color: str = "transparent"
    font_size: float = 16.0
    font_weight: int = 400
    animation_name: str = "none"
    transition_property: str = "none"
    background_image: str = "none"
    display: str = "inline"
    visibility: str = "visible"

    @property
    def is_animated(self) -> bool:
        return self.animation_name != "none" or self.transition_property != "none"

    def snapshot(self) -> dict[str, str]:
        return {
            "color": self.color,
            "backgroundColor": self.background_color,
            "fontSize": f"{self.font_size:g}px",
            "fontWeight": str(self.font_weight),
        }


class DocumentAdapter(Protocol):
    """Read-only view of a rendered document."""

    url: str

    def elements(self) -> Sequence[Node]:
        """All elements in document order."""
        ...

    def body(self) -> Optional[Node]: ...

    def tag(self, el: Node) -> str: ...

    def attr(self, el: Node, name: str) -> Optional[str]: ...

    def has_attr(self, el: Node, name: str) -> bool: ...

    def text(self, el: Node) -> str:
        """Full text content of the subtree (untrimmed)."""
        ...

    def text_without(self, el: Node, exclude: str) -> str:
        """Text content of the subtree, skipping subtrees matching ``exclude``."""
        ...

    def parent(self, el: Node) -> Optional[Node]: ...

    def ancestors(self, el: Node) -> Iterator[Node]: ...

    def closest(self, el: Node, selector: str) -> Optional[Node]:
        """Nearest inclusive ancestor matching ``selector``."""
        ...

    def select(self, selector: str, root: Optional[Node] = None) -> list[Node]: ...

    def computed_style(self, el: Node) -> ComputedStyle: ...

    def bounding_box(self, el: Node) -> Optional[BoundingBox]:
        """Rendered size, or None when the adapter has no geometry."""
        ...

    def stylesheet_rules(self) -> list[StyleRule]:
        """Rules of every accessible stylesheet; inaccessible sheets count as empty."""
        ...

    def outer_html(self, el: Node, limit: int = 200) -> str: ...

    def selector_for(self, el: Node) -> str: ...

    def materialize(self) -> None:
        """Resolve every memoized value so later reads never write."""
        ...
