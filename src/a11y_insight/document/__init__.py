"""Document adapter: the read-only view of a page every analyzer works through."""

from .adapter import BoundingBox, ComputedStyle, DocumentAdapter, Node
from .colors import RGBA, contrast_ratio, parse_color, relative_luminance
from .soup import SoupDocument

__all__ = [
    "BoundingBox",
    "ComputedStyle",
    "DocumentAdapter",
    "Node",
    "RGBA",
    "SoupDocument",
    "contrast_ratio",
    "parse_color",
    "relative_luminance",
]
