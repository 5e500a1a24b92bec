"""BeautifulSoup-backed document adapter.

Static HTML has no layout engine, so this adapter resolves what it can:
computed style from user-agent defaults, ``<style>`` blocks (soupsieve
selector matching, specificity then source order) and inline ``style``
attributes, with inheritance of text properties; geometry only where sizes
are declared. External stylesheets are never fetched and count as empty.
"""

from __future__ import annotations

from collections import defaultdict
from pathlib import Path
from typing import Iterator, Optional

import soupsieve as sv
from bs4 import BeautifulSoup, FeatureNotFound, NavigableString, Tag
from bs4.builder import ParserRejectedMarkup

from ..exceptions import AdapterError, DocumentLoadError, ErrorCode
from ..logging_config import get_logger
from .adapter import NON_RENDERED_TAGS, BoundingBox, ComputedStyle
from .colors import parse_color
from .css import (
    StyleRule,
    media_applies,
    parse_declarations,
    parse_font_size,
    parse_font_weight,
    parse_length,
    parse_stylesheet,
    specificity,
    split_selector_list,
)

logger = get_logger(__name__)

ROOT_FONT_SIZE = 16.0

BLOCK_TAGS = frozenset(
    {
        "html", "body", "div", "p", "main", "nav", "aside", "header", "footer",
        "section", "article", "form", "fieldset", "ul", "ol", "li", "table",
        "h1", "h2", "h3", "h4", "h5", "h6", "blockquote", "figure", "pre",
    }
)

_HEADING_SCALE = {"h1": 2.0, "h2": 1.5, "h3": 1.17, "h4": 1.0, "h5": 0.83, "h6": 0.67}
_BOLD_TAGS = frozenset({"b", "strong", "th"} | set(_HEADING_SCALE))
_WEIGHT_KEYWORDS = frozenset({"bold", "bolder", "lighter"})
_SELECTOR_ERRORS = (sv.SelectorSyntaxError, NotImplementedError, ValueError)


def _ua_declarations(tag: str, parent_font_size: float) -> dict[str, str]:
    """User-agent stylesheet defaults for a tag."""
    decls: dict[str, str] = {}
    if tag in _HEADING_SCALE:
        decls["font-size"] = f"{_HEADING_SCALE[tag] * parent_font_size:g}px"
    if tag == "small":
        decls["font-size"] = "smaller"
    if tag in _BOLD_TAGS:
        decls["font-weight"] = "bold"
    if tag in NON_RENDERED_TAGS:
        decls["display"] = "none"
    elif tag in BLOCK_TAGS:
        decls["display"] = "block"
    return decls


def _split_tokens(value: str) -> list[str]:
    """Whitespace split that keeps parenthesised groups intact."""
    tokens: list[str] = []
    depth = 0
    current: list[str] = []
    for ch in value:
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
        if ch.isspace() and depth == 0:
            if current:
                tokens.append("".join(current))
                current = []
        else:
            current.append(ch)
    if current:
        tokens.append("".join(current))
    return tokens


def _color_from_shorthand(value: str) -> Optional[str]:
    if parse_color(value) is not None:
        return value.strip()
    for token in _split_tokens(value):
        if parse_color(token) is not None:
            return token
    return None


class SoupDocument:
    """DocumentAdapter over a parsed HTML string."""

    def __init__(self, html: str, url: str = "about:blank", parser: str = "html.parser"):
        self.url = url
        try:
            self.soup = BeautifulSoup(html, parser)
        except (FeatureNotFound, ParserRejectedMarkup) as e:
            raise AdapterError(
                message=f"Cannot parse document {url}: {e}",
                code=ErrorCode.AX100,
                context={"url": url, "parser": parser},
                recoverable=False,
                recovery_hint="Use the built-in html.parser or install the requested parser",
            ) from e
        self._elements: list[Tag] = list(self.soup.find_all(True))
        self._rules: list[StyleRule] = self._load_stylesheets()
        self._matched = self._match_rules()
        self._cascades: dict[int, dict[str, str]] = {}
        self._styles: dict[int, ComputedStyle] = {}

    @classmethod
    def from_file(cls, path: Path, url: Optional[str] = None) -> "SoupDocument":
        try:
            html = Path(path).read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            raise DocumentLoadError(Path(path), str(e)) from e
        return cls(html, url=url or Path(path).name)

    # -- structure ---------------------------------------------------------

    def elements(self) -> list[Tag]:
        return list(self._elements)

    def body(self) -> Optional[Tag]:
        return self.soup.body

    def tag(self, el: Tag) -> str:
        return el.name.lower()

    def attr(self, el: Tag, name: str) -> Optional[str]:
        value = el.get(name)
        if isinstance(value, list):
            return " ".join(value)
        return value

    def has_attr(self, el: Tag, name: str) -> bool:
        return el.has_attr(name)

    def text(self, el: Tag) -> str:
        return el.get_text()

    def text_without(self, el: Tag, exclude: str) -> str:
        pattern = sv.compile(exclude)
        parts: list[str] = []
        self._collect_text(el, pattern, parts)
        return "".join(parts)

    def _collect_text(self, node: Tag, pattern, parts: list[str]) -> None:
        for child in node.children:
            if isinstance(child, Tag):
                if child.name in NON_RENDERED_TAGS or pattern.match(child):
                    continue
                self._collect_text(child, pattern, parts)
            elif type(child) is NavigableString:
                parts.append(str(child))

    def parent(self, el: Tag) -> Optional[Tag]:
        parent = el.parent
        if parent is None or parent is self.soup:
            return None
        return parent

    def ancestors(self, el: Tag) -> Iterator[Tag]:
        current = self.parent(el)
        while current is not None:
            yield current
            current = self.parent(current)

    def closest(self, el: Tag, selector: str) -> Optional[Tag]:
        return sv.closest(selector, el)

    def select(self, selector: str, root: Optional[Tag] = None) -> list[Tag]:
        return list(sv.select(selector, root if root is not None else self.soup))

    def outer_html(self, el: Tag, limit: int = 200) -> str:
        html = str(el)
        if len(html) > limit:
            return html[:limit] + "..."
        return html

    def selector_for(self, el: Tag) -> str:
        el_id = self.attr(el, "id")
        if el_id:
            return f"#{el_id}"
        classes = el.get("class")
        if classes:
            first = classes[0] if isinstance(classes, list) else str(classes).split()[0]
            return f"{self.tag(el)}.{first}"
        return self.tag(el)

    # -- stylesheets -------------------------------------------------------

    def stylesheet_rules(self) -> list[StyleRule]:
        return list(self._rules)

    def _load_stylesheets(self) -> list[StyleRule]:
        rules: list[StyleRule] = []
        for node in self.soup.find_all(["style", "link"]):
            if node.name == "link":
                rel = node.get("rel") or []
                rel = rel if isinstance(rel, list) else str(rel).split()
                if "stylesheet" in [r.lower() for r in rel]:
                    href = node.get("href")
                    self._skipped(
                        ErrorCode.AX101, f"Stylesheet {href!r} inaccessible, treated as empty", href=href
                    )
                continue
            css = "".join(str(s) for s in node.contents if isinstance(s, NavigableString))
            try:
                rules.extend(parse_stylesheet(css))
            except Exception as e:
                self._skipped(ErrorCode.AX102, f"Unparseable <style> block skipped: {e}")
        return rules

    def _skipped(self, code: ErrorCode, message: str, **context) -> None:
        error = AdapterError(message=message, code=code, context={"url": self.url, **context})
        logger.debug(str(error))

    def _match_rules(self) -> dict[int, list[tuple[tuple[int, int, int], int, dict]]]:
        matched: dict[int, list] = defaultdict(list)
        order = 0
        for rule in self._rules:
            if rule.at_rule or not rule.declarations or not media_applies(rule.media):
                continue
            for part in split_selector_list(rule.selector):
                try:
                    hits = sv.select(part, self.soup)
                except _SELECTOR_ERRORS as e:
                    self._skipped(
                        ErrorCode.AX102, f"Selector {part!r} not matchable: {e}", selector=part
                    )
                    continue
                rank = specificity(part)
                for el in hits:
                    matched[id(el)].append((rank, order, rule.declarations))
                order += 1
        return matched

    # -- style -------------------------------------------------------------

    def _cascade(self, el: Tag, parent_font_size: float) -> dict[str, str]:
        key = id(el)
        if key in self._cascades:
            return self._cascades[key]

        decls = _ua_declarations(self.tag(el), parent_font_size)
        entries = sorted(self._matched.get(key, []), key=lambda e: (e[0], e[1]))
        inline = parse_declarations(self.attr(el, "style") or "")

        for important in (False, True):
            for _rank, _order, rule_decls in entries:
                for prop, decl in rule_decls.items():
                    if decl.important is important:
                        decls[prop] = decl.value
            for prop, decl in inline.items():
                if decl.important is important:
                    decls[prop] = decl.value

        self._cascades[key] = decls
        return decls

    def computed_style(self, el: Tag) -> ComputedStyle:
        key = id(el)
        cached = self._styles.get(key)
        if cached is not None:
            return cached

        parent = self.parent(el)
        inherited = self.computed_style(parent) if parent is not None else ComputedStyle()
        decls = self._cascade(el, inherited.font_size)

        font_size = inherited.font_size
        font_weight = inherited.font_weight
        if "font" in decls:
            for token in _split_tokens(decls["font"].lower()):
                if token in _WEIGHT_KEYWORDS or token.isdigit():
                    font_weight = parse_font_weight(token, font_weight) or font_weight
                    continue
                size = parse_font_size(token.split("/")[0], inherited.font_size, ROOT_FONT_SIZE)
                if size is not None:
                    font_size = size
        if "font-size" in decls:
            size = parse_font_size(decls["font-size"], inherited.font_size, ROOT_FONT_SIZE)
            if size is not None:
                font_size = size
        if "font-weight" in decls:
            weight = parse_font_weight(decls["font-weight"], inherited.font_weight)
            if weight is not None:
                font_weight = weight

        color = inherited.color
        declared_color = decls.get("color")
        if declared_color and declared_color.lower() not in ("inherit", "currentcolor"):
            if parse_color(declared_color) is not None:
                color = declared_color

        background = "transparent"
        declared_bg = decls.get("background-color")
        if declared_bg is None and "background" in decls:
            declared_bg = _color_from_shorthand(decls["background"])
        if declared_bg:
            if declared_bg.lower() == "inherit":
                background = inherited.background_color
            elif parse_color(declared_bg) is not None:
                background = declared_bg

        background_image = decls.get("background-image", "none")
        if background_image == "none" and "url(" in decls.get("background", ""):
            background_image = next((
                t for t in _split_tokens(decls["background"]) if t.startswith("url(")
            ), "none")

        style = ComputedStyle(
            color=color,
            background_color=background,
            font_size=font_size,
            font_weight=font_weight,
            animation_name=self._active(decls, "animation-name", "animation"),
            transition_property=self._active(decls, "transition-property", "transition"),
            background_image=background_image,
            display=decls.get("display", "inline"),
            visibility=decls.get("visibility", inherited.visibility),
        )
        self._styles[key] = style
        return style

    @staticmethod
    def _active(decls: dict[str, str], longhand: str, shorthand: str) -> str:
        value = decls.get(longhand) or decls.get(shorthand)
        if not value or value.strip().lower() in ("none", "initial", "unset"):
            return "none"
        return value.strip()

    def materialize(self) -> None:
        """Resolve every computed style up front so later reads never write."""
        for el in self._elements:
            self.computed_style(el)

    # -- geometry ----------------------------------------------------------

    def bounding_box(self, el: Tag) -> Optional[BoundingBox]:
        style = self.computed_style(el)
        if style.display == "none":
            return None
        decls = self._cascades.get(id(el), {})
        width = self._dimension(el, decls, "width", style.font_size)
        height = self._dimension(el, decls, "height", style.font_size)
        if width is None or height is None:
            return None
        return BoundingBox(width, height)

    def _dimension(self, el: Tag, decls: dict[str, str], axis: str, font_size: float) -> Optional[float]:
        value = parse_length(decls.get(axis), font_size, ROOT_FONT_SIZE)
        if value is None:
            value = parse_length(self.attr(el, axis), font_size, ROOT_FONT_SIZE)
        if value is None:
            return None
        minimum = parse_length(decls.get(f"min-{axis}"), font_size, ROOT_FONT_SIZE)
        if minimum is not None:
            value = max(value, minimum)
        return value
