"""Tests for SoupDocument - the BeautifulSoup document adapter."""

import logging

import pytest

from a11y_insight.document import BoundingBox, SoupDocument
from a11y_insight.exceptions import AdapterError, DocumentLoadError, ErrorCode


def _first(doc, selector):
    return doc.select(selector)[0]


class TestStructure:
    """Element access through the adapter."""

    def test_elements_in_document_order(self, make_doc):
        doc = make_doc("<h1>A</h1><p>B</p>")
        tags = [doc.tag(el) for el in doc.elements()]
        assert tags.index("h1") < tags.index("p")
        assert tags[0] == "html"

    def test_attr_joins_multivalued(self, make_doc):
        doc = make_doc("<div class='a b'>x</div>")
        assert doc.attr(_first(doc, "div"), "class") == "a b"
        assert doc.attr(_first(doc, "div"), "id") is None

    def test_parent_stops_at_html(self, make_doc):
        doc = make_doc("<p>x</p>")
        html = _first(doc, "html")
        assert doc.parent(html) is None
        assert [doc.tag(a) for a in doc.ancestors(_first(doc, "p"))] == ["body", "html"]

    def test_closest_is_inclusive(self, make_doc):
        doc = make_doc("<label>Name <input id='n'></label>")
        field = _first(doc, "input")
        assert doc.tag(doc.closest(field, "label")) == "label"
        assert doc.closest(field, "input") is field
        assert doc.closest(field, "form") is None

    def test_text_without_skips_matching_subtrees(self, make_doc):
        doc = make_doc("<div>Hello <nav>menu</nav>world<script>x()</script></div>")
        assert doc.text_without(_first(doc, "div"), "nav") == "Hello world"

    def test_outer_html_truncates(self, make_doc):
        doc = make_doc("<p>" + "x" * 500 + "</p>")
        html = doc.outer_html(_first(doc, "p"), limit=50)
        assert len(html) == 53
        assert html.endswith("...")

    @pytest.mark.parametrize(
        "markup, expected",
        [
            ("<button id='go'>Go</button>", "#go"),
            ("<button class='primary wide'>Go</button>", "button.primary"),
            ("<button>Go</button>", "button"),
        ],
    )
    def test_selector_for(self, make_doc, markup, expected):
        doc = make_doc(markup)
        assert doc.selector_for(_first(doc, "button")) == expected


class TestComputedStyle:
    """Cascade resolution from user-agent defaults, <style> and inline styles."""

    def test_defaults(self, make_doc):
        doc = make_doc("<p>x</p>")
        style = doc.computed_style(_first(doc, "p"))
        assert style.color == "rgb(0, 0, 0)"
        assert style.background_color == "transparent"
        assert style.font_size == 16.0
        assert style.display == "block"

    def test_heading_defaults(self, make_doc):
        doc = make_doc("<h1>x</h1>")
        style = doc.computed_style(_first(doc, "h1"))
        assert style.font_size == 32.0
        assert style.font_weight == 700

    def test_specificity_then_inline(self, make_doc):
        head = "<style>#x { color: blue } p { color: red }</style>"
        doc = make_doc("<p id='x'>a</p><p style='color: green'>b</p>", head)
        first, second = doc.select("p")
        assert doc.computed_style(first).color == "blue"
        assert doc.computed_style(second).color == "green"

    def test_important_beats_inline(self, make_doc):
        head = "<style>p { color: red !important }</style>"
        doc = make_doc("<p style='color: blue'>a</p>", head)
        assert doc.computed_style(_first(doc, "p")).color == "red"

    def test_color_and_font_inherit(self, make_doc):
        doc = make_doc("<div style='color: #333; font-size: 20px'><span>hi</span></div>")
        style = doc.computed_style(_first(doc, "span"))
        assert style.color == "#333"
        assert style.font_size == 20.0

    def test_background_does_not_inherit(self, make_doc):
        doc = make_doc("<div style='background: #000 url(a.png)'><span>hi</span></div>")
        div_style = doc.computed_style(_first(doc, "div"))
        assert div_style.background_color == "#000"
        assert div_style.background_image == "url(a.png)"
        assert doc.computed_style(_first(doc, "span")).background_color == "transparent"

    def test_font_shorthand(self, make_doc):
        doc = make_doc("<p style='font: bold 24px/1.5 serif'>x</p>")
        style = doc.computed_style(_first(doc, "p"))
        assert style.font_size == 24.0
        assert style.font_weight == 700

    def test_reduced_motion_media_does_not_apply(self, make_doc):
        head = (
            "<style>.spin { animation: spin 1s infinite }"
            "@media (prefers-reduced-motion: reduce) { .spin { animation: none } }</style>"
        )
        doc = make_doc("<div class='spin'>x</div>", head)
        assert doc.computed_style(_first(doc, "div")).is_animated

    def test_materialize_fills_every_style(self, make_doc):
        doc = make_doc("<p>x</p>")
        assert len(doc._styles) == len(doc.elements())


class TestStylesheets:
    def test_linked_stylesheet_counts_as_empty(self, make_doc):
        doc = make_doc("<p>x</p>", '<link rel="stylesheet" href="https://cdn.example/site.css">')
        assert doc.stylesheet_rules() == []

    def test_style_blocks_are_collected(self, make_doc):
        doc = make_doc("<p>x</p>", "<style>p { color: red }</style><style>a { color: blue }</style>")
        assert [r.selector for r in doc.stylesheet_rules()] == ["p", "a"]

    def test_unmatchable_selector_is_ignored(self, make_doc):
        head = "<style>p:unknown-pseudo(x) { color: red } p { color: blue }</style>"
        doc = make_doc("<p>x</p>", head)
        assert doc.computed_style(_first(doc, "p")).color == "blue"

    def test_skipped_stylesheets_are_logged_with_codes(self, make_doc, caplog):
        head = (
            '<link rel="stylesheet" href="https://cdn.example/site.css">'
            "<style>p:unknown-pseudo(x) { color: red }</style>"
        )
        with caplog.at_level(logging.DEBUG, logger="a11y_insight"):
            make_doc("<p>x</p>", head)
        assert "[AX101] Stylesheet 'https://cdn.example/site.css' inaccessible" in caplog.text
        assert "[AX102] Selector 'p:unknown-pseudo(x)' not matchable" in caplog.text


class TestBoundingBox:
    def test_declared_size(self, make_doc):
        doc = make_doc("<button style='width: 30px; height: 20px'>Go</button>")
        assert doc.bounding_box(_first(doc, "button")) == BoundingBox(30, 20)

    def test_attribute_size_and_min_size(self, make_doc):
        doc = make_doc("<img src='a.png' alt='A chart' width='40' height='40' style='min-height: 48px'>")
        assert doc.bounding_box(_first(doc, "img")) == BoundingBox(40, 48)

    def test_no_geometry(self, make_doc):
        doc = make_doc("<button>Go</button><a href='/' style='display: none; width: 5px; height: 5px'>x</a>")
        assert doc.bounding_box(_first(doc, "button")) is None
        assert doc.bounding_box(_first(doc, "a")) is None


class TestFromFile:
    def test_reads_file(self, tmp_path):
        path = tmp_path / "page.html"
        path.write_text("<html><body><h1>Hi</h1></body></html>", encoding="utf-8")
        doc = SoupDocument.from_file(path)
        assert doc.url == "page.html"
        assert len(doc.select("h1")) == 1

    def test_missing_file(self, tmp_path):
        with pytest.raises(DocumentLoadError):
            SoupDocument.from_file(tmp_path / "missing.html")

    def test_unknown_parser(self):
        with pytest.raises(AdapterError) as exc_info:
            SoupDocument("<p>x</p>", parser="no-such-parser")
        assert exc_info.value.code is ErrorCode.AX100
