"""Tests for the structural detectors and StructuralAnalyzer."""

import logging

import pytest

from a11y_insight.config import ThresholdConfig
from a11y_insight.document.colors import RGBA
from a11y_insight.insights.models import Severity, StructuralCategory, WcagLevel
from a11y_insight.insights.protocols import StructuralDetector
from a11y_insight.insights.structural import (
    ContrastDetector,
    FormLabelDetector,
    HeadingStructureDetector,
    ImageAltDetector,
    KeyboardDetector,
    LandmarkDetector,
    MotionDetector,
    StructuralAnalyzer,
    TouchTargetDetector,
    get_default_detectors,
)
from a11y_insight.insights.structural.contrast import (
    contrast_severity,
    effective_background,
    is_large_text,
    required_ratio,
)
from a11y_insight.insights.structural.keyboard import simulate_tab_traversal, tab_order

TAB_TRAP = (
    "onkeydown=\"if (event.key === 'Tab') { event.preventDefault(); }\""
)


def _ids(findings):
    return [f.test_id for f in findings]


class TestContrastRules:
    """Thresholds behind the contrast detector."""

    @pytest.mark.parametrize(
        "size, weight, expected",
        [(18, 400, True), (17.9, 400, False), (14, 700, True), (14, 600, False), (13, 700, False)],
    )
    def test_large_text(self, size, weight, expected):
        assert is_large_text(size, weight) is expected

    def test_required_ratio_by_level(self):
        assert required_ratio("AA", large=False) == 4.5
        assert required_ratio("AA", large=True) == 3.0
        assert required_ratio("AAA", large=False) == 7.0
        assert required_ratio("AAA", large=True) == 4.5
        assert required_ratio("A", large=False) == 4.5

    def test_severity_bands(self):
        assert contrast_severity(2.9) is Severity.CRITICAL
        assert contrast_severity(3.0) is Severity.SERIOUS
        assert contrast_severity(4.49) is Severity.SERIOUS
        assert contrast_severity(5.0) is Severity.MODERATE

    def test_translucent_background_composites_over_white(self, make_doc):
        doc = make_doc("<div style='background-color: rgba(0, 0, 0, 0.5)'><p>Text here</p></div>")
        assert effective_background(doc, doc.select("p")[0]) == RGBA(128, 128, 128)

    def test_nearest_opaque_background_wins(self, make_doc):
        doc = make_doc("<div style='background: #000'><section><p>Text here</p></section></div>")
        assert effective_background(doc, doc.select("p")[0]) == RGBA(0, 0, 0)


class TestContrastDetector:
    def test_black_on_white_passes(self, make_ctx):
        assert ContrastDetector().detect(make_ctx("<p>Plenty of contrast here</p>")) == []

    def test_light_gray_is_critical(self, make_ctx):
        ctx = make_ctx("<p style='color: #999; background: #fff'>Some grey text here</p>")
        findings = ContrastDetector().detect(ctx)
        assert len(findings) == 1
        finding = findings[0]
        assert finding.test_id == "advanced-contrast-ratio"
        assert finding.severity is Severity.CRITICAL
        assert finding.category is StructuralCategory.CONTRAST
        assert finding.wcag_criterion == "1.4.3"
        assert finding.title.startswith("Insufficient Color Contrast (2.8")
        element = finding.elements[0]
        assert element.selector == "p"
        assert element.style_snapshot["color"] == "#999999"
        assert element.style_snapshot["backgroundColor"] == "#ffffff"
        assert 0 < finding.score < 100

    def test_mid_gray_is_serious_for_normal_text_only(self, make_ctx):
        normal = make_ctx("<p style='color: #777'>Some grey text here</p>")
        large = make_ctx("<p style='color: #777; font-size: 24px'>Some grey text here</p>")
        findings = ContrastDetector().detect(normal)
        assert [f.severity for f in findings] == [Severity.SERIOUS]
        assert ContrastDetector().detect(large) == []

    def test_aaa_uses_enhanced_requirement(self, make_ctx):
        body = "<p style='color: #767676'>Some grey text here</p>"
        assert ContrastDetector().detect(make_ctx(body)) == []
        findings = ContrastDetector().detect(make_ctx(body, wcag_level="AAA"))
        assert len(findings) == 1
        assert findings[0].wcag_criterion == "1.4.6"
        assert findings[0].wcag_level is WcagLevel.AAA
        assert findings[0].severity is Severity.MODERATE

    def test_short_text_is_skipped(self, make_ctx):
        assert ContrastDetector().detect(make_ctx("<p style='color: #eee'>ab</p>")) == []

    def test_large_bold_three_to_one_passes(self, make_ctx, mixed_issue_page):
        body = mixed_issue_page.split("<body>")[1].split("</body>")[0]
        assert ContrastDetector().detect(make_ctx(body)) == []


class TestHeadingStructureDetector:
    def test_sequential_outline_is_clean(self, make_ctx):
        ctx = make_ctx("<h1>A</h1><h2>B</h2><h3>C</h3><h2>D</h2><h2>E</h2>")
        assert HeadingStructureDetector().detect(ctx) == []

    def test_single_skip(self, make_ctx):
        findings = HeadingStructureDetector().detect(make_ctx("<h1>Top</h1><h4>Deep</h4>"))
        assert _ids(findings) == ["heading-level-skip"]
        skip = findings[0]
        assert skip.severity is Severity.MODERATE
        assert skip.score == 60
        assert skip.elements[0].selector == "h4"
        assert skip.elements[0].issue == "Skipped from H1 to H4"

    def test_no_headings_reports_missing_h1_only(self, make_ctx):
        findings = HeadingStructureDetector().detect(make_ctx("<p>No headings at all</p>"))
        assert _ids(findings) == ["missing-h1"]
        assert findings[0].severity is Severity.CRITICAL
        assert findings[0].score == 0
        assert findings[0].elements == ()

    def test_multiple_h1(self, make_ctx):
        findings = HeadingStructureDetector().detect(make_ctx("<h1>A</h1><h1>B</h1>"))
        assert _ids(findings) == ["multiple-h1"]
        assert findings[0].severity is Severity.SERIOUS
        assert findings[0].score == 25

    def test_skip_counted_between_consecutive_headings(self, make_ctx):
        ctx = make_ctx("<h2>A</h2><h4>B</h4><h3>C</h3><h5>D</h5>")
        findings = HeadingStructureDetector().detect(ctx)
        assert _ids(findings) == ["missing-h1", "heading-level-skip", "heading-level-skip"]


class TestKeyboardDetector:
    def test_native_controls_are_fine(self, make_ctx):
        ctx = make_ctx("<a href='/x'>Link</a><button>Go</button><div onclick='go()' tabindex='0'>Ok</div>")
        assert KeyboardDetector().detect(ctx) == []

    def test_click_only_and_removed(self, make_ctx):
        ctx = make_ctx(
            "<div id='menu' onclick='open()'>Menu</div>"
            "<span id='close' role='button' tabindex='-1'>X</span>"
        )
        findings = KeyboardDetector().detect(ctx)
        assert _ids(findings) == ["missing-keyboard-support"]
        issues = {e.selector: e.issue for e in findings[0].elements}
        assert issues["#menu"] == "Click handler without keyboard equivalent"
        assert issues["#close"] == 'Removed from tab order with tabindex="-1"'
        assert findings[0].score == 30

    def test_anchor_without_href_and_click_handler(self, make_ctx):
        findings = KeyboardDetector().detect(make_ctx("<a onclick='go()'>Go</a>"))
        assert _ids(findings) == ["missing-keyboard-support"]

    def test_sample_cap(self, make_ctx):
        body = "".join(f"<div onclick='f({i})'>Item {i}</div>" for i in range(6))
        ctx = make_ctx(body, thresholds=ThresholdConfig(keyboard_sample_cap=4))
        findings = KeyboardDetector().detect(ctx)
        assert len(findings[0].elements) == 4

    def test_focus_trap(self, make_ctx):
        ctx = make_ctx(
            f"<a href='/a'>A</a><input id='trap' aria-label='Code' {TAB_TRAP}><a href='/b'>B</a>"
        )
        findings = KeyboardDetector().detect(ctx)
        assert _ids(findings) == ["keyboard-trap"]
        trap = findings[0]
        assert trap.severity is Severity.CRITICAL
        assert trap.wcag_criterion == "2.1.2"
        assert [e.selector for e in trap.elements] == ["#trap"]

    def test_single_focusable_is_never_a_trap(self, make_ctx):
        ctx = make_ctx(f"<input id='only' aria-label='Code' {TAB_TRAP}>")
        assert KeyboardDetector().detect(ctx) == []

    def test_other_keys_are_not_a_trap(self, make_ctx):
        handler = "onkeydown=\"if (event.key === 'Enter') { event.preventDefault(); }\""
        ctx = make_ctx(f"<a href='/a'>A</a><input aria-label='Code' {handler}>")
        assert KeyboardDetector().detect(ctx) == []

    def test_focus_cycling_handler_is_not_a_trap(self, make_ctx):
        handler = (
            "onkeydown=\"if (event.key === 'Tab') { event.preventDefault(); "
            "document.getElementById('first').focus(); }\""
        )
        ctx = make_ctx(
            f"<a id='first' href='/a'>A</a><button aria-label='Close' {handler}>X</button>"
        )
        assert KeyboardDetector().detect(ctx) == []

    def test_tab_order_puts_positive_tabindex_first(self, make_doc):
        doc = make_doc(
            "<a id='a' href='/a'>A</a><a id='b' href='/b' tabindex='2'>B</a>"
            "<a id='c' href='/c' tabindex='1'>C</a>"
        )
        order = tab_order(doc, doc.select("a"))
        assert [doc.attr(el, "id") for el in order] == ["c", "b", "a"]

    def test_traversal_reports_each_trap_once(self, make_doc):
        doc = make_doc(f"<input id='t' {TAB_TRAP}><a href='/'>x</a>")
        traversal = simulate_tab_traversal(doc, doc.select("input, a"))
        assert len(traversal.order) == 2
        assert len(traversal.traps) == 1


class TestImageAltDetector:
    def test_good_and_decorative_images(self, make_ctx):
        ctx = make_ctx(
            "<img src='team.jpg' alt='Our team at the summer meetup'>"
            "<img src='line.png' alt=''>"
            "<img src='dots.png' role='presentation'>"
            "<img src='glow.png' aria-hidden='true'>"
            "<img src='map.png' aria-label='Office location map'>"
        )
        assert ImageAltDetector().detect(ctx) == []

    def test_problem_images(self, make_ctx):
        ctx = make_ctx(
            "<img id='none' src='a.jpg'>"
            "<img id='generic' src='b.jpg' alt='image'>"
            "<img id='camera' src='/up/DSC_0042.jpg' alt='DSC_0042'>"
            "<img id='filename' src='/img/chart.png?v=2' alt='chart.png'>"
            "<img id='short' src='c.jpg' alt='Al'>"
        )
        findings = ImageAltDetector().detect(ctx)
        assert _ids(findings) == ["image-alt-text-issues"]
        issues = {e.selector: e.issue for e in findings[0].elements}
        assert issues == {
            "#none": "Missing alt attribute",
            "#generic": 'Poor alt text: "image"',
            "#camera": 'Poor alt text: "DSC_0042"',
            "#filename": 'Poor alt text: "chart.png"',
            "#short": 'Poor alt text: "Al"',
        }
        assert findings[0].severity is Severity.SERIOUS
        assert findings[0].score == 20

    def test_suggestion_mentions_link_context(self, make_ctx):
        ctx = make_ctx("<a href='/'><img src='logo.png'></a>")
        element = ImageAltDetector().detect(ctx)[0].elements[0]
        assert "link/button context" in element.suggestion

    def test_custom_patterns(self, make_ctx):
        ctx = make_ctx("<img src='a.png' alt='banner graphic'>")
        assert ImageAltDetector().detect(ctx) == []
        assert len(ImageAltDetector(patterns=(r"graphic",)).detect(ctx)) == 1


class TestFormLabelDetector:
    def test_labelled_controls(self, make_ctx):
        ctx = make_ctx(
            "<form>"
            "<label for='email'>Email</label><input id='email' type='email'>"
            "<label>Phone <input type='tel'></label>"
            "<input type='search' aria-label='Search'>"
            "<span id='lbl'>Notes</span><textarea aria-labelledby='lbl'></textarea>"
            "<input type='hidden' name='csrf'><input type='submit' value='Send'>"
            "</form>"
        )
        assert FormLabelDetector().detect(ctx) == []

    def test_unlabelled_controls(self, make_ctx):
        ctx = make_ctx("<input type='text' id='name'><select id='size'></select><textarea></textarea>")
        findings = FormLabelDetector().detect(ctx)
        assert _ids(findings) == ["form-labels-missing"]
        assert [e.selector for e in findings[0].elements] == ["#name", "#size", "textarea"]
        assert findings[0].score == 15

    def test_label_for_other_id_does_not_count(self, make_ctx):
        ctx = make_ctx("<label for='other'>Name</label><input id='name'>")
        assert len(FormLabelDetector().detect(ctx)) == 1


class TestTouchTargetDetector:
    def test_small_target(self, make_ctx):
        ctx = make_ctx("<button style='width: 30px; height: 30px'>Go</button>")
        findings = TouchTargetDetector().detect(ctx)
        assert _ids(findings) == ["touch-target-size"]
        assert findings[0].wcag_level is WcagLevel.AA
        assert findings[0].elements[0].issue == "Size: 30×30px"

    def test_large_or_unmeasured_targets(self, make_ctx):
        ctx = make_ctx("<button style='width: 48px; height: 48px'>OK</button><button>Any</button>")
        assert TouchTargetDetector().detect(ctx) == []

    def test_icon_inside_empty_link_is_exempt(self, make_ctx):
        ctx = make_ctx("<a href='/'><span onclick='x()' style='width: 10px; height: 10px'></span></a>")
        assert TouchTargetDetector().detect(ctx) == []

    def test_configurable_minimum(self, make_ctx):
        body = "<button style='width: 30px; height: 30px'>Go</button>"
        ctx = make_ctx(body, thresholds=ThresholdConfig(touch_target_min_px=24))
        assert TouchTargetDetector().detect(ctx) == []


class TestLandmarkDetector:
    def test_single_main(self, make_ctx):
        assert LandmarkDetector().detect(make_ctx("<main><p>x</p></main>")) == []

    def test_missing_main(self, make_ctx):
        findings = LandmarkDetector().detect(make_ctx("<div><p>x</p></div>"))
        assert _ids(findings) == ["missing-main-landmark"]
        assert findings[0].elements[0].selector == "body"
        assert findings[0].category is StructuralCategory.ARIA
        assert findings[0].score == 70

    def test_multiple_mains(self, make_ctx):
        findings = LandmarkDetector().detect(make_ctx("<main>a</main><div role='main'>b</div>"))
        assert _ids(findings) == ["multiple-main-landmarks"]
        assert len(findings[0].elements) == 2


class TestMotionDetector:
    def test_animation_without_reduced_motion(self, make_ctx):
        ctx = make_ctx(
            "<div class='spinner'>x</div><div style='transition: opacity 0.3s'>y</div>",
            head="<style>.spinner { animation: spin 1s linear infinite }</style>",
        )
        findings = MotionDetector().detect(ctx)
        assert _ids(findings) == ["motion-without-reduced-motion"]
        assert len(findings[0].elements) == 2

    def test_animate_class_name(self, make_ctx):
        findings = MotionDetector().detect(make_ctx("<div class='fade animated'>x</div>"))
        assert len(findings) == 1

    def test_reduced_motion_query_suppresses(self, make_ctx):
        head = (
            "<style>.spinner { animation: spin 1s infinite }"
            "@media (prefers-reduced-motion: reduce) { .spinner { animation: none } }</style>"
        )
        assert MotionDetector().detect(make_ctx("<div class='spinner'>x</div>", head)) == []

    def test_sample_cap(self, make_ctx):
        body = "".join(f"<div class='animate-{i}'>{i}</div>" for i in range(7))
        findings = MotionDetector().detect(make_ctx(body))
        assert len(findings[0].elements) == 5


class _ExplodingDetector:
    name = "exploding"
    category = "structure"
    wcag_criterion = "0.0.0"

    def detect(self, ctx):
        raise RuntimeError("boom")


class TestStructuralAnalyzer:
    def test_default_detector_order(self):
        names = [d.name for d in get_default_detectors()]
        assert names == [
            "contrast", "headings", "keyboard", "images", "forms", "touch", "landmarks", "motion",
        ]

    def test_clean_page_has_no_findings(self, make_ctx, clean_page):
        body = clean_page.split("<body>")[1].split("</body>")[0]
        assert StructuralAnalyzer().analyze(make_ctx(body)) == ()

    def test_failing_detector_is_isolated(self, make_ctx, caplog):
        analyzer = StructuralAnalyzer([_ExplodingDetector(), HeadingStructureDetector()])
        with caplog.at_level(logging.WARNING, logger="a11y_insight"):
            findings = analyzer.analyze(make_ctx("<p>No headings</p>"))
        assert _ids(findings) == ["missing-h1"]
        assert "Detector exploding failed: boom" in caplog.text

    def test_findings_follow_detector_order(self, make_ctx):
        findings = StructuralAnalyzer().analyze(make_ctx("<input id='q'><h2>Sub</h2>"))
        assert _ids(findings) == ["missing-h1", "form-labels-missing", "missing-main-landmark"]

    def test_default_detectors_follow_protocol(self):
        for detector in get_default_detectors():
            for attr in StructuralDetector.__annotations__:
                assert isinstance(getattr(detector, attr), str), (detector, attr)
            assert callable(detector.detect)
