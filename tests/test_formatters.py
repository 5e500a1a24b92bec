"""Tests for report formatters."""

import csv
import io
import json

import pytest

from a11y_insight.formatters import (
    CsvFormatter,
    JsonFormatter,
    QuietFormatter,
    RichFormatter,
    get_formatter,
)
from a11y_insight.formatters.csv_formatter import HEADERS
from a11y_insight.insights.models import (
    AffectedElement,
    BaselineResults,
    Compliance,
    ComplianceLevel,
    InsightSummary,
    RuleNode,
    RuleResult,
    ScanReport,
    Scores,
    SemanticCategory,
    SemanticElement,
    SemanticFinding,
    Severity,
    StructuralCategory,
    StructuralFinding,
    WcagLevel,
)


@pytest.fixture
def report():
    violation = RuleResult(
        id="link-name",
        impact=None,
        description='Ensures links have "discernible" text, always',
        help="Links must have discernible text",
        help_url="https://dequeuniversity.com/rules/axe/4.8/link-name",
        tags=("cat.name-role-value", "wcag2a", "wcag412"),
        nodes=(RuleNode(html="<a href='/'></a>", target=("nav > a", "#frame")),),
    )
    structural = StructuralFinding(
        test_id="form-labels-missing",
        wcag_level=WcagLevel.A,
        category=StructuralCategory.FORMS,
        severity=Severity.SERIOUS,
        title="Form Controls Missing Labels",
        description="All form controls must have accessible labels for screen reader users.",
        wcag_criterion="1.3.1",
        elements=(
            AffectedElement(
                selector="input.name, input.email",
                snapshot="<input class='name'>",
                issue="No associated label found",
                suggestion='Add a <label for="..."> element',
                style_snapshot={"color": "#000000", "backgroundColor": "#ffffff"},
            ),
        ),
        score=15,
        algorithm="Label Association Analysis",
        auto_fixable=True,
    )
    semantic = SemanticFinding(
        test_id="technical-jargon",
        category=SemanticCategory.COGNITIVE,
        severity=Severity.MINOR,
        title="Technical Jargon Detected",
        description="Content contains technical terms.",
        suggested_fixes=("Provide a glossary", "Use simpler language"),
        elements=(SemanticElement("body", "our API", 'Technical term: "API"', 4),),
        confidence=70,
        explanation="Jargon is a barrier.",
    )
    return ScanReport(
        url="https://example.com/signup",
        timestamp="2024-05-01T12:00:00+00:00",
        baseline=BaselineResults(violations=(violation,)),
        structural_findings=(structural,),
        semantic_findings=(semantic,),
        scores=Scores(overall=90.5, wcag_a=0.0, semantic=98.0, cognitive=92.0),
        compliance=Compliance(ComplianceLevel.NON_COMPLIANT, 0.0, 0, 3),
        scan_duration_ms=12.5,
        elements_analyzed=42,
        insights=InsightSummary("Found 3 accessibility improvements.", ("Add labels",), "2 hours"),
        test_engine={"name": "axe-core", "version": "4.8.2"},
    )


class TestGetFormatter:
    @pytest.mark.parametrize(
        "name, cls",
        [("rich", RichFormatter), ("json", JsonFormatter), ("csv", CsvFormatter), ("quiet", QuietFormatter)],
    )
    def test_known(self, name, cls):
        assert isinstance(get_formatter(name), cls)

    def test_unknown(self):
        with pytest.raises(ValueError, match="Unknown formatter"):
            get_formatter("xml")


class TestJsonFormatter:
    def test_wire_shape(self, report):
        data = json.loads(JsonFormatter().format(report))
        assert data["url"] == "https://example.com/signup"
        assert data["violations"][0]["id"] == "link-name"
        assert data["passes"] == []
        assert data["advancedViolations"][0]["wcagLevel"] == "A"
        assert data["advancedViolations"][0]["elements"][0]["styleSnapshot"]["color"] == "#000000"
        assert data["semanticIssues"][0]["explanation"] == "Jargon is a barrier."
        assert data["semanticIssues"][0]["elements"][0]["issueText"] == 'Technical term: "API"'
        assert data["scores"]["wcagAA"] == 100.0
        assert data["compliance"]["level"] == "Non-compliant"
        assert data["aiInsights"]["estimatedFixTime"] == "2 hours"
        assert data["testEngine"]["version"] == "4.8.2"

    def test_finding_wire_keys(self, report):
        data = report.to_dict()
        structural = data["advancedViolations"][0]
        assert structural["algorithmName"] == "Label Association Analysis"
        assert structural["elements"][0]["snapshot"] == "<input class='name'>"
        assert structural["elements"][0]["issueText"] == "No associated label found"
        assert "level" not in structural

    def test_round_trip(self, report):
        assert ScanReport.from_dict(json.loads(JsonFormatter().format(report))) == report


class TestCsvFormatter:
    """CSV export quoting and row layout."""

    def _rows(self, report):
        return list(csv.reader(io.StringIO(CsvFormatter().format(report))))

    def test_header_and_rows(self, report):
        rows = self._rows(report)
        assert tuple(rows[0]) == HEADERS
        assert len(rows) == 4

    def test_baseline_row(self, report):
        row = self._rows(report)[1]
        assert row == [
            "Axe Core Violation",
            "unknown",
            "link-name",
            'Ensures links have "discernible" text, always',
            "nav > a, #frame",
            "wcag2a, wcag412",
            "Links must have discernible text",
        ]

    def test_structural_and_semantic_rows(self, report):
        structural, semantic = self._rows(report)[2:]
        assert structural[0] == "Advanced Analysis"
        assert structural[4] == "input.name, input.email"
        assert structural[6] == 'Add a <label for="..."> element'
        assert semantic[0] == "Semantic Analysis"
        assert semantic[5] == "Semantic/Cognitive"
        assert semantic[6] == "Provide a glossary; Use simpler language"

    def test_every_cell_quoted(self, report):
        text = CsvFormatter().format(report)
        assert text.startswith('"Type","Severity","Rule ID"')
        assert '"Ensures links have ""discernible"" text, always"' in text
        assert not text.endswith("\n")


class TestQuietFormatter:
    def test_one_line(self, report):
        assert QuietFormatter().format(report) == "Non-compliant 90.5"


class TestRichFormatter:
    def test_format_contains_sections(self, report):
        text = RichFormatter().format(report)
        assert "Accessibility Scan" in text
        assert "Baseline Violations (1)" in text
        assert "Structural Findings (1)" in text
        assert "Semantic Findings (1)" in text
        assert "Found 3 accessibility improvements." in text
        assert "Non-compliant" in text
