"""Tests for the coded error taxonomy."""

import pytest

from a11y_insight.exceptions import (
    A11yInsightError,
    AdapterError,
    BaselineError,
    CodedError,
    ConfigurationError,
    DetectorError,
    DocumentLoadError,
    ErrorCode,
    ExportError,
    ScanError,
)


class TestErrorCode:
    """Test ErrorCode enum."""

    def test_code_families(self):
        """Codes are grouped by component: AX1xx adapter through AX6xx export."""
        assert ErrorCode.AX100.value == "AX100"  # Document could not be parsed
        assert ErrorCode.AX200.value == "AX200"  # Structural detector raised
        assert ErrorCode.AX300.value == "AX300"  # Semantic detector raised
        assert ErrorCode.AX400.value == "AX400"  # Baseline engine invocation failed
        assert ErrorCode.AX601.value == "AX601"  # Report file write failed
        assert ErrorCode.AX600.value == "AX600"  # Unknown export format

    def test_codes_unique(self):
        values = [c.value for c in ErrorCode]
        assert len(values) == len(set(values))

    def test_only_emitted_codes_declared(self):
        assert {c.value for c in ErrorCode} == {
            "AX100", "AX101", "AX102", "AX200", "AX300", "AX400", "AX401", "AX600", "AX601",
        }


class TestCodedError:
    """Test CodedError and its subclasses."""

    def test_str_includes_code(self):
        error = BaselineError(message="Cannot read baseline results", code=ErrorCode.AX400)
        assert str(error) == "[AX400] Cannot read baseline results"

    def test_defaults(self):
        error = ExportError(message="Unknown format", code=ErrorCode.AX600)
        assert error.recoverable
        assert error.context == {}
        assert error.recovery_hint is None

    def test_to_json(self):
        error = AdapterError(
            message="Stylesheet inaccessible",
            code=ErrorCode.AX101,
            context={"href": "https://cdn.example/site.css"},
            recoverable=True,
            recovery_hint="Inline the stylesheet",
        )
        assert error.to_json() == {
            "error_code": "AX101",
            "message": "Stylesheet inaccessible",
            "context": {"href": "https://cdn.example/site.css"},
            "recoverable": True,
            "recovery_hint": "Inline the stylesheet",
        }

    @pytest.mark.parametrize("cls", [AdapterError, DetectorError, BaselineError, ExportError])
    def test_subclasses_are_raisable(self, cls):
        with pytest.raises(CodedError):
            raise cls(message="x", code=ErrorCode.AX200)


class TestA11yInsightErrors:
    """Test the message/details exception hierarchy."""

    def test_details_in_str(self):
        error = A11yInsightError("Something failed", details={"key": "value"})
        assert str(error) == "Something failed (key=value)"

    def test_scan_error_keeps_cause(self):
        cause = RuntimeError("engine crashed")
        error = ScanError("engine crashed", cause=cause, url="page.html")
        assert error.cause is cause
        assert error.details == {"url": "page.html", "cause": "RuntimeError: engine crashed"}
        assert str(error).startswith("Accessibility scan failed: engine crashed")

    def test_document_load_error(self, tmp_path):
        error = DocumentLoadError(tmp_path / "x.html", "No such file")
        assert isinstance(error, A11yInsightError)
        assert error.details["reason"] == "No such file"

    def test_configuration_error_is_base(self):
        assert issubclass(ConfigurationError, A11yInsightError)
