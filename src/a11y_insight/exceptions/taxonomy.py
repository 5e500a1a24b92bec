"""Coded error taxonomy with recovery hints.

Error Code Convention:
    AX1xx - Document adapter errors
    AX2xx - Structural analyzer errors
    AX3xx - Semantic analyzer errors
    AX4xx - Baseline rule engine errors
    AX6xx - Export errors
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCode(Enum):
    """Structured error codes for logging and debugging."""

    # Document adapter errors (AX1xx)
    AX100 = "AX100"  # Document could not be parsed
    AX101 = "AX101"  # Stylesheet inaccessible (cross-origin or external)
    AX102 = "AX102"  # Style block or selector unusable

    # Structural analyzer errors (AX2xx)
    AX200 = "AX200"  # Structural detector raised

    # Semantic analyzer errors (AX3xx)
    AX300 = "AX300"  # Semantic detector raised

    # Baseline errors (AX4xx)
    AX400 = "AX400"  # Baseline engine invocation failed
    AX401 = "AX401"  # Baseline results malformed

    # Export errors (AX6xx)
    AX600 = "AX600"  # Unknown export format
    AX601 = "AX601"  # Report file write failed


@dataclass
class CodedError(Exception):
    """Exception with structured context for logging.

    Attributes:
        message: Human-readable error description
        code: Structured error code for categorization
        context: Additional context (detector name, selector, etc.)
        recoverable: Whether the scan can continue past this error
        recovery_hint: Suggested fix for the user
    """

    message: str
    code: ErrorCode
    context: dict[str, Any] = field(default_factory=dict)
    recoverable: bool = True
    recovery_hint: str | None = None

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.message}"

    def __post_init__(self) -> None:
        super().__init__(str(self))

    def to_json(self) -> dict[str, Any]:
        """Structured logging format."""
        return {
            "error_code": self.code.value,
            "message": self.message,
            "context": self.context,
            "recoverable": self.recoverable,
            "recovery_hint": self.recovery_hint,
        }


class AdapterError(CodedError):
    """Errors while reading the document tree or its stylesheets (AX1xx)."""

    pass


class DetectorError(CodedError):
    """Errors raised inside a single detector (AX2xx / AX3xx)."""

    pass


class BaselineError(CodedError):
    """Errors reading or invoking the baseline rule engine (AX4xx)."""

    pass


class ExportError(CodedError):
    """Errors rendering or writing a report (AX6xx)."""

    pass
