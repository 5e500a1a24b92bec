"""Insight engine - baseline results, structural and semantic findings, scores."""

from .baseline import BaselineRunner, JsonBaselineRunner, NullBaselineRunner, StaticBaselineRunner
from .context import ScanContext
from .history import ScanHistory
from .protocols import SemanticDetector, StructuralDetector
from .models import (
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
from .scanner import Scanner

__all__ = [
    "Scanner",
    "ScanContext",
    "ScanHistory",
    "StructuralDetector",
    "SemanticDetector",
    "BaselineRunner",
    "JsonBaselineRunner",
    "NullBaselineRunner",
    "StaticBaselineRunner",
    "AffectedElement",
    "BaselineResults",
    "Compliance",
    "ComplianceLevel",
    "InsightSummary",
    "RuleNode",
    "RuleResult",
    "ScanReport",
    "Scores",
    "SemanticCategory",
    "SemanticElement",
    "SemanticFinding",
    "Severity",
    "StructuralCategory",
    "StructuralFinding",
    "WcagLevel",
]
