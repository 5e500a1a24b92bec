"""Shared CLI helpers."""

from pathlib import Path
from typing import Optional

from rich.console import Console

from ..config import ScanConfig, load_config
from ..exceptions import ErrorCode, ExportError
from ..insights.models import ComplianceLevel

console = Console()
err_console = Console(stderr=True)

# Weakest to strongest
COMPLIANCE_ORDER = (
    ComplianceLevel.NON_COMPLIANT,
    ComplianceLevel.A,
    ComplianceLevel.AA,
    ComplianceLevel.AAA,
)


def resolve_config(
    config: Optional[Path] = None,
    level: Optional[str] = None,
    tags: Optional[list[str]] = None,
    no_advanced: bool = False,
    no_semantic: bool = False,
    insights: bool = False,
    verbose: bool = False,
    quiet: bool = False,
) -> ScanConfig:
    """Build a ScanConfig from CLI options."""
    overrides: dict = {"verbose": verbose, "quiet": quiet}
    if level is not None:
        overrides["wcag_level"] = level.upper()
    if tags:
        overrides["tags"] = tuple(tags)
    if no_advanced:
        overrides["include_advanced"] = False
    if no_semantic:
        overrides["include_semantic"] = False
    if insights:
        overrides["include_ai"] = True
    return load_config(config_file=config, **overrides)


def meets_level(actual: ComplianceLevel, required: str) -> bool:
    """True when ``actual`` is at least as strong as ``required``."""
    return COMPLIANCE_ORDER.index(actual) >= COMPLIANCE_ORDER.index(ComplianceLevel(required.upper()))


def write_output(path: Path, content: str) -> None:
    try:
        path.write_text(content + "\n", encoding="utf-8")
    except OSError as e:
        raise ExportError(
            message=f"Cannot write report to {path}",
            code=ErrorCode.AX601,
            context={"path": str(path), "error": str(e)},
            recoverable=False,
            recovery_hint="Check that the output directory exists and is writable",
        ) from e
