"""Configuration loading and management for a11y-insight.

Configuration sources are merged in priority order:
    1. Defaults (defined in ScanConfig)
    2. Global config (~/.a11y-insight.toml)
    3. Project config (./a11y-insight.toml)
    4. Explicit config file
    5. Environment variables (A11Y_* prefix)
    6. CLI overrides (passed as kwargs)

Example:
    >>> config = load_config(wcag_level="AAA", include_ai=True)
    >>> config.wcag_level
    'AAA'
    >>> config.weights.structural["critical"]
    25.0
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import ConfigurationError

Verbosity = Literal["quiet", "normal", "verbose"]
WcagLevel = Literal["A", "AA", "AAA"]

SEVERITIES = ("critical", "serious", "moderate", "minor")
WCAG_LEVELS = ("A", "AA", "AAA")


def _structural_weights() -> dict[str, float]:
    return {"critical": 25.0, "serious": 15.0, "moderate": 8.0, "minor": 3.0}


def _semantic_weights() -> dict[str, float]:
    return {"critical": 20.0, "serious": 12.0, "moderate": 6.0, "minor": 2.0}


@dataclass(frozen=True)
class SeverityWeights:
    """Scoring policy: penalty per finding severity.

    Structural findings weigh more than semantic ones because they describe
    hard barriers; semantic findings describe friction.

    Attributes:
        structural: severity -> penalty for structural findings
        semantic: severity -> penalty for semantic findings
        cognitive_load_ceiling: summed cognitive load that maps to a cognitive
            score of zero
    """

    structural: dict[str, float] = field(default_factory=_structural_weights)
    semantic: dict[str, float] = field(default_factory=_semantic_weights)
    cognitive_load_ceiling: float = 50.0

    def __post_init__(self) -> None:
        for table_name in ("structural", "semantic"):
            table = getattr(self, table_name)
            missing = [s for s in SEVERITIES if s not in table]
            if missing:
                raise ValueError(f"{table_name} weights missing severities: {', '.join(missing)}")
            unknown = [s for s in table if s not in SEVERITIES]
            if unknown:
                raise ValueError(f"{table_name} weights has unknown severities: {', '.join(unknown)}")
            for severity, weight in table.items():
                if weight < 0:
                    raise ValueError(f"{table_name} weight for {severity} must be non-negative")
        if self.cognitive_load_ceiling <= 0:
            raise ValueError("cognitive_load_ceiling must be positive")

    def structural_weight(self, severity: str) -> float:
        return self.structural[severity]

    def semantic_weight(self, severity: str) -> float:
        return self.semantic[severity]


@dataclass(frozen=True)
class ThresholdConfig:
    """Detector thresholds and sample caps.

    Attributes:
        Structural:
            min_text_length: Shortest trimmed text that is contrast-checked
            min_alt_length: Alt text shorter than this is low quality
            touch_target_min_px: Minimum width and height of a touch target
            keyboard_sample_cap: Max elements on the keyboard-support finding
            touch_sample_cap: Max elements on the touch-target finding
            motion_sample_cap: Max elements on the motion-safety finding

        Semantic:
            readability_block_min_chars: Text blocks shorter than this are skipped
            readability_moderate: Flesch score below this is a moderate finding
            readability_serious: Flesch score below this is a serious finding
            link_sample_cap: Max links on the ambiguous-link finding
            link_context_chars: Characters of surrounding text kept per link
            jargon_sample_cap: Max terms on the jargon finding
            jargon_context_chars: Characters of context on each side of a term
            form_load_moderate: Form complexity above this is a moderate finding
            form_load_serious: Form complexity above this is a serious finding
    """

    # === Structural ===
    min_text_length: int = 3
    min_alt_length: int = 3
    touch_target_min_px: float = 44.0
    keyboard_sample_cap: int = 10
    touch_sample_cap: int = 10
    motion_sample_cap: int = 5

    # === Semantic ===
    readability_block_min_chars: int = 50
    readability_moderate: float = 60.0
    readability_serious: float = 40.0
    link_sample_cap: int = 10
    link_context_chars: int = 50
    jargon_sample_cap: int = 5
    jargon_context_chars: int = 30
    form_load_moderate: float = 7.0
    form_load_serious: float = 8.5

    def __post_init__(self) -> None:
        """Validate threshold configuration."""
        caps = [
            "keyboard_sample_cap",
            "touch_sample_cap",
            "motion_sample_cap",
            "link_sample_cap",
            "jargon_sample_cap",
        ]
        for field_name in caps:
            if getattr(self, field_name) < 1:
                raise ValueError(f"{field_name} must be at least 1")

        if self.touch_target_min_px <= 0:
            raise ValueError("touch_target_min_px must be positive")
        if self.readability_serious > self.readability_moderate:
            raise ValueError("readability_serious must not exceed readability_moderate")
        if self.form_load_serious < self.form_load_moderate:
            raise ValueError("form_load_serious must not be below form_load_moderate")
        if self.min_text_length < 0 or self.min_alt_length < 0:
            raise ValueError("minimum lengths must be non-negative")


@dataclass(frozen=True)
class ScanConfig:
    """Configuration accepted by the scan entry point.

    Attributes:
        include_advanced: Run the structural analyzer
        include_semantic: Run the semantic analyzer
        include_ai: Attach a rule-based insight summary to the report
        wcag_level: Baseline rule tag-set to request (A, AA or AAA)
        tags: Extra baseline rule tags appended to the level's tag-set
        history_size: Capacity of the history a Scanner keeps when none is given
        verbosity: Logging verbosity level
        weights: Severity weight tables used by scoring
        thresholds: Detector thresholds and sample caps
    """

    include_advanced: bool = True
    include_semantic: bool = True
    include_ai: bool = False
    wcag_level: WcagLevel = "AA"
    tags: tuple[str, ...] = ()
    history_size: int = 10
    verbosity: Verbosity = "normal"

    weights: SeverityWeights = field(default_factory=SeverityWeights)
    thresholds: ThresholdConfig = field(default_factory=ThresholdConfig)

    def __post_init__(self) -> None:
        if self.wcag_level not in WCAG_LEVELS:
            raise ValueError(f"wcag_level must be one of {', '.join(WCAG_LEVELS)}")
        if self.history_size < 1:
            raise ValueError("history_size must be at least 1")
        if self.verbosity not in ("quiet", "normal", "verbose"):
            raise ValueError("verbosity must be quiet, normal or verbose")
        if not isinstance(self.tags, tuple):
            object.__setattr__(self, "tags", tuple(self.tags))

    @property
    def baseline_tags(self) -> list[str]:
        """Baseline rule tags requested for this configuration."""
        tags = ["wcag2a"]
        if self.wcag_level in ("AA", "AAA"):
            tags.append("wcag2aa")
        if self.wcag_level == "AAA":
            tags.append("wcag2aaa")
        tags.extend(self.tags)
        return tags


DEFAULT_CONFIG = ScanConfig()


def load_config(config_file: Optional[Path] = None, **overrides) -> ScanConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags)

    Returns:
        Validated ScanConfig instance

    Raises:
        ConfigurationError: If a config file is invalid or missing
    """
    merged: dict = {}

    global_config = Path.home() / ".a11y-insight.toml"
    if global_config.exists():
        try:
            merged.update(_load_toml_file(global_config))
        except Exception as e:
            raise ConfigurationError(f"Invalid global config '{global_config}': {e}")

    project_config = Path.cwd() / "a11y-insight.toml"
    if project_config.exists():
        try:
            merged.update(_load_toml_file(project_config))
        except Exception as e:
            raise ConfigurationError(f"Invalid project config '{project_config}': {e}")

    if config_file is not None:
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        try:
            merged.update(_load_toml_file(config_file))
        except Exception as e:
            raise ConfigurationError(f"Invalid config file '{config_file}': {e}")

    merged.update(_load_env_vars())

    if "verbose" in overrides:
        if overrides["verbose"]:
            overrides["verbosity"] = "verbose"
        del overrides["verbose"]
    if "quiet" in overrides:
        if overrides["quiet"]:
            overrides["verbosity"] = "quiet"
        del overrides["quiet"]

    merged.update({k: v for k, v in overrides.items() if v is not None})

    if "tags" in merged:
        merged["tags"] = tuple(merged["tags"])

    thresholds_dict = merged.pop("thresholds", None)
    if thresholds_dict is not None:
        if isinstance(thresholds_dict, dict):
            try:
                merged["thresholds"] = ThresholdConfig(**thresholds_dict)
            except (TypeError, ValueError) as e:
                raise ConfigurationError(f"Invalid [thresholds] config: {e}")
        elif isinstance(thresholds_dict, ThresholdConfig):
            merged["thresholds"] = thresholds_dict

    weights_dict = merged.pop("weights", None)
    if weights_dict is not None:
        if isinstance(weights_dict, dict):
            try:
                merged["weights"] = _weights_from_dict(weights_dict)
            except (TypeError, ValueError) as e:
                raise ConfigurationError(f"Invalid [weights] config: {e}")
        elif isinstance(weights_dict, SeverityWeights):
            merged["weights"] = weights_dict

    try:
        return ScanConfig(**merged)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid configuration: {e}")


def _weights_from_dict(data: dict[str, Any]) -> SeverityWeights:
    """Build SeverityWeights from a [weights] table, filling unset severities."""
    kwargs: dict[str, Any] = {}
    if "structural" in data:
        kwargs["structural"] = {**_structural_weights(), **_floats(data["structural"])}
    if "semantic" in data:
        kwargs["semantic"] = {**_semantic_weights(), **_floats(data["semantic"])}
    if "cognitive_load_ceiling" in data:
        kwargs["cognitive_load_ceiling"] = float(data["cognitive_load_ceiling"])
    unknown = set(data) - {"structural", "semantic", "cognitive_load_ceiling"}
    if unknown:
        raise TypeError(f"unknown keys: {', '.join(sorted(unknown))}")
    return SeverityWeights(**kwargs)


def _floats(table: dict[str, Any]) -> dict[str, float]:
    return {str(k): float(v) for k, v in table.items()}


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from A11Y_* environment variables.

    Supported environment variables:
        A11Y_INCLUDE_ADVANCED: bool (true/false/1/0)
        A11Y_INCLUDE_SEMANTIC: bool
        A11Y_INCLUDE_AI: bool
        A11Y_WCAG_LEVEL: A/AA/AAA
        A11Y_HISTORY_SIZE: int
        A11Y_VERBOSITY: quiet/normal/verbose
    """
    type_hints = get_type_hints(ScanConfig)

    result: dict[str, Any] = {}

    for field_name in ScanConfig.__dataclass_fields__:
        env_key = f"A11Y_{field_name.upper()}"
        env_value = os.environ.get(env_key)

        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        if type_hint is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hint)
            if parsed is not None:
                result[field_name] = parsed
        except ValueError as e:
            raise ConfigurationError(f"Invalid {env_key}: {e}")

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse environment variable string to the correct type.

    Returns None for types that cannot be expressed as a single variable.
    """
    origin = getattr(type_hint, "__origin__", None)

    if origin is tuple or type_hint is tuple:
        return None

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        elif lower in ("false", "0", "no", "off"):
            return False
        else:
            raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    if type_hint is float:
        return float(value)

    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict.

    Raises:
        ConfigurationError: If no TOML parser is available
        Exception: If TOML parsing fails
    """
    try:
        import tomllib
    except ModuleNotFoundError:
        try:
            import tomli as tomllib  # type: ignore
        except ImportError:
            raise ConfigurationError(
                "TOML support requires Python 3.11+ or 'tomli' package. "
                "Install with: pip install tomli"
            )

    with open(path, "rb") as f:
        return tomllib.load(f)
