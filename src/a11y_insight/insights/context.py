"""ScanContext - the read-only view every detector receives."""

from __future__ import annotations

from dataclasses import dataclass, field

from ..config import DEFAULT_CONFIG, ScanConfig, ThresholdConfig
from ..document.adapter import DocumentAdapter


@dataclass(frozen=True)
class ScanContext:
    document: DocumentAdapter
    config: ScanConfig = field(default=DEFAULT_CONFIG)

    @property
    def thresholds(self) -> ThresholdConfig:
        return self.config.thresholds

    @property
    def wcag_level(self) -> str:
        return self.config.wcag_level
