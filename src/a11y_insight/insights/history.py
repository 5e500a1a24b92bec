"""Bounded in-memory scan history, most recent first."""

from __future__ import annotations

import threading
from typing import Optional

from .models import ScanReport


class ScanHistory:
    """Most-recent-first list of completed reports.

    ``record`` inserts and evicts under one lock, so concurrent scans never
    leave a partially updated history.
    """

    def __init__(self, max_size: int = 10):
        if max_size < 1:
            raise ValueError("max_size must be at least 1")
        self.max_size = max_size
        self._entries: list[ScanReport] = []
        self._lock = threading.Lock()

    def record(self, report: ScanReport) -> None:
        with self._lock:
            self._entries.insert(0, report)
            del self._entries[self.max_size :]

    def latest(self) -> Optional[ScanReport]:
        with self._lock:
            return self._entries[0] if self._entries else None

    def entries(self) -> tuple[ScanReport, ...]:
        with self._lock:
            return tuple(self._entries)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
