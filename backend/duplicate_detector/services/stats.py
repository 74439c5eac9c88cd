"""Process-local counters for the ``/duplicates/metrics`` endpoint.

Counters live for the lifetime of the process and are reset on restart.
They are shared by all request threads, so every update goes through a
lock.
"""

from __future__ import annotations

import threading
import time
from typing import Any, Dict


class DuplicateCheckStats:
    """Running totals of duplicate checks served by this process."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._started = time.monotonic()
        self.reset()

    def reset(self) -> None:
        with self._lock:
            self._batch_checks = 0
            self._single_checks = 0
            self._receipts_checked = 0
            self._groups_found = 0
            self._duplicates_found = 0
            self._single_matches = 0
            self._failures = 0
            self._processing_ms = 0.0

    def record_batch(self, receipts: int, groups: int, duplicates: int, elapsed_ms: float) -> None:
        with self._lock:
            self._batch_checks += 1
            self._receipts_checked += receipts
            self._groups_found += groups
            self._duplicates_found += duplicates
            self._processing_ms += elapsed_ms

    def record_single(self, existing: int, matches: int, elapsed_ms: float) -> None:
        with self._lock:
            self._single_checks += 1
            self._receipts_checked += existing + 1
            self._single_matches += matches
            self._processing_ms += elapsed_ms

    def record_failure(self) -> None:
        with self._lock:
            self._failures += 1

    def snapshot(self) -> Dict[str, Any]:
        with self._lock:
            checks = self._batch_checks + self._single_checks
            return {
                "batch_checks": self._batch_checks,
                "single_checks": self._single_checks,
                "receipts_checked": self._receipts_checked,
                "duplicate_groups_found": self._groups_found,
                "duplicates_found": self._duplicates_found,
                "single_matches_found": self._single_matches,
                "failures": self._failures,
                "average_processing_time_ms": round(self._processing_ms / checks, 3) if checks else 0.0,
                "uptime_seconds": round(time.monotonic() - self._started, 3),
            }


stats = DuplicateCheckStats()
