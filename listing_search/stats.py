"""Query counters kept by the web layer for the metrics endpoint."""

import threading
from collections import Counter
from typing import Any, Dict


class SearchStats:
    """Thread-safe counters for search requests."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.reset()

    def record(self, mode: str, total_results: int, execution_time_ms: float) -> None:
        """
        Record a completed query.

        Args:
            mode: Search mode (simple, advanced, location, browse, suggest)
            total_results: Number of matches
            execution_time_ms: Time spent in the engine
        """
        with self._lock:
            self._by_mode[mode] += 1
            self._total_execution_time += execution_time_ms
            if total_results == 0:
                self._empty_results += 1

    def record_failure(self, mode: str) -> None:
        """Record a query that raised."""
        with self._lock:
            self._by_mode[mode] += 1
            self._failed += 1

    def snapshot(self) -> Dict[str, Any]:
        """Get a copy of the counters with derived rates."""
        with self._lock:
            total = sum(self._by_mode.values())
            succeeded = total - self._failed
            return {
                "total_queries": total,
                "queries_by_mode": dict(self._by_mode),
                "empty_results": self._empty_results,
                "failed_queries": self._failed,
                "average_response_time_ms": (
                    self._total_execution_time / succeeded if succeeded else 0.0
                ),
                "error_rate": self._failed / total if total else 0.0,
            }

    def reset(self) -> None:
        """Zero all counters."""
        with self._lock:
            self._by_mode: Counter = Counter()
            self._empty_results = 0
            self._failed = 0
            self._total_execution_time = 0.0
