"""Metrics service for tracking API performance.

Process-wide counters for recommendation-style calls (chat, search,
seasonal picks, history recommendations) broken down by endpoint, plus
counts of inbound co-browsing events by name.
"""

import threading
import time
from collections import Counter
from dataclasses import dataclass
from typing import Dict


@dataclass
class LatencyStats:
    count: int = 0
    total_ms: float = 0.0
    min_ms: float = float("inf")
    max_ms: float = 0.0

    def add(self, latency_ms: float) -> None:
        self.count += 1
        self.total_ms += latency_ms
        self.min_ms = min(self.min_ms, latency_ms)
        self.max_ms = max(self.max_ms, latency_ms)

    def as_dict(self) -> Dict[str, float]:
        return {
            "count": self.count,
            "average_latency_ms": round(self.total_ms / self.count, 2) if self.count else 0.0,
            "min_latency_ms": round(self.min_ms, 2) if self.count else 0.0,
            "max_latency_ms": round(self.max_ms, 2),
        }


class MetricsService:
    """Thread-safe in-memory metrics.

    Route handlers run in the threadpool while WebSocket handlers run on
    the event loop, so every update takes the same lock.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.reset()

    def record_recommendation(self, latency_ms: float, endpoint: str = "chat") -> None:
        """Record one recommendation call and its latency.

        Args:
            latency_ms: Time spent producing the result, in milliseconds.
            endpoint: Short name of the endpoint that produced it.
        """
        with self._lock:
            self._overall.add(latency_ms)
            self._by_endpoint.setdefault(endpoint, LatencyStats()).add(latency_ms)

    def record_cobrowse_event(self, event: str) -> None:
        """Count one inbound co-browsing event by name."""
        with self._lock:
            self._cobrowse_events[event] += 1

    def get_metrics(self) -> Dict:
        """Get current metrics.

        Returns:
            Dictionary with:
            - recommendation_count: Total number of recommendation calls
            - average_latency_ms / min_latency_ms / max_latency_ms: Over all calls
            - endpoints: The same figures per endpoint
            - cobrowse_events: Inbound co-browsing events by name
            - uptime_seconds: Time since the counters were last reset
        """
        with self._lock:
            overall = self._overall.as_dict()
            return {
                "recommendation_count": overall.pop("count"),
                **overall,
                "endpoints": {
                    name: stats.as_dict() for name, stats in sorted(self._by_endpoint.items())
                },
                "cobrowse_events": dict(self._cobrowse_events),
                "uptime_seconds": round(time.monotonic() - self._started, 1),
            }

    def reset(self) -> None:
        """Reset all metrics (used by the tests)."""
        with self._lock:
            self._overall = LatencyStats()
            self._by_endpoint: Dict[str, LatencyStats] = {}
            self._cobrowse_events: Counter = Counter()
            self._started = time.monotonic()


# Global instance shared by all routes
metrics_service = MetricsService()
