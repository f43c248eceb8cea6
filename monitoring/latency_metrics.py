"""
Latency metrics collection and analysis.

Tracks:
- P50, P95, P99 latencies across all requests
- Per-query latencies (bridge, augment, path, pagerank, walk, build)
- Query counts
"""

import time
from collections import deque
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Deque, Dict, Iterator, List, Optional

QUERY_KINDS = ("build", "bridge", "augment", "shortest_path", "pagerank", "random_walk")


@dataclass
class LatencyMetrics:
    """Latency for a single request."""

    total_ms: float
    query_kind: Optional[str] = None
    request_id: Optional[str] = None


def percentiles(values: List[float]) -> Dict[str, float]:
    """p50/p95/p99 plus mean, min and max of a sample."""
    if not values:
        return {key: 0.0 for key in ("p50", "p95", "p99", "mean", "min", "max")}

    sorted_values = sorted(values)
    n = len(sorted_values)

    return {
        "p50": sorted_values[int(n * 0.50)],
        "p95": sorted_values[min(int(n * 0.95), n - 1)],
        "p99": sorted_values[min(int(n * 0.99), n - 1)],
        "mean": sum(sorted_values) / n,
        "min": sorted_values[0],
        "max": sorted_values[-1],
    }


class LatencyCollector:
    """
    Collect and analyze latency metrics.

    Maintains rolling windows for percentile calculations.
    """

    def __init__(self, window_size: int = 1000):
        """
        Args:
            window_size: Number of recent measurements to keep per series
        """
        self.window_size = window_size
        self.metrics: Deque[float] = deque(maxlen=window_size)
        self._query_metrics: Dict[str, Deque[float]] = {
            kind: deque(maxlen=window_size) for kind in QUERY_KINDS
        }
        self._counts: Dict[str, int] = {kind: 0 for kind in QUERY_KINDS}

    def record(self, metrics: LatencyMetrics):
        """Record a latency measurement."""
        self.metrics.append(metrics.total_ms)

        if metrics.query_kind is not None:
            if metrics.query_kind not in self._query_metrics:
                raise ValueError(f"Unknown query kind: {metrics.query_kind}")
            self._query_metrics[metrics.query_kind].append(metrics.total_ms)
            self._counts[metrics.query_kind] += 1

    @contextmanager
    def track(self, query_kind: str) -> Iterator[None]:
        """Time the enclosed block as one query of the given kind."""
        start = time.perf_counter()
        try:
            yield
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            self.record(LatencyMetrics(total_ms=elapsed_ms, query_kind=query_kind))

    def get_percentiles(self, query_kind: Optional[str] = None) -> Dict[str, float]:
        """
        Get latency percentiles.

        Args:
            query_kind: One of QUERY_KINDS, or None for all recorded latencies

        Returns:
            Dict with p50, p95, p99, mean, min and max (all 0.0 when empty)
        """
        if query_kind:
            values = list(self._query_metrics.get(query_kind, []))
        else:
            values = list(self.metrics)
        return percentiles(values)

    def get_summary(self) -> Dict:
        """Get comprehensive latency summary."""
        summary = {
            "total": self.get_percentiles(),
            "queries": {},
            "counts": dict(self._counts),
        }

        for kind, values in self._query_metrics.items():
            if values:
                summary["queries"][kind] = self.get_percentiles(kind)

        return summary

    def reset(self):
        """Reset all metrics."""
        self.metrics.clear()
        for kind in self._query_metrics:
            self._query_metrics[kind].clear()
            self._counts[kind] = 0


# Global latency collector
_latency_collector: Optional[LatencyCollector] = None


def get_latency_collector(window_size: int = 1000) -> LatencyCollector:
    """Get global latency collector."""
    global _latency_collector
    if _latency_collector is None:
        _latency_collector = LatencyCollector(window_size=window_size)
    return _latency_collector
