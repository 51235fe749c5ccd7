"""Streaming metrics data structures.

Kept apart from the stream driver so the driver stays focused on the
consume loop.
"""
from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from ..models_parts.usage import Usage
from .stream_update import StreamUpdate


@dataclass
class StreamMetrics:
    """Collected metrics for one stream.

    ``emitted`` counts partial updates handed to the consumer, ``deltas``
    counts text fragments among them. Durations are milliseconds measured
    from ``started_at`` (``time.perf_counter`` based).
    """

    started_at: float = field(default_factory=time.perf_counter)
    emitted: int = 0
    deltas: int = 0
    time_to_first_token_ms: Optional[float] = None
    total_duration_ms: Optional[float] = None
    tokens: Optional[Dict[str, Any]] = None

    def record_update(self, update: StreamUpdate) -> None:
        self.emitted += 1
        if update.is_text:
            self.deltas += 1
            if self.time_to_first_token_ms is None:
                self.time_to_first_token_ms = (time.perf_counter() - self.started_at) * 1000.0

    def stop(self) -> None:
        if self.total_duration_ms is None:
            self.total_duration_ms = (time.perf_counter() - self.started_at) * 1000.0


def apply_usage(metrics: StreamMetrics, usage: Optional[Usage]) -> None:
    """Populate the ``tokens`` mapping from a response's usage, if any."""
    metrics.tokens = usage.as_metrics() if usage is not None else None


__all__ = ["StreamMetrics", "apply_usage"]
