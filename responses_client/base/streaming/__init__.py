"""Streaming package: aggregator, stream driver, updates, metrics.

Exposes the stream assembly primitives under a single namespace.
"""

from .aggregator import ResponseStreamAggregator
from .item_accumulator import ItemAccumulator
from .response_stream import TIMEOUT_REASON, ResponseStream
from .stream_outcome import StreamOutcome, StreamStatus
from .stream_update import StreamUpdate, UpdateKind
from .streaming_finalize import finalize_stream
from .streaming_metrics import StreamMetrics, apply_usage

__all__ = [
    "ResponseStreamAggregator",
    "ItemAccumulator",
    "ResponseStream",
    "TIMEOUT_REASON",
    "StreamOutcome",
    "StreamStatus",
    "StreamUpdate",
    "UpdateKind",
    "finalize_stream",
    "StreamMetrics",
    "apply_usage",
]
