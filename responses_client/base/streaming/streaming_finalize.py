"""Terminal logging for a stream.

Emits the single consolidated log line (``stream.end``, ``stream.error`` or
``stream.cancelled``) carrying the stream metrics.
"""
from __future__ import annotations

import logging
from typing import Optional

from ..cancellation_parts.cancelled_error import CancelledError
from ..errors_parts.responses_error import ResponsesError
from ..log_support import LogContext
from ..logging import normalized_log_event
from .stream_outcome import StreamOutcome, StreamStatus
from .streaming_metrics import StreamMetrics, apply_usage


def finalize_stream(
    *,
    logger: logging.Logger,
    ctx: LogContext,
    metrics: StreamMetrics,
    outcome: StreamOutcome,
) -> None:
    """Stop the clock and log the outcome of a terminated stream."""
    metrics.stop()
    error_code: Optional[str] = None
    error_message: Optional[str] = None
    if outcome.status is StreamStatus.COMPLETED and outcome.response is not None:
        ctx.response_id = outcome.response.id
        apply_usage(metrics, outcome.response.usage)
        event, level = "stream.end", logging.INFO
    elif outcome.status is StreamStatus.CANCELLED:
        event, level = "stream.cancelled", logging.INFO
        if isinstance(outcome.error, CancelledError):
            error_message = outcome.error.reason
    else:
        event, level = "stream.error", logging.WARNING
        if isinstance(outcome.error, ResponsesError):
            error_code = outcome.error.code.value
            error_message = outcome.error.message

    normalized_log_event(
        logger,
        event,
        ctx,
        phase="finalize",
        level=level,
        emitted=metrics.emitted > 0,
        tokens=metrics.tokens,
        error_code=error_code,
        status=outcome.status.value,
        emitted_count=metrics.emitted,
        delta_count=metrics.deltas,
        time_to_first_token_ms=metrics.time_to_first_token_ms,
        total_duration_ms=metrics.total_duration_ms,
        error=error_message,
    )


__all__ = ["finalize_stream"]
