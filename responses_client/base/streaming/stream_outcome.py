"""Aggregator lifecycle states and the non-raising terminal outcome view."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..models_parts.response import Response


class StreamStatus(str, Enum):
    IDLE = "idle"
    CREATED = "created"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"

    @property
    def terminal(self) -> bool:
        return self in (StreamStatus.COMPLETED, StreamStatus.FAILED, StreamStatus.CANCELLED)


@dataclass(frozen=True)
class StreamOutcome:
    """Snapshot of where a stream ended up.

    Exactly one of ``response`` (completed) and ``error`` (failed or
    cancelled) is set once ``status`` is terminal. ``error`` is a
    ``ResponsesError`` for failures and a ``CancelledError`` for cancellation.
    """

    status: StreamStatus
    response: Optional[Response] = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.status is StreamStatus.COMPLETED

    @property
    def cancelled(self) -> bool:
        return self.status is StreamStatus.CANCELLED

    @property
    def terminal(self) -> bool:
        return self.status.terminal


__all__ = ["StreamStatus", "StreamOutcome"]
