"""
Normalized error codes (taxonomy) for the responses client.

Defines the closed `ErrorCode` enumeration consumed by callers. Values are
lowercase snake_case and are considered a stable public contract for logging
and analytics.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Enumerated normalized error codes representing failure categories."""

    INVALID_REQUEST = "invalid_request"
    SEQUENCE_VIOLATION = "sequence_violation"
    MALFORMED_EVENT = "malformed_event"
    INCOMPLETE_STREAM = "incomplete_stream"
    CANCELLED = "cancelled"
    TRANSPORT_FAILURE = "transport_failure"


__all__ = ["ErrorCode"]
