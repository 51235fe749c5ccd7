"""Unified error taxonomy public surface.

This module re-exports the one-class-per-concern implementations under
``responses_client.base.errors_parts`` to maintain a stable import path.
Cancellation is exported alongside for convenience but is intentionally not a
``ResponsesError``.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.responses_error import (
    IncompleteStreamError,
    InvalidRequestError,
    MalformedEventError,
    ResponsesError,
    SequenceViolationError,
    TransportFailureError,
)
from .errors_parts.classification import classify_exception, to_responses_error
from .cancellation_parts.cancelled_error import CancelledError

__all__ = [
    "ErrorCode",
    "ResponsesError",
    "InvalidRequestError",
    "SequenceViolationError",
    "MalformedEventError",
    "IncompleteStreamError",
    "TransportFailureError",
    "CancelledError",
    "classify_exception",
    "to_responses_error",
]
