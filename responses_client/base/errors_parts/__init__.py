"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `responses_client.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .responses_error import (
    IncompleteStreamError,
    InvalidRequestError,
    MalformedEventError,
    ResponsesError,
    SequenceViolationError,
    TransportFailureError,
)
from .classification import classify_exception, to_responses_error

__all__ = [
    "ErrorCode",
    "ResponsesError",
    "InvalidRequestError",
    "SequenceViolationError",
    "MalformedEventError",
    "IncompleteStreamError",
    "TransportFailureError",
    "classify_exception",
    "to_responses_error",
]
