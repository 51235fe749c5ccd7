"""
Error classification helpers mapping exceptions to the closed `ErrorCode` taxonomy.

Implements HTTP status extraction and a small precedence table so that every
failure surfaced to callers is one of the taxonomy entries, with the original
cause preserved.
"""
from __future__ import annotations

import asyncio
import json
from typing import Optional

import httpx
from pydantic import ValidationError

from ..cancellation_parts.cancelled_error import CancelledError
from .error_code import ErrorCode
from .responses_error import (
    InvalidRequestError,
    MalformedEventError,
    ResponsesError,
    TransportFailureError,
)


def _extract_status(exc: BaseException) -> Optional[int]:
    """Attempt to extract an HTTP status code from a transport exception.

    Supported attribute shapes (checked in order):
    - ``exc.status_code``
    - ``exc.status``
    - ``exc.response.status_code``
    Returns ``None`` if no valid status can be found.
    """
    for attr in ("status_code", "status"):
        val = getattr(exc, attr, None)
        if isinstance(val, int) and 100 <= val < 600:
            return val
    resp = getattr(exc, "response", None)
    if resp is not None:
        sc = getattr(resp, "status_code", None)
        if isinstance(sc, int) and 100 <= sc < 600:
            return sc
    return None


def _code_for_status(status: int) -> ErrorCode:
    """Map an HTTP status to the taxonomy (4xx caller-facing, rest transport)."""
    if 400 <= status < 500:
        return ErrorCode.INVALID_REQUEST
    return ErrorCode.TRANSPORT_FAILURE


def classify_exception(exc: BaseException) -> ErrorCode:
    """Classify an exception into a normalized :class:`ErrorCode`.

    Precedence:
        1. ResponsesError passthrough.
        2. Cooperative cancellation.
        3. Local request validation (pydantic).
        4. Undecodable wire payloads (JSON).
        5. Timeouts and HTTP status mapping.
        6. ``TRANSPORT_FAILURE`` fallback.
    """
    if isinstance(exc, ResponsesError):
        return exc.code
    if isinstance(exc, CancelledError):
        return ErrorCode.CANCELLED
    if isinstance(exc, ValidationError):
        return ErrorCode.INVALID_REQUEST
    if isinstance(exc, json.JSONDecodeError):
        return ErrorCode.MALFORMED_EVENT
    if isinstance(exc, (TimeoutError, asyncio.TimeoutError, httpx.TimeoutException)):
        return ErrorCode.TRANSPORT_FAILURE
    status = _extract_status(exc)
    if status is not None:
        return _code_for_status(status)
    return ErrorCode.TRANSPORT_FAILURE


def to_responses_error(exc: BaseException) -> ResponsesError:
    """Return ``exc`` as a taxonomy exception, wrapping foreign exceptions.

    The original exception is kept on ``raw`` and chained as ``__cause__``.
    Cancellation is not converted; callers must check for it first.
    """
    if isinstance(exc, ResponsesError):
        return exc
    if isinstance(exc, CancelledError):
        raise TypeError("cancellation is not an error and cannot be classified as one")
    code = classify_exception(exc)
    status = _extract_status(exc)
    message = str(exc)[:260] or exc.__class__.__name__
    if code is ErrorCode.INVALID_REQUEST:
        err: ResponsesError = InvalidRequestError(message, status_code=status, raw=exc)
    elif code is ErrorCode.MALFORMED_EVENT:
        err = MalformedEventError(message, raw=exc)
    else:
        err = TransportFailureError(message, status_code=status, raw=exc)
    err.__cause__ = exc
    return err


__all__ = [
    "classify_exception",
    "to_responses_error",
    "_extract_status",
]
