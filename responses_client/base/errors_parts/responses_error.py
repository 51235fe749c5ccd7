"""
Structured exception types for the responses client.

`ResponsesError` wraps every failure with a normalized `ErrorCode` for
consistent handling and structured logging. One subclass exists per
taxonomy entry so callers can ``except`` precisely. Cancellation is not part
of this hierarchy (see ``base.cancellation``).
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Optional

from .error_code import ErrorCode


@dataclass
class ResponsesError(Exception):
    """Represents a structured failure with a normalized error code.

    Attributes:
        code: Normalized :class:`ErrorCode` classification for the failure.
        message: Human-readable error message suitable for logging.
        reason: Short machine-friendly reason (e.g. ``"empty input"``).
        status_code: HTTP status when the failure originated remotely.
        raw: Optional original exception or remote error payload.
    """

    code: ErrorCode
    message: str
    reason: Optional[str] = None
    status_code: Optional[int] = None
    raw: Optional[Any] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        """Return a compact string combining code and message."""
        return f"{self.code.value}: {self.message}"


class _TaxonomyError(ResponsesError):
    """Shared constructor binding each subclass to its fixed error code."""

    _code: ClassVar[ErrorCode]

    def __init__(
        self,
        message: str,
        *,
        reason: Optional[str] = None,
        status_code: Optional[int] = None,
        raw: Optional[Any] = None,
    ) -> None:
        super().__init__(
            code=self._code,
            message=message,
            reason=reason,
            status_code=status_code,
            raw=raw,
        )


class InvalidRequestError(_TaxonomyError):
    """Local validation failure or remote 4xx. Not retryable as-is."""

    _code = ErrorCode.INVALID_REQUEST


class SequenceViolationError(_TaxonomyError):
    """A stream ordering or uniqueness invariant was broken."""

    _code = ErrorCode.SEQUENCE_VIOLATION


class MalformedEventError(_TaxonomyError):
    """A wire record could not be decoded into a usable event."""

    _code = ErrorCode.MALFORMED_EVENT


class IncompleteStreamError(_TaxonomyError):
    """The stream ended before a completion snapshot was observed."""

    _code = ErrorCode.INCOMPLETE_STREAM


class TransportFailureError(_TaxonomyError):
    """Network or remote-side fault; the original cause is kept in ``raw``."""

    _code = ErrorCode.TRANSPORT_FAILURE


__all__ = [
    "ResponsesError",
    "InvalidRequestError",
    "SequenceViolationError",
    "MalformedEventError",
    "IncompleteStreamError",
    "TransportFailureError",
]
