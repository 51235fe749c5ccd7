"""Cancellation error type.

Defines the public ``CancelledError`` used to signal that a stream was
abandoned by its consumer, either explicitly or because a time bound expired.
"""

from __future__ import annotations


class CancelledError(RuntimeError):
    """Raised when a stream is cancelled cooperatively.

    Distinct from every ``ResponsesError`` so callers never mistake deliberate
    abandonment for a system fault or retry it.
    """

    def __init__(self, reason: str = "operation cancelled") -> None:
        super().__init__(reason)
        self.reason = reason


__all__ = ["CancelledError"]
