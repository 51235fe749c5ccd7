"""Cooperative cancellation primitives (public API facade).

Purpose
-------
Expose cancellation constructs via the canonical
``responses_client.base.cancellation`` import path while the concrete
implementations live under ``cancellation_parts``.

Notes
-----
- ``CancellationToken`` signals cooperative cancellation to a running stream.
- ``CancelledError`` is raised by operations that observe a cancellation
  request. It is not a ``ResponsesError``: abandonment is not a fault.
"""

from .cancellation_parts.cancelled_error import CancelledError
from .cancellation_parts.cancellation_token import CancellationToken

__all__ = ["CancellationToken", "CancelledError"]
