"""Cooperative cancellation token implementation.

Exposes the ``CancellationToken`` used by ``ResponseStream`` to stop
consuming events between two wire records and to release the transport
connection as soon as cancellation is requested.
"""

from __future__ import annotations

from contextlib import suppress
from threading import Lock
from typing import Callable, List

from .state import State
from .cancelled_error import CancelledError


def _noop() -> None:
    return None


class CancellationToken:
    """A cooperative cancellation token with cascading children and callbacks.

    Thread-safe for ``cancel`` + ``raise_if_cancelled`` usage. Child tokens
    inherit cancellation when the parent is cancelled; callbacks registered
    with :meth:`on_cancel` run once, outside the lock, in registration order.
    """

    def __init__(self, *, parent: "CancellationToken | None" = None) -> None:
        self._state = State()
        self._lock = Lock()
        self._children: List[CancellationToken] = []
        if parent is not None:
            parent.link_child(self)

    @property
    def cancelled(self) -> bool:  # noqa: D401 - short form
        """Whether cancellation has been requested."""
        return self._state.cancelled

    @property
    def reason(self) -> str | None:  # noqa: D401 - short form
        """Reason string supplied at cancel time (if any)."""
        return self._state.reason

    def cancel(self, reason: str | None = None) -> None:
        """Request cancellation, run callbacks, and cascade to children."""
        with self._lock:
            if self._state.cancelled:
                return
            self._state.cancelled = True
            self._state.reason = reason
            callbacks = list(self._state.callbacks)
            self._state.callbacks.clear()
            children = list(self._children)
        for cb in callbacks:
            # A failing release hook must not prevent the others from running.
            with suppress(Exception):
                cb(reason or "operation cancelled")
        for child in children:
            child.cancel(reason)

    def on_cancel(self, callback: Callable[[str], None]) -> Callable[[], None]:
        """Register ``callback(reason)``; runs immediately if already cancelled.

        Returns a function that unregisters the callback. Owners that finish
        before the token is cancelled call it so a long-lived token does not
        keep them alive.
        """
        with self._lock:
            if not self._state.cancelled:
                self._state.callbacks.append(callback)
                return lambda: self._unregister(callback)
            reason = self._state.reason or "operation cancelled"
        with suppress(Exception):
            callback(reason)
        return _noop

    def _unregister(self, callback: Callable[[str], None]) -> None:
        with self._lock:
            with suppress(ValueError):
                self._state.callbacks.remove(callback)

    def link_child(self, token: "CancellationToken") -> "CancellationToken":
        """Link a child token so parent cancellation cascades (returns child)."""
        with self._lock:
            self._children.append(token)
            should_cancel = self._state.cancelled
            reason = self._state.reason
        if should_cancel:
            token.cancel(reason)
        return token

    def raise_if_cancelled(self) -> None:
        """Raise ``CancelledError`` if token is cancelled."""
        if self._state.cancelled:
            raise CancelledError(self._state.reason or "operation cancelled")

    def child(self) -> "CancellationToken":
        """Create and link a child token (shortcut)."""
        return CancellationToken(parent=self)

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return (
            f"CancellationToken(cancelled={self._state.cancelled}, "
            f"reason={self._state.reason!r}, children={len(self._children)})"
        )


__all__ = ["CancellationToken"]
