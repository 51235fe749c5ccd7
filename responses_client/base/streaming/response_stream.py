"""Cancellable stream driver over a transport record iterator.

``ResponseStream`` pulls raw records from the transport, decodes them and
feeds the aggregator, yielding each partial update as soon as its event has
been consumed. The terminal outcome is observed through :meth:`finalize` (or
:meth:`outcome`) only after every prior update was delivered.

Resources
---------
The transport iterator is closed exactly once, when the stream terminates,
is cancelled, or is closed. Cancellation of the ``CancellationToken`` from
any thread closes the iterator as well, which lets the transport drop its
connection.

Timeouts
--------
``next_update(timeout)`` and ``finalize(timeout)`` run under
:func:`operation_timeout`. Exceeding the bound cancels the stream with
reason ``"timeout"``, exactly as :meth:`cancel` does, including when the
transport reports the interrupted read as its own timeout error.
"""
from __future__ import annotations

import logging
import threading
import time
from contextlib import suppress
from typing import Any, Callable, Iterable, Iterator, Mapping, Optional

from ..cancellation_parts.cancellation_token import CancellationToken
from ..cancellation_parts.cancelled_error import CancelledError
from ..errors_parts.responses_error import MalformedEventError, ResponsesError
from ..events_parts.decoder import decode_event
from ..events_parts.stream_event import StreamEvent
from ..log_support import LogContext
from ..logging import get_logger, normalized_log_event
from ..models_parts.response import Response
from ..timeouts import operation_timeout
from .aggregator import ResponseStreamAggregator
from .stream_outcome import StreamOutcome
from .stream_update import StreamUpdate
from .streaming_finalize import finalize_stream
from .streaming_metrics import StreamMetrics

TIMEOUT_REASON = "timeout"


class ResponseStream:
    """Iterator and context manager over the updates of one streamed response."""

    def __init__(
        self,
        records: Iterable[Mapping[str, Any]],
        *,
        token: Optional[CancellationToken] = None,
        aggregator: Optional[ResponseStreamAggregator] = None,
        ctx: Optional[LogContext] = None,
        logger: Optional[logging.Logger] = None,
        decoder: Callable[[Mapping[str, Any]], StreamEvent] = decode_event,
    ) -> None:
        self._records = records
        self._iter: Iterator[Mapping[str, Any]] = iter(records)
        self._token = token or CancellationToken()
        self._aggregator = aggregator or ResponseStreamAggregator()
        self._decoder = decoder
        self._logger = logger or get_logger("responses_client.stream")
        self.ctx = ctx or LogContext(mode="stream")
        self.metrics = StreamMetrics()
        self._release_lock = threading.Lock()
        self._released = False
        self._bounded_wait = False
        self._deadline: Optional[float] = None
        self._unregister: Callable[[], None] = lambda: None
        normalized_log_event(self._logger, "stream.start", self.ctx, phase="start")
        self._unregister = self._token.on_cancel(self._on_token_cancelled)

    # Properties ---------------------------------------------------------------
    @property
    def aggregator(self) -> ResponseStreamAggregator:
        return self._aggregator

    @property
    def token(self) -> CancellationToken:
        return self._token

    @property
    def closed(self) -> bool:
        return self._released

    def outcome(self) -> StreamOutcome:
        return self._aggregator.outcome()

    # Iteration ----------------------------------------------------------------
    def __iter__(self) -> Iterator[StreamUpdate]:
        while (update := self._advance()) is not None:
            yield update

    def next_update(self, timeout: Optional[float] = None) -> Optional[StreamUpdate]:
        """Return the next update, or ``None`` once the stream has terminated.

        When ``timeout`` elapses first the stream is cancelled and ``None``
        is returned. Off the main thread the deadline cannot interrupt a
        blocked read, so the stream is cancelled from a timer at expiry, which
        closes the transport and unblocks the read.
        """
        return self._bounded(self._advance, timeout)

    def finalize(self, timeout: Optional[float] = None) -> Response:
        """Drain the remaining events and return the terminal response.

        Raises the terminal failure (a ``ResponsesError``) or ``CancelledError``.
        """
        self._bounded(self._drain, timeout)
        return self._aggregator.finalize()

    def text(self, item_id: str, content_index: int = 0) -> Optional[str]:
        return self._aggregator.text(item_id, content_index)

    # Cancellation and cleanup ------------------------------------------------
    def cancel(self, reason: str = "cancelled") -> None:
        """Abandon the stream and release the transport. Safe to call repeatedly."""
        self._token.cancel(reason)
        # The token may have been cancelled earlier with another reason.
        self._aggregator.cancel(self._token.reason or reason)
        self._release()

    def close(self) -> None:
        if self._aggregator.terminal:
            self._release()
        else:
            self.cancel("closed")

    def __enter__(self) -> "ResponseStream":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # Internals -----------------------------------------------------------------
    def _on_token_cancelled(self, reason: str) -> None:
        self._aggregator.cancel(reason)
        self._release()

    def _bounded(self, fn: Callable[[], Any], timeout: Optional[float]) -> Any:
        if timeout is None or timeout <= 0:
            return fn()
        self._bounded_wait = True
        self._deadline = time.monotonic() + timeout
        try:
            with operation_timeout(timeout, on_expire=lambda: self.cancel(TIMEOUT_REASON)):
                return fn()
        except TimeoutError:
            self.cancel(TIMEOUT_REASON)
            return None
        finally:
            self._bounded_wait = False
            self._deadline = None

    def _deadline_hit(self, exc: BaseException) -> bool:
        # The alarm may surface wrapped by the transport (httpx.ReadTimeout).
        if not self._bounded_wait:
            return False
        if isinstance(exc, TimeoutError):
            return True
        return self._deadline is not None and time.monotonic() >= self._deadline

    def _drain(self) -> None:
        for _ in self:
            pass

    def _advance(self) -> Optional[StreamUpdate]:
        """Consume records until one yields an update; ``None`` once terminal."""
        agg = self._aggregator
        while not agg.terminal:
            if self._token.cancelled:
                agg.cancel(self._token.reason)
                break
            try:
                record = next(self._iter)
            except StopIteration:
                agg.end_of_stream()
                break
            except CancelledError as ce:
                agg.cancel(ce.reason)
                break
            except Exception as exc:  # noqa: BLE001 - transport failures become the outcome
                # Inside a bounded wait the deadline is handled by _bounded.
                if self._deadline_hit(exc):
                    raise TimeoutError(f"next event not received in time: {exc}") from exc
                agg.fail(exc)
                break
            try:
                event = self._decoder(record)
            except MalformedEventError as err:
                agg.fail(err)
                break
            except Exception as exc:  # noqa: BLE001 - a decoder bug must still terminate the stream
                if isinstance(exc, TimeoutError) and self._bounded_wait:
                    raise
                agg.fail(MalformedEventError(f"undecodable event: {exc}", reason="undecodable event", raw=record))
                break
            try:
                update = agg.consume(event)
            except (ResponsesError, CancelledError):
                # Already recorded as the terminal outcome.
                break
            if update is not None:
                self.metrics.record_update(update)
                return update
        self._release()
        return None

    def _release(self) -> None:
        with self._release_lock:
            if self._released:
                return
            self._released = True
        self._unregister()
        for source in {id(self._iter): self._iter, id(self._records): self._records}.values():
            close_fn = getattr(source, "close", None)
            if callable(close_fn):
                with suppress(Exception):
                    close_fn()
        finalize_stream(logger=self._logger, ctx=self.ctx, metrics=self.metrics, outcome=self._aggregator.outcome())


__all__ = ["ResponseStream", "TIMEOUT_REASON"]
