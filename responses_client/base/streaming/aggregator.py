"""
Stream aggregator: the state machine that assembles decoded events.

States::

    idle -> created -> in_progress -> completed
      \\________\\____________\\______-> failed | cancelled

``consume`` validates ordering, updates the per-item accumulators and returns
the partial update for the event (or ``None`` when the event produces none).
Every failure raised by ``consume`` also becomes the terminal outcome, which
``finalize`` then reports on every call.

Snapshots replace, deltas append: a later snapshot is taken as-is and never
merged with accumulated text. Only when the completion snapshot carries no
output are the accumulated items used to fill it.
"""
from __future__ import annotations

import dataclasses
from threading import RLock
from types import MappingProxyType
from typing import Dict, Mapping, NoReturn, Optional

from ..cancellation_parts.cancelled_error import CancelledError
from ..errors_parts.classification import to_responses_error
from ..errors_parts.responses_error import (
    IncompleteStreamError,
    MalformedEventError,
    ResponsesError,
    SequenceViolationError,
    TransportFailureError,
)
from ..events_parts import event_type as et
from ..events_parts.stream_event import (
    ErrorEvent,
    OutputItemEvent,
    PartAddedEvent,
    ResponseSnapshotEvent,
    StreamEvent,
    TextDeltaEvent,
)
from ..models_parts.output_item import OutputItem
from ..models_parts.response import Response, ResponseStatus
from ..models_parts.usage import validate_usage
from .item_accumulator import ItemAccumulator
from .stream_outcome import StreamOutcome, StreamStatus
from .stream_update import StreamUpdate


class ResponseStreamAggregator:
    """Assemble one stream of :data:`StreamEvent` values into a ``Response``.

    One instance per stream; instances share no state. ``consume`` is meant
    for a single consumer, while ``cancel`` may be called from another thread
    (e.g. a cancellation callback).
    """

    def __init__(self) -> None:
        self._lock = RLock()
        self._status = StreamStatus.IDLE
        self._last_seq: Optional[int] = None
        self._snapshot: Optional[Response] = None
        self._items: Dict[str, ItemAccumulator] = {}
        self._response: Optional[Response] = None
        self._error: Optional[BaseException] = None
        self.events_consumed = 0

    # State ------------------------------------------------------------------
    @property
    def status(self) -> StreamStatus:
        return self._status

    @property
    def terminal(self) -> bool:
        return self._status.terminal

    @property
    def last_sequence_number(self) -> Optional[int]:
        return self._last_seq

    @property
    def snapshot(self) -> Optional[Response]:
        """Latest response snapshot seen on the wire (not necessarily final)."""
        return self._snapshot

    @property
    def items(self) -> Mapping[str, OutputItem]:
        """Read-only view of the accumulated items, in output order."""
        with self._lock:
            ordered = sorted(self._items.values(), key=ItemAccumulator.sort_key)
            return MappingProxyType({acc.item_id: acc.build() for acc in ordered})

    def text(self, item_id: str, content_index: int = 0) -> Optional[str]:
        acc = self._items.get(item_id)
        return acc.text("content", content_index) if acc else None

    def summary_text(self, item_id: str, summary_index: int = 0) -> Optional[str]:
        acc = self._items.get(item_id)
        return acc.text("summary", summary_index) if acc else None

    # Consumption --------------------------------------------------------------
    def consume(self, event: StreamEvent) -> Optional[StreamUpdate]:
        """Apply ``event`` and return its partial update, if any.

        Raises:
            SequenceViolationError: non-increasing sequence number, duplicate
                item id, reference to an unregistered item, or any event after
                completion.
            MalformedEventError: a required tag field is missing.
            TransportFailureError: the server reported a failure in-band.
            CancelledError: the stream was cancelled earlier.
        """
        with self._lock:
            self._ensure_open()
            try:
                self._check_sequence(event)
                self.events_consumed += 1
                return self._dispatch(event)
            except ResponsesError as err:
                self._terminate(StreamStatus.FAILED, error=err)
                raise

    def end_of_stream(self) -> StreamOutcome:
        """Signal that the transport has no more records."""
        with self._lock:
            if not self.terminal:
                self._terminate(
                    StreamStatus.FAILED,
                    error=IncompleteStreamError(
                        "stream ended before response.completed",
                        reason="missing completion",
                    ),
                )
            return self.outcome()

    def fail(self, error: BaseException) -> StreamOutcome:
        """Record a transport-side failure as the terminal outcome.

        Ignored once the stream is terminal. A ``CancelledError`` is routed to
        :meth:`cancel`; anything else is classified into the taxonomy.
        """
        if isinstance(error, CancelledError):
            return self.cancel(error.reason)
        with self._lock:
            if not self.terminal:
                self._terminate(StreamStatus.FAILED, error=to_responses_error(error))
            return self.outcome()

    def cancel(self, reason: Optional[str] = None) -> StreamOutcome:
        """Abandon the stream. Never produces a response; no-op once terminal."""
        with self._lock:
            if not self.terminal:
                self._terminate(StreamStatus.CANCELLED, error=CancelledError(reason or "cancelled"))
            return self.outcome()

    def finalize(self) -> Response:
        """Return the terminal response or raise the terminal failure.

        Idempotent: repeated calls return the same response or raise the same
        exception instance.

        Raises:
            RuntimeError: the stream has not reached a terminal state.
        """
        with self._lock:
            if not self.terminal:
                raise RuntimeError(f"stream not terminated (status={self._status.value})")
            if self._response is not None:
                return self._response
            assert self._error is not None  # nosec B101
            raise self._error

    def outcome(self) -> StreamOutcome:
        return StreamOutcome(status=self._status, response=self._response, error=self._error)

    # Internals --------------------------------------------------------------
    def _terminate(
        self,
        status: StreamStatus,
        *,
        response: Optional[Response] = None,
        error: Optional[BaseException] = None,
    ) -> None:
        self._status = status
        self._response = response
        self._error = error

    def _ensure_open(self) -> None:
        if self._status is StreamStatus.COMPLETED:
            raise SequenceViolationError("event received after response.completed", reason="event after completion")
        if self._error is not None:
            raise self._error

    def _check_sequence(self, event: StreamEvent) -> None:
        seq = event.sequence_number
        if self._last_seq is not None and seq <= self._last_seq:
            raise SequenceViolationError(
                f"sequence_number {seq} is not greater than {self._last_seq}",
                reason="non-increasing sequence number",
                raw=dict(event.raw),
            )
        self._last_seq = seq

    def _dispatch(self, event: StreamEvent) -> Optional[StreamUpdate]:
        if isinstance(event, ResponseSnapshotEvent):
            return self._on_snapshot(event)
        if isinstance(event, OutputItemEvent):
            return self._on_output_item(event)
        if isinstance(event, PartAddedEvent):
            return self._on_part_added(event)
        if isinstance(event, TextDeltaEvent):
            return self._on_delta(event)
        if isinstance(event, ErrorEvent):
            self._raise_remote_error(event.message or "stream error", reason=event.code, raw=dict(event.raw))
        # Unknown tags only advance the sequence number.
        return None

    def _on_snapshot(self, event: ResponseSnapshotEvent) -> Optional[StreamUpdate]:
        if event.type == et.RESPONSE_CREATED:
            if self._status is not StreamStatus.IDLE:
                raise SequenceViolationError("duplicate response.created", reason="duplicate created")
            self._status = StreamStatus.CREATED
        elif event.type == et.RESPONSE_IN_PROGRESS:
            if self._status is StreamStatus.IDLE:
                raise SequenceViolationError(
                    "response.in_progress before response.created", reason="in_progress before created"
                )
            self._status = StreamStatus.IN_PROGRESS
        elif event.type == et.RESPONSE_COMPLETED:
            self._complete(event)
            return None
        else:
            self._on_remote_failure(event)

        if event.response is not None:
            self._snapshot = event.response
        return StreamUpdate(
            kind="snapshot",
            sequence_number=event.sequence_number,
            event_type=event.type,
            response=event.response,
        )

    def _complete(self, event: ResponseSnapshotEvent) -> None:
        if self._status is StreamStatus.IDLE:
            raise SequenceViolationError("response.completed before response.created", reason="completed before created")
        response = event.response
        if response is None:
            raise MalformedEventError("response.completed without a response", reason="missing response", raw=dict(event.raw))
        if response.status is not ResponseStatus.COMPLETED:
            raise MalformedEventError(
                f"response.completed carries status {response.status.value!r}",
                reason="completion status",
                raw=dict(event.raw),
            )
        if not response.output and self._items:
            ordered = sorted(self._items.values(), key=ItemAccumulator.sort_key)
            response = dataclasses.replace(response, output=tuple(acc.build() for acc in ordered))
        ok, reason = validate_usage(response.usage)
        if not ok:
            raise MalformedEventError(f"inconsistent usage: {reason}", reason="usage mismatch", raw=dict(event.raw))
        self._snapshot = response
        self._terminate(StreamStatus.COMPLETED, response=response)

    def _on_remote_failure(self, event: ResponseSnapshotEvent) -> NoReturn:
        response = event.response
        details = None
        if response is not None:
            details = response.error or response.incomplete_details
        message = str((details or {}).get("message") or f"{event.type} received")
        self._raise_remote_error(message, reason=event.type, raw=dict(details) if details else dict(event.raw))

    @staticmethod
    def _raise_remote_error(message: str, *, reason: Optional[str], raw: Mapping) -> NoReturn:
        raise TransportFailureError(message, reason=reason, raw=raw)

    def _require_item_id(self, event: StreamEvent, item_id: Optional[str]) -> ItemAccumulator:
        if item_id is None:
            raise MalformedEventError(f"{event.type} without item_id", reason="missing item_id", raw=dict(event.raw))
        acc = self._items.get(item_id)
        if acc is None:
            raise SequenceViolationError(
                f"{event.type} for unregistered item {item_id!r}",
                reason="unknown item",
                raw=dict(event.raw),
            )
        return acc

    def _on_output_item(self, event: OutputItemEvent) -> StreamUpdate:
        item = event.item
        if item is None:
            raise MalformedEventError(f"{event.type} without an item", reason="missing item", raw=dict(event.raw))
        item_id = getattr(item, "id", None)
        if item_id is None:
            raise MalformedEventError(f"{event.type} item without id", reason="missing item id", raw=dict(event.raw))

        if event.type == et.OUTPUT_ITEM_ADDED:
            if item_id in self._items:
                raise SequenceViolationError(
                    f"duplicate output item id {item_id!r}",
                    reason="duplicate item",
                    raw=dict(event.raw),
                )
            self._items[item_id] = ItemAccumulator(item=item, output_index=event.output_index, order=len(self._items))
            kind = "item_added"
        else:
            acc = self._require_item_id(event, item_id)
            acc.item = item
            if event.output_index is not None:
                acc.output_index = event.output_index
            kind = "item_done"
        return StreamUpdate(
            kind=kind,  # type: ignore[arg-type]
            sequence_number=event.sequence_number,
            event_type=event.type,
            item_id=item_id,
            output_index=event.output_index,
            item=item,
        )

    def _on_part_added(self, event: PartAddedEvent) -> StreamUpdate:
        acc = self._require_item_id(event, event.item_id)
        acc.open(event.channel, event.index, event.part)
        return StreamUpdate(
            kind="part_added",
            sequence_number=event.sequence_number,
            event_type=event.type,
            item_id=event.item_id,
            output_index=event.output_index,
            channel=event.channel,
            index=event.index,
            part=event.part,
        )

    def _on_delta(self, event: TextDeltaEvent) -> StreamUpdate:
        acc = self._require_item_id(event, event.item_id)
        if event.delta is not None:
            acc.append(event.channel, event.index, event.delta)
        return StreamUpdate(
            kind="text_delta",
            sequence_number=event.sequence_number,
            event_type=event.type,
            item_id=event.item_id,
            output_index=event.output_index,
            channel=event.channel,
            index=event.index,
            delta=event.delta,
        )


__all__ = ["ResponseStreamAggregator"]
