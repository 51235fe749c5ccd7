"""ResponseStream driver: iteration, cancellation, timeouts, cleanup, logging."""
from __future__ import annotations

import threading
import time
from typing import Any, Dict, Iterator, List, Optional

import httpx
import pytest

from responses_client.base.cancellation import CancellationToken, CancelledError
from responses_client.base.errors import ErrorCode, IncompleteStreamError, MalformedEventError, TransportFailureError
from responses_client.base.streaming import TIMEOUT_REASON, ResponseStream, StreamStatus
from responses_client.mock import FixtureRecordStream


class _SlowRecords:
    """Yields ``ready`` records immediately, then blocks on the next pull."""

    def __init__(self, ready: List[Dict[str, Any]], delay: float = 5.0) -> None:
        self._ready = list(ready)
        self._delay = delay
        self.closed = False
        self.closed_at: Optional[float] = None

    def __iter__(self) -> Iterator[Dict[str, Any]]:
        return self

    def __next__(self) -> Dict[str, Any]:
        if self._ready:
            return self._ready.pop(0)
        time.sleep(self._delay)
        raise StopIteration

    def close(self) -> None:
        self.closed = True
        self.closed_at = time.monotonic()


def test_iteration_yields_updates_and_finalize_returns_response(hello_events):
    records = FixtureRecordStream(hello_events)
    stream = ResponseStream(records)
    updates = list(stream)

    assert [u.kind for u in updates] == ["snapshot", "item_added", "text_delta", "text_delta"]  # nosec B101
    response = stream.finalize()
    assert response.first_message_text == "Hello"  # nosec B101
    assert records.closed is True  # nosec B101
    assert stream.metrics.emitted == 4 and stream.metrics.deltas == 2  # nosec B101


def test_next_update_then_finalize_drains_remaining(hello_events):
    stream = ResponseStream(FixtureRecordStream(hello_events))
    first = stream.next_update()
    assert first is not None and first.kind == "snapshot"  # nosec B101
    assert stream.finalize().id == "resp_hello"  # nosec B101
    assert stream.next_update() is None  # nosec B101


def test_cancel_mid_stream_releases_transport_and_reports_cancelled(hello_events):
    records = FixtureRecordStream(hello_events)
    stream = ResponseStream(records)
    stream.next_update()
    stream.cancel("user abort")

    assert records.closed is True  # nosec B101
    assert stream.outcome().status is StreamStatus.CANCELLED  # nosec B101
    assert stream.next_update() is None  # nosec B101
    with pytest.raises(CancelledError) as exc:
        stream.finalize()
    assert exc.value.reason == "user abort"  # nosec B101


def test_token_cancellation_from_outside_closes_stream(hello_events):
    token = CancellationToken()
    records = FixtureRecordStream(hello_events)
    stream = ResponseStream(records, token=token)
    stream.next_update()
    token.cancel("shutdown")

    assert records.closed is True  # nosec B101
    assert stream.outcome().cancelled  # nosec B101
    assert not isinstance(stream.outcome().error, TransportFailureError)  # nosec B101


def test_context_manager_exit_cancels_unfinished_stream(hello_events):
    records = FixtureRecordStream(hello_events)
    with ResponseStream(records) as stream:
        stream.next_update()
    assert records.closed and stream.closed  # nosec B101
    assert stream.outcome().status is StreamStatus.CANCELLED  # nosec B101


def test_context_manager_exit_after_completion_keeps_outcome(hello_events):
    with ResponseStream(FixtureRecordStream(hello_events)) as stream:
        response = stream.finalize()
    assert stream.outcome().response is response  # nosec B101


def test_next_update_timeout_cancels_stream(hello_events):
    print("TEST: bounded next_update cancels with reason 'timeout'")
    records = _SlowRecords(hello_events[:1])
    stream = ResponseStream(records)
    assert stream.next_update(timeout=1.0) is not None  # nosec B101

    started = time.monotonic()
    assert stream.next_update(timeout=0.05) is None  # nosec B101
    assert time.monotonic() - started < 2.0  # nosec B101
    outcome = stream.outcome()
    assert outcome.cancelled and outcome.error.reason == TIMEOUT_REASON  # nosec B101
    assert records.closed is True  # nosec B101


def test_finalize_timeout_reports_cancelled(hello_events):
    stream = ResponseStream(_SlowRecords(hello_events[:2]))
    with pytest.raises(CancelledError) as exc:
        stream.finalize(timeout=0.05)
    assert exc.value.reason == TIMEOUT_REASON  # nosec B101


class _WrappingTimeoutRecords(_SlowRecords):
    """Reports the interrupted read the way httpx does, as ``ReadTimeout``."""

    def __next__(self) -> Dict[str, Any]:
        if self._ready:
            return self._ready.pop(0)
        try:
            time.sleep(self._delay)
        except TimeoutError as exc:
            raise httpx.ReadTimeout("timed out") from exc
        raise StopIteration


def test_timeout_wrapped_by_transport_still_cancels_with_timeout(hello_events):
    records = _WrappingTimeoutRecords(hello_events[:1])
    stream = ResponseStream(records)
    assert stream.next_update(timeout=1.0) is not None  # nosec B101

    assert stream.next_update(timeout=0.1) is None  # nosec B101
    outcome = stream.outcome()
    assert outcome.status is StreamStatus.CANCELLED  # nosec B101
    assert outcome.error.reason == TIMEOUT_REASON  # nosec B101
    assert not isinstance(outcome.error, TransportFailureError)  # nosec B101
    assert records.closed is True  # nosec B101


def test_bounded_wait_off_main_thread_releases_transport_at_deadline(hello_events):
    records = _SlowRecords(hello_events[:1], delay=0.6)
    stream = ResponseStream(records)
    results: List[Any] = []

    def consume():
        results.append(stream.next_update())
        started = time.monotonic()
        results.append(stream.next_update(timeout=0.1))
        results.append(started)

    worker = threading.Thread(target=consume)
    worker.start()
    worker.join(5)

    first, second, started = results
    assert first is not None and second is None  # nosec B101
    assert records.closed_at is not None and records.closed_at - started < 0.45  # nosec B101
    outcome = stream.outcome()
    assert outcome.cancelled and outcome.error.reason == TIMEOUT_REASON  # nosec B101


def test_decoder_crash_fails_stream_and_releases_transport(hello_events):
    def crashing_decoder(record):
        raise TypeError("unexpected shape")

    records = FixtureRecordStream(hello_events)
    stream = ResponseStream(records, decoder=crashing_decoder)
    assert stream.next_update() is None  # nosec B101
    assert stream.closed and records.closed  # nosec B101
    with pytest.raises(MalformedEventError) as exc:
        stream.finalize()
    assert exc.value.reason == "undecodable event"  # nosec B101
    assert stream.outcome().status is StreamStatus.FAILED  # nosec B101


def test_finished_streams_do_not_stay_registered_on_shared_token(hello_events):
    token = CancellationToken()
    streams = [ResponseStream(FixtureRecordStream(hello_events), token=token) for _ in range(3)]
    assert len(token._state.callbacks) == 3  # nosec B101
    for stream in streams:
        stream.finalize()
    assert token._state.callbacks == []  # nosec B101
    assert not token.cancelled  # nosec B101


def test_stream_end_without_completion_is_incomplete(hello_events):
    stream = ResponseStream(FixtureRecordStream(hello_events[:3]))
    assert len(list(stream)) == 3  # nosec B101
    with pytest.raises(IncompleteStreamError):
        stream.finalize()


def test_midstream_transport_error_is_classified(hello_events):
    error = httpx.ReadError("connection lost")
    stream = ResponseStream(FixtureRecordStream(hello_events, raise_after=2, error=error))
    assert len(list(stream)) == 2  # nosec B101
    with pytest.raises(TransportFailureError) as exc:
        stream.finalize()
    assert exc.value.raw is error and exc.value.__cause__ is error  # nosec B101


def test_undecodable_record_is_malformed(hello_events):
    hello_events[2] = {"type": "response.message_content.text.delta", "sequence_number": "two"}
    stream = ResponseStream(FixtureRecordStream(hello_events))
    list(stream)
    with pytest.raises(MalformedEventError):
        stream.finalize()
    assert stream.outcome().error.code is ErrorCode.MALFORMED_EVENT  # nosec B101


def test_lifecycle_is_logged_once(hello_events, log_capture):
    stream = ResponseStream(FixtureRecordStream(hello_events))
    stream.finalize()
    stream.close()

    events = log_capture.events()
    assert events.count("stream.start") == 1  # nosec B101
    assert events.count("stream.end") == 1  # nosec B101
    end = next(p for p in log_capture.payloads() if p["event"] == "stream.end")
    assert end["tokens"] == {"prompt": 10, "completion": 5, "total": 15}  # nosec B101
    assert end["response_id"] == "resp_hello" and end["emitted_count"] == 4  # nosec B101


def test_cancellation_is_logged_without_error_code(hello_events, log_capture):
    stream = ResponseStream(FixtureRecordStream(hello_events))
    stream.cancel("user")
    payload = next(p for p in log_capture.payloads() if p["event"] == "stream.cancelled")
    assert "error_code" not in payload and payload["error"] == "user"  # nosec B101
