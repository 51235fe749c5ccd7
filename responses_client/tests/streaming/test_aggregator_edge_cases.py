"""Edge cases of the aggregator state machine."""
from __future__ import annotations

import pytest

from responses_client.base.cancellation import CancelledError
from responses_client.base.errors import (
    ErrorCode,
    MalformedEventError,
    SequenceViolationError,
    TransportFailureError,
)
from responses_client.base.events import decode_event
from responses_client.base.models import MessageOutput
from responses_client.base.streaming import ResponseStreamAggregator, StreamStatus

from .helpers import completed, created, feed, message_added, text_delta


def test_empty_delta_is_appended_and_absent_delta_is_not():
    agg, updates = feed([created(0), message_added(1), text_delta(2, "a"), text_delta(3, ""), text_delta(4, None)])

    empty, absent = updates[-2], updates[-1]
    assert empty.delta == "" and empty.kind == "text_delta"  # nosec B101
    assert absent.delta is None and absent.kind == "text_delta"  # nosec B101
    assert agg.text("m1") == "a"  # nosec B101
    assert agg.items["m1"].content[0].text == "a"  # nosec B101


def test_empty_delta_opens_buffer():
    agg, _ = feed([created(0), message_added(1), text_delta(2, "")])
    assert agg.text("m1") == ""  # nosec B101
    assert agg.text("m1", content_index=3) is None  # nosec B101
    assert agg.text("missing") is None  # nosec B101


def test_unknown_event_type_is_ignored_but_sequence_recorded():
    unknown = {"type": "response.future_thing", "sequence_number": 2, "payload": {"x": 1}}
    agg, updates = feed([created(0), message_added(1), unknown])
    assert len(updates) == 2  # nosec B101
    assert agg.last_sequence_number == 2  # nosec B101
    with pytest.raises(SequenceViolationError):
        agg.consume(decode_event(text_delta(2, "late")))


def test_duplicate_item_id_is_a_violation():
    with pytest.raises(SequenceViolationError) as exc:
        feed([created(0), message_added(1), message_added(2)])
    assert exc.value.reason == "duplicate item"  # nosec B101


def test_delta_for_unregistered_item_is_a_violation():
    with pytest.raises(SequenceViolationError):
        feed([created(0), text_delta(1, "x", item_id="ghost")])


def test_delta_without_item_id_is_malformed():
    with pytest.raises(MalformedEventError):
        feed([created(0), message_added(1), text_delta(2, "x", item_id=None)])


def test_missing_content_index_defaults_to_zero():
    agg, updates = feed([created(0), message_added(1), text_delta(2, "hi", content_index=None)])
    assert updates[-1].index == 0  # nosec B101
    assert agg.text("m1", 0) == "hi"  # nosec B101


def test_item_added_without_item_is_malformed():
    record = {"type": "response.output_item.added", "sequence_number": 1, "output_index": 0}
    with pytest.raises(MalformedEventError):
        feed([created(0), record])


def test_completed_without_response_is_malformed():
    agg, _ = feed([created(0)])
    with pytest.raises(MalformedEventError):
        agg.consume(decode_event({"type": "response.completed", "sequence_number": 1}))
    assert agg.status is StreamStatus.FAILED  # nosec B101


def test_completed_before_created_is_a_violation():
    with pytest.raises(SequenceViolationError):
        feed([completed(0, output=[{"type": "message", "id": "m1", "role": "assistant", "content": []}])])


def test_in_progress_before_created_is_a_violation():
    agg = ResponseStreamAggregator()
    with pytest.raises(SequenceViolationError) as exc:
        agg.consume(decode_event({"type": "response.in_progress", "sequence_number": 0}))
    assert exc.value.reason == "in_progress before created"  # nosec B101
    assert agg.status is StreamStatus.FAILED  # nosec B101


def test_in_progress_after_created_advances_status():
    agg, updates = feed([created(0), {"type": "response.in_progress", "sequence_number": 1}])
    assert agg.status is StreamStatus.IN_PROGRESS  # nosec B101
    assert [u.kind for u in updates] == ["snapshot", "snapshot"]  # nosec B101


@pytest.mark.parametrize("status", ["in_progress", "failed", "incomplete", "cancelled"])
def test_completion_with_non_completed_status_is_malformed(status):
    record = completed(1)
    record["response"]["status"] = status
    agg, _ = feed([created(0)])
    with pytest.raises(MalformedEventError) as exc:
        agg.consume(decode_event(record))
    assert exc.value.reason == "completion status"  # nosec B101
    assert agg.status is StreamStatus.FAILED  # nosec B101


def test_completion_with_repeated_item_ids_never_completes():
    output = [
        {"type": "message", "id": "m1", "role": "assistant", "content": [{"type": "output_text", "text": "a"}]},
        {"type": "message", "id": "m1", "role": "assistant", "content": [{"type": "output_text", "text": "b"}]},
    ]
    agg, _ = feed([created(0)])
    with pytest.raises(MalformedEventError):
        agg.consume(decode_event(completed(1, output=output)))
    assert agg.status is StreamStatus.FAILED  # nosec B101
    assert agg.outcome().response is None  # nosec B101


def test_empty_completion_output_is_filled_from_accumulators():
    records = [
        created(0),
        message_added(1, "m2", output_index=1),
        message_added(2, "m1", output_index=0),
        text_delta(3, "second", item_id="m2"),
        text_delta(4, "first", item_id="m1"),
        completed(5),
    ]
    agg, _ = feed(records)
    response = agg.finalize()
    assert [item.id for item in response.output] == ["m1", "m2"]  # nosec B101
    assert response.output_text == "firstsecond"  # nosec B101


def test_later_snapshot_replaces_and_is_not_merged():
    snapshot_output = [
        {"type": "message", "id": "m1", "role": "assistant", "content": [{"type": "output_text", "text": "final"}]}
    ]
    agg, _ = feed([created(0), message_added(1), text_delta(2, "draft"), completed(3, output=snapshot_output)])
    assert agg.finalize().first_message_text == "final"  # nosec B101


def test_usage_mismatch_in_completion_fails_stream():
    usage = {"input_tokens": 10, "output_tokens": 5, "total_tokens": 14}
    agg, _ = feed([created(0)])
    with pytest.raises(MalformedEventError) as exc:
        agg.consume(decode_event(completed(1, usage=usage)))
    assert exc.value.reason == "usage mismatch"  # nosec B101


def test_events_after_completion_raise_without_changing_outcome(hello_events):
    agg, _ = feed(hello_events)
    response = agg.finalize()
    with pytest.raises(SequenceViolationError):
        agg.consume(decode_event({"type": "response.in_progress", "sequence_number": 99}))
    assert agg.status is StreamStatus.COMPLETED  # nosec B101
    assert agg.finalize() is response  # nosec B101


def test_events_after_failure_reraise_cached_error():
    agg, _ = feed([created(0)])
    agg.end_of_stream()
    cached = agg.outcome().error
    with pytest.raises(type(cached)) as exc:
        agg.consume(decode_event(message_added(1)))
    assert exc.value is cached  # nosec B101


def test_remote_failure_event_becomes_transport_failure():
    failed = {
        "type": "response.failed",
        "sequence_number": 1,
        "response": {
            "id": "resp_1",
            "status": "failed",
            "output": [],
            "error": {"code": "server_error", "message": "boom"},
        },
    }
    agg, _ = feed([created(0)])
    with pytest.raises(TransportFailureError) as exc:
        agg.consume(decode_event(failed))
    assert exc.value.message == "boom"  # nosec B101
    assert exc.value.raw == {"code": "server_error", "message": "boom"}  # nosec B101
    assert agg.outcome().error is exc.value  # nosec B101


def test_error_event_becomes_transport_failure():
    agg, _ = feed([created(0)])
    with pytest.raises(TransportFailureError) as exc:
        agg.consume(decode_event({"type": "error", "sequence_number": 1, "code": "rate", "message": "slow down"}))
    assert exc.value.code is ErrorCode.TRANSPORT_FAILURE and exc.value.reason == "rate"  # nosec B101


def test_cancel_reports_cancelled_and_never_a_response():
    agg, _ = feed([created(0), message_added(1), text_delta(2, "partial")])
    outcome = agg.cancel("user")
    assert outcome.cancelled and outcome.response is None  # nosec B101
    with pytest.raises(CancelledError) as exc:
        agg.finalize()
    assert exc.value.reason == "user"  # nosec B101
    # cancel after terminal is a no-op
    assert agg.cancel("again").error is outcome.error  # nosec B101


def test_fail_classifies_foreign_exceptions():
    agg, _ = feed([created(0)])
    outcome = agg.fail(ConnectionResetError("reset by peer"))
    assert outcome.status is StreamStatus.FAILED  # nosec B101
    assert outcome.error.code is ErrorCode.TRANSPORT_FAILURE  # nosec B101
    assert isinstance(outcome.error.raw, ConnectionResetError)  # nosec B101


def test_finalize_before_termination_raises_runtime_error():
    agg, _ = feed([created(0)])
    with pytest.raises(RuntimeError):
        agg.finalize()


def test_part_added_and_item_done_update_items(reasoning_events):
    agg, updates = feed(reasoning_events[:8])
    kinds = [u.kind for u in updates]
    assert kinds.count("part_added") == 2  # nosec B101
    summary_part = next(u for u in updates if u.kind == "part_added" and u.channel == "summary")
    assert summary_part.item_id == "rs_1" and summary_part.index == 0  # nosec B101

    done = {
        "type": "response.output_item.done",
        "sequence_number": 8,
        "output_index": 1,
        "item": {"type": "message", "id": "m2", "role": "assistant", "status": "completed", "content": []},
    }
    update = agg.consume(decode_event(done))
    assert update is not None and update.kind == "item_done"  # nosec B101
    item = agg.items["m2"]
    assert isinstance(item, MessageOutput) and item.status == "completed"  # nosec B101
