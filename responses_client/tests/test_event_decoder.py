"""Event decoder: universal field checks, tag dispatch, forward compatibility."""
from __future__ import annotations

import json

import pytest

from responses_client.base.errors import MalformedEventError
from responses_client.base.events import (
    ErrorEvent,
    OutputItemEvent,
    PartAddedEvent,
    ResponseSnapshotEvent,
    TextDeltaEvent,
    UnknownEvent,
    decode_event,
)
from responses_client.base.models import MessageOutput, OutputText, ReasoningOutput, SummaryText


@pytest.mark.parametrize(
    "record",
    [
        {"sequence_number": 0},
        {"type": "", "sequence_number": 0},
        {"type": 7, "sequence_number": 0},
        {"type": "response.created"},
        {"type": "response.created", "sequence_number": "0"},
        {"type": "response.created", "sequence_number": True},
        {"type": "response.created", "sequence_number": -1},
        {"type": "response.created", "sequence_number": 1.5},
    ],
)
def test_missing_or_wrong_universal_fields_are_malformed(record):
    with pytest.raises(MalformedEventError):
        decode_event(record)


def test_non_mapping_record_is_malformed():
    with pytest.raises(MalformedEventError):
        decode_event(["response.created", 0])  # type: ignore[arg-type]


def test_unknown_tag_decodes_to_unknown_event():
    record = {"type": "response.audio.delta", "sequence_number": 4, "delta": "AAA"}
    event = decode_event(record)
    assert isinstance(event, UnknownEvent)  # nosec B101
    assert event.type == "response.audio.delta" and event.sequence_number == 4  # nosec B101
    assert event.raw["delta"] == "AAA"  # nosec B101


def test_snapshot_event_carries_response(hello_events):
    event = decode_event(hello_events[0])
    assert isinstance(event, ResponseSnapshotEvent)  # nosec B101
    assert event.response is not None and event.response.id == "resp_hello"  # nosec B101


def test_item_added_decodes_variants(reasoning_events):
    event = decode_event(reasoning_events[2])
    assert isinstance(event, OutputItemEvent) and event.output_index == 0  # nosec B101
    assert isinstance(event.item, ReasoningOutput) and event.item.id == "rs_1"  # nosec B101

    message = decode_event(reasoning_events[6])
    assert isinstance(message.item, MessageOutput)  # nosec B101


def test_part_added_decodes_by_channel(reasoning_events):
    summary = decode_event(reasoning_events[3])
    content = decode_event(reasoning_events[7])
    assert isinstance(summary, PartAddedEvent) and summary.channel == "summary"  # nosec B101
    assert isinstance(summary.part, SummaryText)  # nosec B101
    assert content.channel == "content" and isinstance(content.part, OutputText)  # nosec B101


def test_delta_fields_absent_stay_none():
    event = decode_event({"type": "response.reasoning_summary_text.delta", "sequence_number": 1, "item_id": "rs"})
    assert isinstance(event, TextDeltaEvent)  # nosec B101
    assert event.delta is None and event.summary_index is None and event.obfuscation is None  # nosec B101
    assert event.content_index is None  # nosec B101
    assert event.channel == "summary" and event.index == 0  # nosec B101


def test_empty_string_delta_is_preserved():
    event = decode_event({"type": "response.output_text.delta", "sequence_number": 1, "item_id": "m", "delta": ""})
    assert event.delta == ""  # nosec B101


def test_fields_irrelevant_to_tag_are_not_populated():
    record = {"type": "response.created", "sequence_number": 0, "delta": "x", "item_id": "m1"}
    event = decode_event(record)
    assert isinstance(event, ResponseSnapshotEvent)  # nosec B101
    assert not hasattr(event, "delta") and event.response is None  # nosec B101


def test_wrong_kind_field_is_dropped_and_logged(monkeypatch, log_capture):
    monkeypatch.setenv("RESPONSES_LOG_LEVEL", "DEBUG")
    record = {"type": "response.message_content.text.delta", "sequence_number": 2, "item_id": 5, "delta": ["x"]}
    event = decode_event(record)

    assert event.item_id is None and event.delta is None  # nosec B101
    dropped = [json.loads(m) for m in log_capture.messages if "stream.decode.field_dropped" in m]
    assert {d["field"] for d in dropped} == {"item_id", "delta"}  # nosec B101


def test_error_event_fields():
    event = decode_event({"type": "error", "sequence_number": 3, "code": "server_error", "message": "boom"})
    assert isinstance(event, ErrorEvent)  # nosec B101
    assert (event.code, event.message, event.param) == ("server_error", "boom", None)  # nosec B101


def test_undecodable_item_is_treated_as_absent():
    record = {"type": "response.output_item.added", "sequence_number": 1, "item": {"type": "message"}}
    event = decode_event(record)
    assert isinstance(event, OutputItemEvent) and event.item is None  # nosec B101


@pytest.mark.parametrize(
    "item",
    [
        {"type": "message", "id": "m1", "role": "assistant", "content": 5},
        {"type": "reasoning", "id": "rs_1", "summary": 7},
        {"type": "message", "id": "m1", "role": "narrator", "content": []},
    ],
)
def test_item_with_wrong_kind_nested_field_is_dropped(item, monkeypatch, log_capture):
    monkeypatch.setenv("RESPONSES_LOG_LEVEL", "DEBUG")
    event = decode_event({"type": "response.output_item.added", "sequence_number": 1, "output_index": 0, "item": item})
    assert isinstance(event, OutputItemEvent) and event.item is None  # nosec B101
    dropped = [json.loads(m) for m in log_capture.messages if "stream.decode.field_dropped" in m]
    assert [d["field"] for d in dropped] == ["item"]  # nosec B101


def test_part_with_non_list_annotations_is_dropped():
    record = {
        "type": "response.content_part.added",
        "sequence_number": 4,
        "item_id": "m1",
        "content_index": 0,
        "part": {"type": "output_text", "text": "hi", "annotations": 5},
    }
    event = decode_event(record)
    assert isinstance(event, PartAddedEvent) and event.part is None  # nosec B101
