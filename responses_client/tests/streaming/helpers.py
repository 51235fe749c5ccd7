"""Helpers for driving an aggregator from raw wire records."""
from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from responses_client.base.events import decode_event
from responses_client.base.streaming import ResponseStreamAggregator, StreamUpdate


def feed(
    records: Sequence[Mapping[str, Any]],
    aggregator: Optional[ResponseStreamAggregator] = None,
) -> Tuple[ResponseStreamAggregator, List[StreamUpdate]]:
    """Decode and consume every record; return the aggregator and emitted updates."""
    agg = aggregator or ResponseStreamAggregator()
    updates: List[StreamUpdate] = []
    for record in records:
        update = agg.consume(decode_event(record))
        if update is not None:
            updates.append(update)
    return agg, updates


def created(seq: int = 0, response_id: str = "resp_1") -> Dict[str, Any]:
    return {
        "type": "response.created",
        "sequence_number": seq,
        "response": {"id": response_id, "object": "response", "status": "in_progress", "output": []},
    }


def message_added(seq: int, item_id: str = "m1", output_index: int = 0) -> Dict[str, Any]:
    return {
        "type": "response.output_item.added",
        "sequence_number": seq,
        "output_index": output_index,
        "item": {"type": "message", "id": item_id, "role": "assistant", "content": []},
    }


def text_delta(seq: int, delta: Any = None, item_id: Optional[str] = "m1", content_index: Optional[int] = 0) -> Dict[str, Any]:
    record: Dict[str, Any] = {"type": "response.message_content.text.delta", "sequence_number": seq}
    if item_id is not None:
        record["item_id"] = item_id
    if content_index is not None:
        record["content_index"] = content_index
    if delta is not None:
        record["delta"] = delta
    return record


def completed(seq: int, output: Optional[list] = None, usage: Optional[dict] = None, response_id: str = "resp_1") -> Dict[str, Any]:
    response: Dict[str, Any] = {
        "id": response_id,
        "object": "response",
        "status": "completed",
        "output": output or [],
    }
    if usage is not None:
        response["usage"] = usage
    return {"type": "response.completed", "sequence_number": seq, "response": response}
