"""
Map one raw wire record into a typed :data:`StreamEvent`.

Only the universal fields are mandatory. ``MalformedEventError`` is raised
when ``type`` is not a non-empty string or ``sequence_number`` is not a
non-negative integer. Tag specific fields of the wrong kind are dropped
(treated as absent) and reported at debug level.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Optional, TypeVar

from ..errors_parts.responses_error import MalformedEventError
from ..logging import get_logger, log_event
from ..models_parts.content_part import parse_content_part
from ..models_parts.output_item import parse_output_item
from ..models_parts.response import Response
from ..models_parts.summary_part import parse_summary_part
from .event_type import (
    CONTENT_PART_TYPES,
    DELTA_TYPES,
    ERROR,
    OUTPUT_ITEM_TYPES,
    PART_ADDED_TYPES,
    SNAPSHOT_TYPES,
)
from .stream_event import (
    ErrorEvent,
    OutputItemEvent,
    PartAddedEvent,
    ResponseSnapshotEvent,
    StreamEvent,
    TextDeltaEvent,
    UnknownEvent,
)

_logger = get_logger("responses_client.events")

T = TypeVar("T")


class _FieldReader:
    """Reads optional fields from one record, logging those it has to drop."""

    def __init__(self, record: Mapping[str, Any], event_type: str, sequence_number: int) -> None:
        self._record = record
        self._type = event_type
        self._seq = sequence_number

    def _drop(self, name: str, detail: str) -> None:
        log_event(
            _logger,
            "stream.decode.field_dropped",
            level=logging.DEBUG,
            event_type=self._type,
            sequence_number=self._seq,
            field=name,
            detail=detail,
        )

    def string(self, name: str) -> Optional[str]:
        value = self._record.get(name)
        if value is None:
            return None
        if not isinstance(value, str):
            self._drop(name, f"expected string, got {type(value).__name__}")
            return None
        return value

    def index(self, name: str) -> Optional[int]:
        value = self._record.get(name)
        if value is None:
            return None
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            self._drop(name, f"expected non-negative int, got {value!r}")
            return None
        return value

    def parsed(self, name: str, parser: Callable[[Mapping[str, Any]], T]) -> Optional[T]:
        value = self._record.get(name)
        if value is None:
            return None
        if not isinstance(value, Mapping):
            self._drop(name, f"expected object, got {type(value).__name__}")
            return None
        try:
            return parser(value)
        except (ValueError, TypeError) as exc:
            self._drop(name, str(exc))
            return None


def _require_universal(record: Any) -> tuple[str, int]:
    if not isinstance(record, Mapping):
        raise MalformedEventError(
            f"event record must be an object, got {type(record).__name__}",
            reason="record not an object",
            raw=record,
        )
    event_type = record.get("type")
    if not isinstance(event_type, str) or not event_type:
        raise MalformedEventError(
            f"event type must be a non-empty string, got {event_type!r}",
            reason="invalid type",
            raw=dict(record),
        )
    seq = record.get("sequence_number")
    if isinstance(seq, bool) or not isinstance(seq, int) or seq < 0:
        raise MalformedEventError(
            f"sequence_number must be a non-negative int, got {seq!r}",
            reason="invalid sequence_number",
            raw=dict(record),
        )
    return event_type, seq


def decode_event(record: Mapping[str, Any]) -> StreamEvent:
    """Decode ``record`` into the variant selected by its ``type`` tag.

    Unfamiliar tags never fail; they decode into :class:`UnknownEvent`.
    """
    event_type, seq = _require_universal(record)
    raw = dict(record)
    fields = _FieldReader(record, event_type, seq)

    if event_type in SNAPSHOT_TYPES:
        return ResponseSnapshotEvent(
            type=event_type,
            sequence_number=seq,
            raw=raw,
            response=fields.parsed("response", Response.from_dict),
        )
    if event_type in OUTPUT_ITEM_TYPES:
        return OutputItemEvent(
            type=event_type,
            sequence_number=seq,
            raw=raw,
            output_index=fields.index("output_index"),
            item=fields.parsed("item", parse_output_item),
        )
    if event_type in PART_ADDED_TYPES:
        part_parser = parse_content_part if event_type in CONTENT_PART_TYPES else parse_summary_part
        return PartAddedEvent(
            type=event_type,
            sequence_number=seq,
            raw=raw,
            item_id=fields.string("item_id"),
            output_index=fields.index("output_index"),
            summary_index=fields.index("summary_index"),
            content_index=fields.index("content_index"),
            part=fields.parsed("part", part_parser),
        )
    if event_type in DELTA_TYPES:
        return TextDeltaEvent(
            type=event_type,
            sequence_number=seq,
            raw=raw,
            item_id=fields.string("item_id"),
            output_index=fields.index("output_index"),
            summary_index=fields.index("summary_index"),
            content_index=fields.index("content_index"),
            delta=fields.string("delta"),
            obfuscation=fields.string("obfuscation"),
        )
    if event_type == ERROR:
        return ErrorEvent(
            type=event_type,
            sequence_number=seq,
            raw=raw,
            code=fields.string("code"),
            message=fields.string("message"),
            param=fields.string("param"),
        )
    return UnknownEvent(type=event_type, sequence_number=seq, raw=raw)


__all__ = ["decode_event"]
