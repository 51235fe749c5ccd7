"""
Stream event public surface.

Re-exports the decoded event variants, the tag vocabulary module and the
decoder from ``responses_client.base.events_parts``.
"""

from .events_parts import event_type as event_types
from .events_parts.decoder import decode_event
from .events_parts.stream_event import (
    ErrorEvent,
    OutputItemEvent,
    PartAddedEvent,
    ResponseSnapshotEvent,
    StreamEvent,
    TextDeltaEvent,
    UnknownEvent,
)

__all__ = [
    "event_types",
    "decode_event",
    "StreamEvent",
    "ResponseSnapshotEvent",
    "OutputItemEvent",
    "PartAddedEvent",
    "TextDeltaEvent",
    "ErrorEvent",
    "UnknownEvent",
]
