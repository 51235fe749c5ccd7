"""Partial-update notifications emitted while a stream is being assembled."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional, Union

from ..events_parts.stream_event import Channel
from ..models_parts.content_part import ContentPart
from ..models_parts.output_item import OutputItem
from ..models_parts.response import Response
from ..models_parts.summary_part import SummaryPart

UpdateKind = Literal["snapshot", "item_added", "item_done", "part_added", "text_delta"]


@dataclass(frozen=True)
class StreamUpdate:
    """One observable step of a stream.

    Fields:
      kind: what changed (see ``UpdateKind``)
      sequence_number / event_type: the triggering wire event
      item_id, output_index: the affected item, when any
      channel, index: ``content`` or ``summary`` buffer and its index
      delta: the fragment only (never the accumulated text); ``None`` when
        the wire event carried no delta
      item, part, response: payloads for item, part and snapshot updates
    """

    kind: UpdateKind
    sequence_number: int
    event_type: str
    item_id: Optional[str] = None
    output_index: Optional[int] = None
    channel: Optional[Channel] = None
    index: Optional[int] = None
    delta: Optional[str] = None
    item: Optional[OutputItem] = None
    part: Optional[Union[ContentPart, SummaryPart]] = None
    response: Optional[Response] = None

    @property
    def is_text(self) -> bool:
        return self.kind == "text_delta"


__all__ = ["StreamUpdate", "UpdateKind"]
