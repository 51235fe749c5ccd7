"""
Decoded stream events.

``StreamEvent`` is a tagged union over the dataclasses below. Every variant
carries the universal fields (``type``, ``sequence_number``, ``raw``). Tag
specific fields are ``None`` when the wire record did not carry them; they
are never defaulted to empty values.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, Mapping, Optional, Union

from ..models_parts.content_part import ContentPart
from ..models_parts.output_item import OutputItem
from ..models_parts.response import Response
from ..models_parts.summary_part import SummaryPart
from .event_type import SUMMARY_DELTA_TYPES, SUMMARY_PART_TYPES

Channel = Literal["content", "summary"]


@dataclass(frozen=True)
class _EventBase:
    type: str
    sequence_number: int
    raw: Mapping[str, Any] = field(default_factory=dict, repr=False, compare=False)


@dataclass(frozen=True)
class ResponseSnapshotEvent(_EventBase):
    """``response.created`` / ``in_progress`` / ``completed`` / ``failed`` / ``incomplete``."""

    response: Optional[Response] = None


@dataclass(frozen=True)
class OutputItemEvent(_EventBase):
    """``response.output_item.added`` and ``response.output_item.done``."""

    output_index: Optional[int] = None
    item: Optional[OutputItem] = None


@dataclass(frozen=True)
class PartAddedEvent(_EventBase):
    """A new summary part or message content part was opened on an item."""

    item_id: Optional[str] = None
    output_index: Optional[int] = None
    summary_index: Optional[int] = None
    content_index: Optional[int] = None
    part: Optional[Union[ContentPart, SummaryPart]] = None

    @property
    def channel(self) -> Channel:
        return "summary" if self.type in SUMMARY_PART_TYPES else "content"

    @property
    def index(self) -> int:
        """Buffer index for the channel; a missing index means ``0``."""
        value = self.summary_index if self.channel == "summary" else self.content_index
        return 0 if value is None else value


@dataclass(frozen=True)
class TextDeltaEvent(_EventBase):
    """A text fragment for a summary or content buffer.

    ``delta`` is ``None`` when absent and ``""`` for an explicit empty fragment.
    """

    item_id: Optional[str] = None
    output_index: Optional[int] = None
    summary_index: Optional[int] = None
    content_index: Optional[int] = None
    delta: Optional[str] = None
    obfuscation: Optional[str] = None

    @property
    def channel(self) -> Channel:
        return "summary" if self.type in SUMMARY_DELTA_TYPES else "content"

    @property
    def index(self) -> int:
        value = self.summary_index if self.channel == "summary" else self.content_index
        return 0 if value is None else value


@dataclass(frozen=True)
class ErrorEvent(_EventBase):
    """Server-reported stream error (tag ``error``)."""

    code: Optional[str] = None
    message: Optional[str] = None
    param: Optional[str] = None


@dataclass(frozen=True)
class UnknownEvent(_EventBase):
    """Any tag this client does not model; only the universal fields are set."""


StreamEvent = Union[
    ResponseSnapshotEvent,
    OutputItemEvent,
    PartAddedEvent,
    TextDeltaEvent,
    ErrorEvent,
    UnknownEvent,
]

__all__ = [
    "StreamEvent",
    "ResponseSnapshotEvent",
    "OutputItemEvent",
    "PartAddedEvent",
    "TextDeltaEvent",
    "ErrorEvent",
    "UnknownEvent",
    "Channel",
]
