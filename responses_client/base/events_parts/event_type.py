"""
Wire tag vocabulary for streamed response events.

Tags are kept as plain strings on decoded events; the vocabulary is open and
any tag not listed here decodes into ``UnknownEvent``.
"""
from __future__ import annotations

RESPONSE_CREATED = "response.created"
RESPONSE_IN_PROGRESS = "response.in_progress"
RESPONSE_COMPLETED = "response.completed"
RESPONSE_FAILED = "response.failed"
RESPONSE_INCOMPLETE = "response.incomplete"
OUTPUT_ITEM_ADDED = "response.output_item.added"
OUTPUT_ITEM_DONE = "response.output_item.done"
REASONING_SUMMARY_PART_ADDED = "response.reasoning_summary_part.added"
REASONING_SUMMARY_TEXT_DELTA = "response.reasoning_summary_text.delta"
MESSAGE_CONTENT_PART_ADDED = "response.message_content.part.added"
MESSAGE_CONTENT_TEXT_DELTA = "response.message_content.text.delta"
CONTENT_PART_ADDED = "response.content_part.added"
OUTPUT_TEXT_DELTA = "response.output_text.delta"
ERROR = "error"

SNAPSHOT_TYPES = frozenset(
    {RESPONSE_CREATED, RESPONSE_IN_PROGRESS, RESPONSE_COMPLETED, RESPONSE_FAILED, RESPONSE_INCOMPLETE}
)
OUTPUT_ITEM_TYPES = frozenset({OUTPUT_ITEM_ADDED, OUTPUT_ITEM_DONE})
SUMMARY_PART_TYPES = frozenset({REASONING_SUMMARY_PART_ADDED})
CONTENT_PART_TYPES = frozenset({MESSAGE_CONTENT_PART_ADDED, CONTENT_PART_ADDED})
SUMMARY_DELTA_TYPES = frozenset({REASONING_SUMMARY_TEXT_DELTA})
CONTENT_DELTA_TYPES = frozenset({MESSAGE_CONTENT_TEXT_DELTA, OUTPUT_TEXT_DELTA})
PART_ADDED_TYPES = SUMMARY_PART_TYPES | CONTENT_PART_TYPES
DELTA_TYPES = SUMMARY_DELTA_TYPES | CONTENT_DELTA_TYPES
KNOWN_TYPES = SNAPSHOT_TYPES | OUTPUT_ITEM_TYPES | PART_ADDED_TYPES | DELTA_TYPES | {ERROR}

__all__ = [
    "RESPONSE_CREATED",
    "RESPONSE_IN_PROGRESS",
    "RESPONSE_COMPLETED",
    "RESPONSE_FAILED",
    "RESPONSE_INCOMPLETE",
    "OUTPUT_ITEM_ADDED",
    "OUTPUT_ITEM_DONE",
    "REASONING_SUMMARY_PART_ADDED",
    "REASONING_SUMMARY_TEXT_DELTA",
    "MESSAGE_CONTENT_PART_ADDED",
    "MESSAGE_CONTENT_TEXT_DELTA",
    "CONTENT_PART_ADDED",
    "OUTPUT_TEXT_DELTA",
    "ERROR",
    "SNAPSHOT_TYPES",
    "OUTPUT_ITEM_TYPES",
    "PART_ADDED_TYPES",
    "DELTA_TYPES",
    "SUMMARY_PART_TYPES",
    "CONTENT_PART_TYPES",
    "SUMMARY_DELTA_TYPES",
    "CONTENT_DELTA_TYPES",
    "KNOWN_TYPES",
]
