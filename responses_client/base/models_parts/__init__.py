"""Result model parts: output items, content and summary parts, usage, views."""

from .content_part import ContentPart, OutputText, UnknownContentPart, parse_content_part
from .output_item import (
    MessageOutput,
    OutputItem,
    ReasoningOutput,
    UnknownOutputItem,
    parse_output_item,
)
from .response import Response, ResponseStatus
from .summary_part import SummaryPart, SummaryText, UnknownSummaryPart, parse_summary_part
from .usage import Usage, validate_usage
from .views import first_message_text, output_text

__all__ = [
    "ContentPart",
    "OutputText",
    "UnknownContentPart",
    "parse_content_part",
    "OutputItem",
    "MessageOutput",
    "ReasoningOutput",
    "UnknownOutputItem",
    "parse_output_item",
    "Response",
    "ResponseStatus",
    "SummaryPart",
    "SummaryText",
    "UnknownSummaryPart",
    "parse_summary_part",
    "Usage",
    "validate_usage",
    "first_message_text",
    "output_text",
]
